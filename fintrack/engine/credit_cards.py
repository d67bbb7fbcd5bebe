"""
Credit Card Calculator

Limit usage, revolving interest and billing dates for credit cards.
"""

import calendar
from datetime import date
from typing import Optional

from fintrack.models.ledger import CreditCard


def available_limit(card: CreditCard) -> float:
    return card.limit - card.used_limit


def limit_usage_percentage(card: CreditCard) -> float:
    if card.limit == 0:
        return 0.0
    return card.used_limit / card.limit * 100


def revolving_interest(card: CreditCard, amount: float, days: int) -> float:
    """Interest on a revolving balance, using a daily rate of monthly rate / 30."""
    daily_rate = card.interest_rate / 100 / 30
    return amount * daily_rate * days


def _day_in_month(year: int, month: int, day: int) -> date:
    # Clamp e.g. day 31 to the last day of shorter months.
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


def next_due_date(card: CreditCard, today: Optional[date] = None) -> date:
    """This month's due date, or next month's once this one is reached."""
    today = today or date.today()
    due = _day_in_month(today.year, today.month, card.due_day)
    if due <= today:
        if today.month == 12:
            due = _day_in_month(today.year + 1, 1, card.due_day)
        else:
            due = _day_in_month(today.year, today.month + 1, card.due_day)
    return due
