"""
Summary and Report Builder

Composes the aggregator, reconciler and investment evaluator into the
two output aggregates. Both are recomputed from their inputs on every
call; nothing is cached between calls.
"""

import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from fintrack.engine.accounts import total_balance
from fintrack.engine.investments import total_investments
from fintrack.engine.transactions import (
    DEFAULT_HORIZON_DAYS,
    future_transactions,
    overdue_transactions,
    total_debts,
    total_expenses,
    total_income,
    transactions_by_period,
)
from fintrack.models.ledger import Account, Investment, Transaction
from fintrack.models.reports import FinancialSummary, MonthlyReport


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def build_summary(
    transactions: Sequence[Transaction],
    accounts: Iterable[Account],
    investments: Iterable[Investment],
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    today: Optional[date] = None,
) -> FinancialSummary:
    income = total_income(transactions)
    expenses = total_expenses(transactions)

    return FinancialSummary(
        total_balance=total_balance(accounts),
        total_income=income,
        total_expenses=expenses,
        total_investments=total_investments(investments),
        total_debts=total_debts(transactions),
        net_balance=income - expenses,
        upcoming_transactions=future_transactions(transactions, horizon_days, today),
        overdue_transactions=overdue_transactions(transactions, today),
    )


def build_monthly_report(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    month: int,
    year: int,
) -> MonthlyReport:
    """
    Totals for one calendar month.

    The category breakdown sums every in-month transaction regardless of
    type or status, unlike the income/expense totals which count
    completed transactions only. Account balances are the current cached
    balances, not balances as of the start of the month.
    """
    start, end = month_bounds(year, month)
    monthly = transactions_by_period(transactions, start, end)

    income = total_income(monthly)
    expenses = total_expenses(monthly)

    amounts_by_category = defaultdict(list)
    for t in monthly:
        amounts_by_category[t.category_id].append(t.amount)

    return MonthlyReport(
        month=month,
        year=year,
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        category_breakdown={
            category_id: math.fsum(amounts)
            for category_id, amounts in amounts_by_category.items()
        },
        account_balances={a.id: a.balance for a in accounts},
    )
