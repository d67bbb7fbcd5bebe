"""
Transaction Aggregator

Stateless reducers over a transaction collection. Results never depend
on the order of the collection: sums use ``math.fsum``, which is exact
up to the final rounding and therefore permutation-invariant.

Realized totals (income, expenses) count COMPLETED transactions only.
Liabilities count every debt that is not CANCELED.
"""

import math
from datetime import date, timedelta
from typing import Iterable, Optional

from fintrack.engine.interest import remaining_balance
from fintrack.models.ledger import Transaction, TransactionStatus, TransactionType

DEFAULT_HORIZON_DAYS = 30

EXPENSE_TYPES = frozenset({TransactionType.EXPENSE, TransactionType.CARD_CHARGE})


def _completed_total(transactions: Iterable[Transaction], types: frozenset) -> float:
    return math.fsum(
        t.amount
        for t in transactions
        if t.type in types and t.status == TransactionStatus.COMPLETED
    )


def total_by_type(transactions: Iterable[Transaction], type: TransactionType) -> float:
    return _completed_total(transactions, frozenset({type}))


def total_income(transactions: Iterable[Transaction]) -> float:
    return _completed_total(transactions, frozenset({TransactionType.INCOME}))


def total_expenses(transactions: Iterable[Transaction]) -> float:
    """Completed expenses, card charges included."""
    return _completed_total(transactions, EXPENSE_TYPES)


def outstanding_debt(transaction: Transaction) -> float:
    """
    What a debt still contributes to liabilities.

    Installment debts with a rate count at their remaining balance after
    ``current_installment - 1`` paid installments; anything else counts
    at face value.
    """
    if (
        transaction.installments
        and transaction.current_installment
        and transaction.interest_rate
    ):
        return remaining_balance(
            transaction.amount,
            transaction.interest_rate,
            transaction.installments,
            transaction.current_installment - 1,
        )
    return transaction.amount


def total_debts(transactions: Iterable[Transaction]) -> float:
    return math.fsum(
        outstanding_debt(t)
        for t in transactions
        if t.type == TransactionType.DEBT and t.status != TransactionStatus.CANCELED
    )


def net_balance(transactions: Iterable[Transaction]) -> float:
    transactions = list(transactions)
    return total_income(transactions) - total_expenses(transactions)


def transactions_by_period(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
) -> list[Transaction]:
    """Transactions booked between ``start`` and ``end``, both inclusive."""
    return [t for t in transactions if start <= t.date <= end]


def future_transactions(
    transactions: Iterable[Transaction],
    days: int = DEFAULT_HORIZON_DAYS,
    today: Optional[date] = None,
) -> list[Transaction]:
    """Pending transactions due between today and today + ``days``, inclusive."""
    today = today or date.today()
    horizon = today + timedelta(days=days)
    return [
        t for t in transactions
        if t.status == TransactionStatus.PENDING and today <= t.effective_date <= horizon
    ]


def overdue_transactions(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[Transaction]:
    """Pending transactions whose due date is strictly before today."""
    today = today or date.today()
    return [
        t for t in transactions
        if t.status == TransactionStatus.PENDING and t.effective_date < today
    ]
