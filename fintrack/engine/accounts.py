"""
Account Reconciler

Derives account balances from the ledger.

An account's stored ``balance`` is only a cache. ``update_account_balance``
recomputes it from ``initial_balance`` plus every completed transaction
posted to the account, and ``reconcile_account`` returns a copy of the
account carrying that figure.

Transfers are not folded into reconciliation: a transfer needs a paired
destination account the transaction model does not carry, so no sign
is guessed for it.
"""

import math
from datetime import date, datetime, timezone
from typing import Iterable, Optional, Sequence

from fintrack.engine.transactions import DEFAULT_HORIZON_DAYS, future_transactions
from fintrack.models.ledger import (
    Account,
    Transaction,
    TransactionStatus,
    TransactionType,
)

INFLOW_TYPES = frozenset({TransactionType.INCOME, TransactionType.CREDIT})
OUTFLOW_TYPES = frozenset({
    TransactionType.EXPENSE,
    TransactionType.DEBT,
    TransactionType.CARD_CHARGE,
    TransactionType.INVESTMENT,
})


def signed_amount(transaction: Transaction) -> float:
    """Effect of a transaction on its account's balance; 0 for transfers."""
    if transaction.type in INFLOW_TYPES:
        return transaction.amount
    if transaction.type in OUTFLOW_TYPES:
        return -transaction.amount
    return 0.0


def update_account_balance(account: Account, transactions: Iterable[Transaction]) -> float:
    """Recompute the balance from the initial balance and completed transactions."""
    return account.initial_balance + math.fsum(
        signed_amount(t)
        for t in transactions
        if t.account_id == account.id and t.status == TransactionStatus.COMPLETED
    )


def reconcile_account(
    account: Account,
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> Account:
    """
    Return a copy of ``account`` whose balance matches the ledger.

    The input is returned unchanged when it is already consistent.
    """
    balance = update_account_balance(account, transactions)
    if balance == account.balance:
        return account
    return account.model_copy(update={
        "balance": balance,
        "updated_at": now or datetime.now(timezone.utc),
    })


def reconcile_accounts(
    accounts: Iterable[Account],
    transactions: Sequence[Transaction],
) -> list[Account]:
    return [reconcile_account(a, transactions) for a in accounts]


def projected_balance(
    account: Account,
    transactions: Iterable[Transaction],
    days: int = DEFAULT_HORIZON_DAYS,
    today: Optional[date] = None,
) -> float:
    """
    Forward projection of ``account.balance``.

    Starts from the current (already reconciled) balance and applies the
    pending transactions due within ``days``. It does not recompute from
    the initial balance.
    """
    upcoming = future_transactions(transactions, days, today)
    return account.balance + math.fsum(
        signed_amount(t) for t in upcoming if t.account_id == account.id
    )


def total_balance(accounts: Iterable[Account]) -> float:
    return math.fsum(a.balance for a in accounts if a.is_active)
