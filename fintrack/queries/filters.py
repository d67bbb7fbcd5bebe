"""
Transaction Query

Filtering, free-text search and ordering for transaction listings.

DESIGN DECISION: Ordering is selected by an enumerated ``SortKey``
rather than by looking up an arbitrary attribute name. Each key maps to
a fixed extractor, so an unknown field fails at model validation instead
of silently comparing ``None`` values.

The comparator keeps the listing's historical tie-break rule: ascending
returns 1 when a > b and -1 otherwise, descending returns 1 when a < b
and -1 otherwise. It never reports equality, so it is not a consistent
total order. Items with equal keys keep no guaranteed relative order.
"""

from functools import cmp_to_key
from typing import Any, Callable, Iterable, Optional

from fintrack.models.ledger import Transaction
from fintrack.models.query import (
    SortDirection,
    SortKey,
    SortOptions,
    TransactionFilters,
)


_SORT_FIELDS: dict[SortKey, Callable[[Transaction], Any]] = {
    SortKey.DATE: lambda t: t.date,
    SortKey.AMOUNT: lambda t: t.amount,
    SortKey.DESCRIPTION: lambda t: t.description,
    SortKey.TYPE: lambda t: t.type.value,
}


def _amount_text(amount: float) -> str:
    # "150" rather than "150.0", as the amount is shown to the user
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def matches_search(transaction: Transaction, search: str) -> bool:
    """Case-insensitive match on description, amount text or any tag."""
    needle = search.lower()
    if needle in transaction.description.lower():
        return True
    if search in _amount_text(transaction.amount):
        return True
    return any(needle in tag.lower() for tag in transaction.tags)


def matches_filters(transaction: Transaction, filters: TransactionFilters) -> bool:
    if filters.types and transaction.type not in filters.types:
        return False
    if filters.account_ids and transaction.account_id not in filters.account_ids:
        return False
    if filters.category_ids and transaction.category_id not in filters.category_ids:
        return False
    if filters.statuses and transaction.status not in filters.statuses:
        return False
    if filters.date_from and transaction.date < filters.date_from:
        return False
    if filters.date_to and transaction.date > filters.date_to:
        return False
    if filters.amount_min is not None and transaction.amount < filters.amount_min:
        return False
    if filters.amount_max is not None and transaction.amount > filters.amount_max:
        return False
    if filters.tags and not any(tag in filters.tags for tag in transaction.tags):
        return False
    return True


def compare_transactions(a: Transaction, b: Transaction, options: SortOptions) -> int:
    extract = _SORT_FIELDS[options.key]
    a_value, b_value = extract(a), extract(b)
    if options.direction == SortDirection.ASC:
        return 1 if a_value > b_value else -1
    return 1 if a_value < b_value else -1


def sort_transactions(
    transactions: Iterable[Transaction],
    options: SortOptions,
) -> list[Transaction]:
    return sorted(
        transactions,
        key=cmp_to_key(lambda a, b: compare_transactions(a, b, options)),
    )


def query_transactions(
    transactions: Iterable[Transaction],
    filters: Optional[TransactionFilters] = None,
    sort: Optional[SortOptions] = None,
    search: Optional[str] = None,
) -> list[Transaction]:
    """
    Filter, search and order a transaction listing.

    Returns a new list; the input collection is left untouched. Without
    ``sort`` the input order is preserved.
    """
    result = list(transactions)
    if search:
        result = [t for t in result if matches_search(t, search)]
    if filters:
        result = [t for t in result if matches_filters(t, filters)]
    if sort:
        result = sort_transactions(result, sort)
    return result
