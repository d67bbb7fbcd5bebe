"""Transaction query package."""

from fintrack.queries.filters import (
    compare_transactions,
    matches_filters,
    matches_search,
    query_transactions,
    sort_transactions,
)

__all__ = [
    "compare_transactions",
    "matches_filters",
    "matches_search",
    "query_transactions",
    "sort_transactions",
]
