"""
Investment Evaluator

Allocation, return and projected value of investment positions.
Only active investments count toward totals and allocation.
"""

import math
from collections import defaultdict
from typing import Iterable

from fintrack.engine.interest import DEFAULT_FREQUENCY, future_value
from fintrack.models.ledger import Investment


def total_investments(investments: Iterable[Investment]) -> float:
    return math.fsum(i.current_value for i in investments if i.is_active)


def investment_return(investment: Investment) -> float:
    return investment.current_value - investment.amount


def return_percentage(investment: Investment) -> float:
    """Return over cost basis in percent; 0 for a zero cost basis."""
    if investment.amount == 0:
        return 0.0
    return (investment.current_value - investment.amount) / investment.amount * 100


def investment_future_value(
    investment: Investment,
    months: float,
    frequency: int = DEFAULT_FREQUENCY,
) -> float:
    """Compound the current value forward; unchanged when there is no rate."""
    if not investment.interest_rate:
        return investment.current_value
    return future_value(
        investment.current_value,
        investment.interest_rate,
        months / 12,
        frequency,
    )


def allocation_by_type(investments: Iterable[Investment]) -> dict[str, float]:
    """
    Share of the active portfolio held in each investment type, in percent.

    Returns an empty mapping when the portfolio is worth nothing.
    """
    active = [i for i in investments if i.is_active]
    total = total_investments(active)
    if total == 0:
        return {}

    shares = defaultdict(list)
    for investment in active:
        shares[investment.type.value].append(investment.current_value / total * 100)
    return {key: math.fsum(values) for key, values in shares.items()}
