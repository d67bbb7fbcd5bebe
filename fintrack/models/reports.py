"""
Report Models

Output aggregates produced by the summary/report builder. They are
never persisted and never mutated in place: every call recomputes them
from the current ledger.
"""

from pydantic import BaseModel, ConfigDict, Field

from fintrack.models.ledger import Transaction


class FinancialSummary(BaseModel):
    """Point-in-time view over the whole ledger."""
    model_config = ConfigDict(frozen=True)

    total_balance: float = Field(
        ...,
        description="Sum of cached balances of active accounts"
    )
    total_income: float
    total_expenses: float
    total_investments: float
    total_debts: float = Field(
        ...,
        description="Outstanding liabilities, installment debts at remaining balance"
    )
    net_balance: float = Field(
        ...,
        description="total_income - total_expenses"
    )
    upcoming_transactions: list[Transaction] = Field(default_factory=list)
    overdue_transactions: list[Transaction] = Field(default_factory=list)


class MonthlyReport(BaseModel):
    """Totals and breakdowns for one calendar month."""
    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    year: int
    total_income: float
    total_expenses: float
    balance: float
    category_breakdown: dict[str, float] = Field(
        default_factory=dict,
        description="category id -> summed amount of every in-month transaction"
    )
    account_balances: dict[str, float] = Field(
        default_factory=dict,
        description="account id -> current cached balance"
    )
