"""
Financial Computation Engine

Pure, synchronous functions that turn a ledger of transactions, accounts
and investments into derived figures. Nothing in this package performs
I/O, logs, or mutates its inputs.
"""

from fintrack.engine.accounts import (
    projected_balance,
    reconcile_account,
    reconcile_accounts,
    signed_amount,
    total_balance,
    update_account_balance,
)
from fintrack.engine.credit_cards import (
    available_limit,
    limit_usage_percentage,
    next_due_date,
    revolving_interest,
)
from fintrack.engine.interest import (
    compound_interest,
    future_value,
    installment_payment,
    present_value,
    remaining_balance,
    simple_interest,
)
from fintrack.engine.investments import (
    allocation_by_type,
    investment_future_value,
    investment_return,
    return_percentage,
    total_investments,
)
from fintrack.engine.reports import (
    build_monthly_report,
    build_summary,
    month_bounds,
)
from fintrack.engine.transactions import (
    future_transactions,
    net_balance,
    outstanding_debt,
    overdue_transactions,
    total_by_type,
    total_debts,
    total_expenses,
    total_income,
    transactions_by_period,
)

__all__ = [
    # Interest/amortization
    "compound_interest",
    "future_value",
    "installment_payment",
    "present_value",
    "remaining_balance",
    "simple_interest",
    # Transactions
    "future_transactions",
    "net_balance",
    "outstanding_debt",
    "overdue_transactions",
    "total_by_type",
    "total_debts",
    "total_expenses",
    "total_income",
    "transactions_by_period",
    # Accounts
    "projected_balance",
    "reconcile_account",
    "reconcile_accounts",
    "signed_amount",
    "total_balance",
    "update_account_balance",
    # Investments
    "allocation_by_type",
    "investment_future_value",
    "investment_return",
    "return_percentage",
    "total_investments",
    # Credit cards
    "available_limit",
    "limit_usage_percentage",
    "next_due_date",
    "revolving_interest",
    # Reports
    "build_monthly_report",
    "build_summary",
    "month_bounds",
]
