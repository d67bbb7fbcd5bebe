"""
Data Models Package

This package contains all Pydantic models used in Fintrack.
All data flowing into and out of the engine conforms to these schemas.
"""

from fintrack.models.ledger import (
    Account,
    AccountType,
    Category,
    CreditCard,
    Investment,
    InvestmentType,
    Recurrence,
    RecurrenceFrequency,
    Transaction,
    TransactionStatus,
    TransactionType,
    new_id,
)
from fintrack.models.query import (
    SortDirection,
    SortKey,
    SortOptions,
    TransactionFilters,
)
from fintrack.models.reports import (
    FinancialSummary,
    MonthlyReport,
)
from fintrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Account",
    "AccountType",
    "Category",
    "CreditCard",
    "Investment",
    "InvestmentType",
    "Recurrence",
    "RecurrenceFrequency",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "new_id",
    # Query models
    "SortDirection",
    "SortKey",
    "SortOptions",
    "TransactionFilters",
    # Report models
    "FinancialSummary",
    "MonthlyReport",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
