"""
Ledger Models for Fintrack

These models define the entities the computation engine consumes:
transactions, accounts, investments, categories and credit cards.

They are owned by the storage and service layers. The engine only reads
them and produces derived values; it never creates, mutates or persists
them.

DESIGN DECISION: Models are frozen. Engine functions return new values
and the ledger service produces updated copies with ``model_copy``, so
a collection handed to the engine cannot change underneath it.

DESIGN DECISION: Monetary values are plain floats. The engine's
formulas are defined over IEEE-754 doubles and presentation rounding
belongs to the caller.
"""

import datetime as dt
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


def new_id() -> str:
    """Mint a unique string identifier for a new entity."""
    return uuid4().hex


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Transaction taxonomy.

    Categories mirror this taxonomy so a category can be offered only
    for the transaction types it applies to.
    """
    INCOME = "income"
    EXPENSE = "expense"
    DEBT = "debt"
    CREDIT = "credit"
    INVESTMENT = "investment"
    CARD_CHARGE = "card_charge"
    TRANSFER = "transfer"


class TransactionStatus(str, Enum):
    """
    Transaction lifecycle status.

    Only COMPLETED transactions count toward realized totals and account
    balances. PENDING transactions feed projections and overdue lists.
    """
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELED = "canceled"


class RecurrenceFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"
    INVESTMENT = "investment"
    CREDIT_CARD = "credit_card"


class InvestmentType(str, Enum):
    FIXED_INCOME = "fixed_income"
    VARIABLE_INCOME = "variable_income"
    FUNDS = "funds"
    CRYPTO = "crypto"
    OTHER = "other"


# =============================================================================
# REFERENCE DATA
# =============================================================================

class Category(BaseModel):
    """
    Grouping key for transactions.

    Has no computed behavior of its own.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )
    color: str = Field(
        default="#6b7280",
        pattern=r"^#[0-9a-fA-F]{6}$",
        description="Hex color used by the presentation layer"
    )
    type: TransactionType = Field(
        ...,
        description="Transaction type this category applies to"
    )
    description: Optional[str] = Field(default=None, max_length=500)


# =============================================================================
# CORE LEDGER MODELS
# =============================================================================

class Recurrence(BaseModel):
    """How often a transaction repeats, and until when."""
    model_config = ConfigDict(frozen=True)

    frequency: RecurrenceFrequency
    end_date: Optional[dt.date] = None


class Transaction(BaseModel):
    """
    A single ledger entry.

    ``amount`` is always a non-negative magnitude; its sign is implied
    by ``type``. Installment fields are present only on installment
    bearing debt/credit entries.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(default_factory=new_id)
    type: TransactionType
    status: TransactionStatus = Field(default=TransactionStatus.PENDING)
    description: str = Field(default="", max_length=200)
    amount: float = Field(
        ...,
        ge=0,
        description="Monetary magnitude"
    )
    account_id: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)

    date: dt.date = Field(
        ...,
        description="Date the transaction was booked"
    )
    scheduled_date: Optional[dt.date] = Field(
        default=None,
        description="Due date for pending transactions, if different from date"
    )
    recurrence: Optional[Recurrence] = None

    # Installment-bearing debt/credit
    interest_rate: Optional[float] = Field(
        default=None,
        ge=0,
        description="Interest rate in percent"
    )
    installments: Optional[int] = Field(default=None, ge=1)
    current_installment: Optional[int] = Field(default=None, ge=1)

    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=1000)

    created_at: dt.datetime = Field(default_factory=utcnow)
    updated_at: dt.datetime = Field(default_factory=utcnow)

    @property
    def effective_date(self) -> dt.date:
        """The date a pending transaction is due: scheduled date if set."""
        return self.scheduled_date or self.date

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @model_validator(mode='after')
    def validate_installments(self) -> 'Transaction':
        """Validate installment and recurrence relationships."""
        if self.installments is not None:
            if self.current_installment is None:
                raise ValueError("current_installment is required when installments is set")
            if self.current_installment > self.installments:
                raise ValueError("current_installment cannot exceed installments")
        elif self.current_installment is not None:
            raise ValueError("current_installment requires installments")

        if self.recurrence and self.recurrence.end_date:
            if self.recurrence.end_date < self.date:
                raise ValueError("Recurrence end date cannot be before transaction date")

        return self


class Account(BaseModel):
    """
    A money container transactions are posted against.

    ``initial_balance`` is authoritative. ``balance`` is the value the
    last reconciliation produced and may be stale after any ledger
    mutation; obtain a trustworthy figure from the reconciler.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType = Field(default=AccountType.CHECKING)
    balance: float = Field(
        default=0.0,
        description="Cached balance as of the last reconciliation"
    )
    initial_balance: float = Field(
        default=0.0,
        description="Opening balance the ledger is applied to"
    )
    description: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = True

    created_at: dt.datetime = Field(default_factory=utcnow)
    updated_at: dt.datetime = Field(default_factory=utcnow)


class Investment(BaseModel):
    """An investment position: cost basis versus current market value."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=100)
    type: InvestmentType
    amount: float = Field(
        ...,
        ge=0,
        description="Cost basis"
    )
    current_value: float = Field(..., ge=0)
    purchase_date: dt.date
    interest_rate: Optional[float] = Field(
        default=None,
        ge=0,
        description="Annual interest rate in percent, for fixed income"
    )
    maturity_date: Optional[dt.date] = None
    account_id: str = Field(..., min_length=1)
    description: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = True

    created_at: dt.datetime = Field(default_factory=utcnow)
    updated_at: dt.datetime = Field(default_factory=utcnow)

    @model_validator(mode='after')
    def validate_dates(self) -> 'Investment':
        if self.maturity_date and self.maturity_date < self.purchase_date:
            raise ValueError("Maturity date cannot be before purchase date")
        return self


class CreditCard(BaseModel):
    """
    A credit card with its limit and billing cycle.

    ``due_day`` and ``closing_day`` are days of the month.
    ``interest_rate`` is the monthly revolving rate in percent.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=100)
    limit: float = Field(..., ge=0)
    used_limit: float = Field(default=0.0, ge=0)
    due_day: int = Field(..., ge=1, le=31)
    closing_day: int = Field(..., ge=1, le=31)
    interest_rate: float = Field(default=0.0, ge=0)
    annual_fee: Optional[float] = Field(default=None, ge=0)
    account_id: str = Field(..., min_length=1)
    is_active: bool = True

    created_at: dt.datetime = Field(default_factory=utcnow)
    updated_at: dt.datetime = Field(default_factory=utcnow)
