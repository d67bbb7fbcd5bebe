"""
Query Models

Filter and sort options for listing transactions.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fintrack.models.ledger import TransactionStatus, TransactionType


class SortKey(str, Enum):
    """Transaction fields a listing can be ordered by."""
    DATE = "date"
    AMOUNT = "amount"
    DESCRIPTION = "description"
    TYPE = "type"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: SortKey = SortKey.DATE
    direction: SortDirection = SortDirection.DESC


class TransactionFilters(BaseModel):
    """
    Criteria for narrowing a transaction listing.

    Every criterion is optional. An empty list means "do not filter on
    this field", not "match nothing". Date and amount bounds are
    inclusive.
    """
    model_config = ConfigDict(frozen=True)

    types: list[TransactionType] = Field(default_factory=list)
    account_ids: list[str] = Field(default_factory=list)
    category_ids: list[str] = Field(default_factory=list)
    statuses: list[TransactionStatus] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    amount_min: Optional[float] = None
    amount_max: Optional[float] = None

    @model_validator(mode='after')
    def validate_ranges(self) -> 'TransactionFilters':
        if self.date_from and self.date_to and self.date_to < self.date_from:
            raise ValueError("date_to cannot be before date_from")
        if (
            self.amount_min is not None
            and self.amount_max is not None
            and self.amount_max < self.amount_min
        ):
            raise ValueError("amount_max cannot be below amount_min")
        return self
