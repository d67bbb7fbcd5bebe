"""
Configuration Management for Fintrack

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here and handed to the
ledger service explicitly. The engine never reads settings itself, so
the same ledger always produces the same figures regardless of the
process environment.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fintrack.models.ledger import Category, TransactionType


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="Salary", color="#22c55e", type=TransactionType.INCOME,
             description="Income from work"),
    Category(id="2", name="Freelance", color="#3b82f6", type=TransactionType.INCOME,
             description="Side jobs"),
    Category(id="3", name="Food", color="#ef4444", type=TransactionType.EXPENSE,
             description="Groceries and eating out"),
    Category(id="4", name="Transport", color="#f59e0b", type=TransactionType.EXPENSE,
             description="Getting around"),
    Category(id="5", name="Housing", color="#8b5cf6", type=TransactionType.EXPENSE,
             description="Rent, condo fees, etc."),
    Category(id="6", name="Health", color="#06b6d4", type=TransactionType.EXPENSE,
             description="Medical expenses"),
    Category(id="7", name="Education", color="#84cc16", type=TransactionType.EXPENSE,
             description="Courses, books, etc."),
    Category(id="8", name="Leisure", color="#f97316", type=TransactionType.EXPENSE,
             description="Entertainment"),
    Category(id="9", name="Loan", color="#dc2626", type=TransactionType.DEBT,
             description="Borrowed money"),
    Category(id="10", name="Financing", color="#991b1b", type=TransactionType.DEBT,
             description="Financed purchases"),
    Category(id="11", name="Credit Card", color="#7c2d12", type=TransactionType.CARD_CHARGE,
             description="Card spending"),
    Category(id="12", name="Investment", color="#059669", type=TransactionType.INVESTMENT,
             description="Money put to work"),
)


class EngineSettings(BaseSettings):
    """Parameters the ledger service passes into engine calls."""

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_ENGINE_",
        extra="ignore"
    )

    upcoming_horizon_days: int = Field(
        default=30,
        ge=0,
        description="How far ahead pending transactions count as upcoming"
    )
    compounding_frequency: int = Field(
        default=12,
        ge=1,
        description="Compounding periods per year for projections"
    )


class StorageSettings(BaseSettings):
    """File storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path(".fintrack"),
        description="Directory holding one JSON document per collection"
    )
    audit_file_name: str = Field(
        default="audit.jsonl",
        description="Name of the append-only audit log inside data_dir"
    )

    @field_validator('audit_file_name')
    @classmethod
    def validate_audit_file_name(cls, v: str) -> str:
        """The audit log must live directly inside data_dir."""
        if Path(v).name != v:
            raise ValueError(f"audit_file_name must be a bare file name, got {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Application-level preferences.

    Read from ``FINTRACK_*`` environment variables and the .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="development, staging or production"
    )
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG level"
    )

    # Handed to the presentation layer, the engine returns raw numbers
    currency: str = Field(
        default="BRL",
        min_length=3,
        max_length=3,
        description="ISO 4217 currency code"
    )
    date_format: str = Field(
        default="dd/MM/yyyy",
        description="Date format used when presenting dates"
    )

    default_categories: list[Category] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES),
        description="Categories seeded into an empty ledger"
    )


class Settings(BaseSettings):
    """
    Root container. Each sub-settings group is read from the
    environment when accessed.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Process-wide settings, built on first use.

    Tests that change the environment call ``get_settings.cache_clear()``.
    """
    return Settings()
