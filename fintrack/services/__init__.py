"""Services package."""

from fintrack.services.storage import (
    AuditStorageInterface,
    DuplicateError,
    EntityType,
    InMemoryAuditStorage,
    InMemoryStorage,
    JsonFileAuditStorage,
    JsonFileStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "DuplicateError",
    "EntityType",
    "InMemoryAuditStorage",
    "InMemoryStorage",
    "JsonFileAuditStorage",
    "JsonFileStorage",
    "LedgerStorageInterface",
    "NotFoundError",
    "StorageError",
]
