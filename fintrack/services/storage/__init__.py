"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements JSON files as the backend, but designed to be swappable.
"""

from fintrack.services.storage.interface import (
    ENTITY_MODELS,
    AuditStorageInterface,
    DuplicateError,
    EntityType,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from fintrack.services.storage.json_files import (
    JsonFileAuditStorage,
    JsonFileStorage,
)
from fintrack.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryStorage,
)

__all__ = [
    # Interfaces
    "ENTITY_MODELS",
    "AuditStorageInterface",
    "EntityType",
    "LedgerStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # JSON file implementation
    "JsonFileAuditStorage",
    "JsonFileStorage",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryStorage",
]
