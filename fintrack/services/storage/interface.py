"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON files for a real database later
2. Use in-memory storage for testing
3. Keep the engine and the ledger service decoupled from storage

The store is a key-value store keyed by entity type. It only loads and
saves whole collections; record-level helpers are built on top of those
two operations. Loading performs date deserialization, so the engine
always receives collections with real ``date``/``datetime`` values.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel

from fintrack.models.audit import AuditEvent
from fintrack.models.ledger import (
    Account,
    Category,
    CreditCard,
    Investment,
    Transaction,
)


class EntityType(str, Enum):
    """Collections held by the store."""
    TRANSACTIONS = "transactions"
    ACCOUNTS = "accounts"
    CATEGORIES = "categories"
    INVESTMENTS = "investments"
    CREDIT_CARDS = "credit_cards"


ENTITY_MODELS: dict[EntityType, type[BaseModel]] = {
    EntityType.TRANSACTIONS: Transaction,
    EntityType.ACCOUNTS: Account,
    EntityType.CATEGORIES: Category,
    EntityType.INVESTMENTS: Investment,
    EntityType.CREDIT_CARDS: CreditCard,
}


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation must implement ``load_collection`` and
    ``save_collection``.
    """

    @abstractmethod
    def load_collection(self, entity_type: EntityType) -> list:
        """
        Load every record of one entity type.

        Args:
            entity_type: The collection to load

        Returns:
            Validated model instances; an empty list if nothing was saved yet

        Raises:
            StorageError: If the stored data cannot be read or is malformed
        """
        pass

    @abstractmethod
    def save_collection(
        self,
        entity_type: EntityType,
        records: Sequence[BaseModel],
    ) -> bool:
        """
        Replace a whole collection.

        Args:
            entity_type: The collection to replace
            records: The new contents

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    def get_record(self, entity_type: EntityType, record_id: str) -> Optional[BaseModel]:
        for record in self.load_collection(entity_type):
            if record.id == record_id:
                return record
        return None

    def add_record(self, entity_type: EntityType, record: BaseModel) -> bool:
        """
        Append a record.

        Raises:
            DuplicateError: If a record with the same id already exists
        """
        records = self.load_collection(entity_type)
        if any(r.id == record.id for r in records):
            raise DuplicateError(f"{entity_type.value} record already exists: {record.id}")
        records.append(record)
        return self.save_collection(entity_type, records)

    def update_record(self, entity_type: EntityType, record: BaseModel) -> bool:
        """
        Replace the record with the same id.

        Raises:
            NotFoundError: If no record has this id
        """
        records = self.load_collection(entity_type)
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                return self.save_collection(entity_type, records)
        raise NotFoundError(f"{entity_type.value} record not found: {record.id}")

    def delete_record(self, entity_type: EntityType, record_id: str) -> bool:
        """
        Remove a record by id.

        Returns:
            True if a record was removed, False if none had this id
        """
        records = self.load_collection(entity_type)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        return self.save_collection(entity_type, remaining)


class AuditStorageInterface(ABC):
    """Append-only store for audit events. Events are never edited or removed."""

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Persist one event after the existing ones.

        Returns:
            True once the event is stored

        Raises:
            StorageError: If the event cannot be written
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Read back the latest events, newest first, at most ``limit`` of them.
        """
        pass


class StorageError(Exception):
    """Reading or writing the ledger store failed."""
    pass


class NotFoundError(StorageError):
    """No record with the requested id."""
    pass


class DuplicateError(StorageError):
    """A record with the same id is already stored."""
    pass
