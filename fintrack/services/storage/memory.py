"""
In-Memory Storage

Keeps serialized collections in a dict. Records are dumped to JSON-mode
dicts on save and re-validated on load, so callers see the same date
materialization the file store performs.
"""

from typing import Sequence

from pydantic import BaseModel

from fintrack.models.audit import AuditEvent
from fintrack.services.storage.interface import (
    ENTITY_MODELS,
    AuditStorageInterface,
    EntityType,
    LedgerStorageInterface,
)


class InMemoryStorage(LedgerStorageInterface):

    def __init__(self):
        self._collections: dict[EntityType, list[dict]] = {}

    def load_collection(self, entity_type: EntityType) -> list:
        model = ENTITY_MODELS[entity_type]
        return [model.model_validate(item) for item in self._collections.get(entity_type, [])]

    def save_collection(
        self,
        entity_type: EntityType,
        records: Sequence[BaseModel],
    ) -> bool:
        self._collections[entity_type] = [r.model_dump(mode="json") for r in records]
        return True


class InMemoryAuditStorage(AuditStorageInterface):

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
