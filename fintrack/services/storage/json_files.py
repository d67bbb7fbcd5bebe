"""
JSON File Storage Implementation

DESIGN DECISION: Plain JSON files are the default storage backend because:
1. The user can read and back up their data with any tool
2. No database setup required
3. One file per collection maps directly onto the key-value interface

TRADEOFFS:
- Whole collections are rewritten on every save (fine for personal use)
- Single writer only; concurrent processes would overwrite each other

Writes go to a temporary file that is then renamed over the target, so
a crash mid-write leaves the previous version intact.
"""

import json
import os
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fintrack.models.audit import AuditEvent
from fintrack.services.storage.interface import (
    ENTITY_MODELS,
    AuditStorageInterface,
    EntityType,
    LedgerStorageInterface,
    StorageError,
)


# File systems fail transiently (locks held by sync clients, network mounts)
_io_retry = retry(
    retry=retry_if_exception_type(OSError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
    reraise=True,
)


@_io_retry
def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


@_io_retry
def _write_text_atomic(path: Path, text: str) -> None:
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(text, encoding="utf-8")
    os.replace(tmp_path, path)


@_io_retry
def _append_line(path: Path, line: str) -> None:
    with path.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")


class JsonFileStorage(LedgerStorageInterface):
    """
    JSON file implementation of ledger storage.

    Each entity type is stored as a JSON array in
    ``<data_dir>/<entity_type>.json``.
    """

    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)

    def _path(self, entity_type: EntityType) -> Path:
        return self._data_dir / f"{entity_type.value}.json"

    def load_collection(self, entity_type: EntityType) -> list:
        path = self._path(entity_type)
        if not path.exists():
            return []

        try:
            raw = json.loads(_read_text(path))
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON in {path}: {e}")

        if not isinstance(raw, list):
            raise StorageError(f"Expected a JSON array in {path}")

        model = ENTITY_MODELS[entity_type]
        try:
            return [model.model_validate(item) for item in raw]
        except ValidationError as e:
            raise StorageError(f"Invalid {entity_type.value} record in {path}: {e}")

    def save_collection(
        self,
        entity_type: EntityType,
        records: Sequence[BaseModel],
    ) -> bool:
        path = self._path(entity_type)
        payload = [record.model_dump(mode="json") for record in records]
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            _write_text_atomic(path, json.dumps(payload, indent=2, ensure_ascii=False))
        except OSError as e:
            raise StorageError(f"Failed to save {entity_type.value}: {e}")
        return True


class JsonFileAuditStorage(AuditStorageInterface):
    """Append-only audit log, one JSON document per line."""

    def __init__(self, path: Path):
        self._path = Path(path)

    def append_event(self, event: AuditEvent) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            _append_line(self._path, event.model_dump_json())
        except OSError as e:
            raise StorageError(f"Failed to append audit event: {e}")
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        if not self._path.exists():
            return []
        try:
            lines = _read_text(self._path).splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read audit log: {e}")

        events = []
        for line in reversed(lines):
            if not line.strip():
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except ValidationError:
                continue  # Skip torn lines from an interrupted append
            if len(events) >= limit:
                break
        return events
