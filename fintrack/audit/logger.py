"""
Audit Logger

DESIGN DECISION: Audit writes are best effort. A ledger edit that was
already persisted is never rolled back because its audit entry could
not be stored; the failure is logged instead and ``log`` reports False.

structlog is configured here, once, for the whole package. Modules that
only need a logger use ``get_logger``.
"""

from typing import Optional

import structlog

from fintrack.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from fintrack.services.storage import AuditStorageInterface, StorageError


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


# Severity -> stdlib-level method of the bound logger
_LEVEL_METHODS = {
    AuditSeverity.DEBUG: "debug",
    AuditSeverity.INFO: "info",
    AuditSeverity.WARNING: "warning",
    AuditSeverity.ERROR: "error",
    AuditSeverity.CRITICAL: "critical",
}


class AuditLogger:
    """
    Writes ledger audit events.

    Every event goes to the structured log. When an audit store is
    configured the event is appended there as well, which is what the
    user sees as their edit history.
    """

    def __init__(self, storage: Optional[AuditStorageInterface] = None):
        self._storage = storage
        self._logger = structlog.get_logger("fintrack.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Record one event.

        Returns:
            False if the audit store rejected the event, True otherwise
            (including when no store is configured)
        """
        emit = getattr(self._logger, _LEVEL_METHODS[event.severity])
        emit("audit_event", **event.to_log_dict())

        if self._storage is None:
            return True
        try:
            return self._storage.append_event(event)
        except StorageError as e:
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def log_ledger_loaded(self, counts: dict[str, int]) -> None:
        self.log(AuditEventBuilder.ledger_loaded(counts))

    def log_entity_changed(
        self,
        entity_type: str,
        action: str,
        entity_id: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an add/update/delete of a ledger entity."""
        self.log(AuditEventBuilder.entity_changed(
            entity_type=entity_type,
            action=action,
            entity_id=entity_id,
            details=details,
        ))

    def log_account_reconciled(
        self,
        account_id: str,
        previous_balance: float,
        new_balance: float,
    ) -> None:
        self.log(AuditEventBuilder.account_reconciled(
            account_id=account_id,
            previous_balance=previous_balance,
            new_balance=new_balance,
        ))

    def log_storage_error(self, operation: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
        ))


def get_logger(name: str):
    """Module-level structlog logger sharing the audit configuration."""
    return structlog.get_logger(name)
