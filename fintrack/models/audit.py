"""
Audit Models for Fintrack

Each change to the ledger leaves an audit event behind, so that:
1. A balance change can be traced to the entries that caused it
2. A reconciliation that looks wrong can be replayed from the log
3. The user can inspect the history of their edits

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from fintrack.models.ledger import utcnow


class AuditEventType(str, Enum):
    """Ledger events that end up in the audit trail."""
    LEDGER_LOADED = "ledger_loaded"

    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"

    ACCOUNT_ADDED = "account_added"
    ACCOUNT_UPDATED = "account_updated"
    ACCOUNT_DELETED = "account_deleted"
    ACCOUNT_RECONCILED = "account_reconciled"

    CATEGORY_ADDED = "category_added"
    CATEGORY_UPDATED = "category_updated"
    CATEGORY_DELETED = "category_deleted"
    INVESTMENT_ADDED = "investment_added"
    INVESTMENT_UPDATED = "investment_updated"
    INVESTMENT_DELETED = "investment_deleted"
    CREDIT_CARD_ADDED = "credit_card_added"
    CREDIT_CARD_UPDATED = "credit_card_updated"
    CREDIT_CARD_DELETED = "credit_card_deleted"

    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    One entry of the audit trail.

    ``entity_type``/``entity_id`` point at the ledger record the event is
    about; system level events (loading, storage failures) leave them
    empty.
    """
    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=utcnow,
        description="UTC time the event was recorded"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    entity_type: Optional[str] = Field(
        default=None,
        description="Ledger record kind, e.g. 'transaction' or 'credit_card'"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = Field(
        default=False,
        description="True for edits made by the user, False for automatic upkeep"
    )

    def to_log_dict(self) -> dict:
        """
        Flatten into JSON-safe keyword arguments for the structured logger.

        The event time goes out as ``occurred_at``; the logger stamps its own
        ``timestamp`` key.
        """
        data = self.model_dump(mode="json", exclude={"timestamp"})
        data["occurred_at"] = self.timestamp.isoformat()
        return data


_ENTITY_EVENTS = {
    (entity, action): AuditEventType(f"{entity}_{action}")
    for entity in ("transaction", "account", "category", "investment", "credit_card")
    for action in ("added", "updated", "deleted")
}


class AuditEventBuilder:
    """
    Constructors for the events the ledger service emits.

    Usage:
        event = AuditEventBuilder.entity_changed("transaction", "added", txn.id)
        event = AuditEventBuilder.account_reconciled(account.id, 100.0, 250.0)
    """

    @staticmethod
    def ledger_loaded(counts: dict[str, int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description="Ledger loaded from storage",
            details=counts,
        )

    @staticmethod
    def entity_changed(
        entity_type: str,
        action: str,
        entity_id: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        """
        An add/update/delete of a ledger record.

        Args:
            entity_type: Record kind, one of transaction, account, category,
                investment or credit_card
            action: added, updated or deleted
            entity_id: Id of the changed record
        """
        label = entity_type.replace("_", " ").capitalize()
        return AuditEvent(
            event_type=_ENTITY_EVENTS[(entity_type, action)],
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{label} {action}: {entity_id}",
            details=details or {},
            is_user_action=True,
        )

    @staticmethod
    def account_reconciled(
        account_id: str,
        previous_balance: float,
        new_balance: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_RECONCILED,
            entity_type="account",
            entity_id=account_id,
            description=f"Account reconciled: {previous_balance} -> {new_balance}",
            details={
                "previous_balance": previous_balance,
                "new_balance": new_balance,
            },
        )

    @staticmethod
    def storage_error(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )
