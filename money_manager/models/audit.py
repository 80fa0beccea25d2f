"""
Audit Models for Money Manager

Every ledger mutation, and every refused mutation, is logged.
This provides:
1. Traceability of balance changes
2. Debugging information when a balance looks wrong
3. A history the user can browse in the UI

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

DESCRIPTION_MAX_LENGTH = 500


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each store operation has its own event type.
    """
    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    EDIT_LOCK_REJECTED = "edit_lock_rejected"

    # Transfers
    TRANSFER_ADDED = "transfer_added"

    # Accounts
    ACCOUNT_ADDED = "account_added"
    ACCOUNT_UPDATED = "account_updated"
    ACCOUNT_DELETED = "account_deleted"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Persistence
    SEED_LOADED = "seed_loaded"
    PERSISTENCE_FAILED = "persistence_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'transfer', 'account')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v: Any) -> Any:
        """Long ids must not make an event unloggable after the fact."""
        if isinstance(v, str) and len(v) > DESCRIPTION_MAX_LENGTH:
            return v[: DESCRIPTION_MAX_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(txn_id, "expense", amount, "cash")
        event = AuditEventBuilder.edit_lock_rejected(txn_id, "delete", created_at)
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        transaction_type: str,
        amount: Decimal,
        account_id: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Recorded {transaction_type} of {amount} on {account_id}",
            details={
                "type": transaction_type,
                "amount": str(amount),
                "account_id": account_id,
            },
        )

    @staticmethod
    def transaction_updated(
        transaction_id: str,
        changed_fields: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction updated: {', '.join(changed_fields) or 'no changes'}",
            details={
                "changed_fields": changed_fields,
            },
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: str,
        amount: Decimal,
        account_id: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction deleted, {amount} reverted on {account_id}",
            details={
                "amount": str(amount),
                "account_id": account_id,
            },
        )

    @staticmethod
    def edit_lock_rejected(
        transaction_id: str,
        operation: str,
        created_at: datetime,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_LOCK_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Refused to {operation} a locked transaction",
            details={
                "operation": operation,
                "created_at": created_at.isoformat(),
            },
        )

    @staticmethod
    def transfer_added(
        transfer_id: str,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_ADDED,
            entity_type="transfer",
            entity_id=transfer_id,
            description=f"Transferred {amount} from {from_account_id} to {to_account_id}",
            details={
                "from_account_id": from_account_id,
                "to_account_id": to_account_id,
                "amount": str(amount),
            },
        )

    @staticmethod
    def account_changed(
        event_type: AuditEventType,
        account_id: str,
        name: str,
    ) -> AuditEvent:
        verb = event_type.value.split("_")[-1]
        return AuditEvent(
            event_type=event_type,
            entity_type="account",
            entity_id=account_id,
            description=f"Account {verb}: {name}",
            details={"name": name},
        )

    @staticmethod
    def validation_failed(
        entity_type: str,
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            description=f"Validation failed with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def seed_loaded(collection: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SEED_LOADED,
            entity_type="collection",
            entity_id=collection,
            description=f"No stored {collection}; loaded {count} sample records",
            details={"count": count},
        )

    @staticmethod
    def persistence_failed(
        collection: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="collection",
            entity_id=collection,
            description=f"Could not persist {collection}",
            error_message=error_message,
        )
