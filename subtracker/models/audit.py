"""
Audit Models for Subscription Tracker

Every user action on the ledger is recorded as an audit event.
This provides:
1. Traceability of what was added, removed or cleared in a session
2. Debugging information when an input is rejected
3. A short history the page can show back to the user

DESIGN DECISION: Audit events are append-only. We never modify them.
Nothing here is persisted; events live as long as the session.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger mutations
    SUBSCRIPTION_ADDED = "subscription_added"
    SUBSCRIPTION_REJECTED = "subscription_rejected"
    SUBSCRIPTION_REMOVED = "subscription_removed"
    REMOVAL_REJECTED = "removal_rejected"
    LEDGER_RESET = "ledger_reset"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every ledger mutation, and every rejected attempt at one,
    creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
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
        description="Type of entity (e.g., 'subscription', 'ledger')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one user action"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )

    # Additional data (event-specific)
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

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
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.subscription_added(entry_id, "Netflix", "15.99", correlation_id)
        event = AuditEventBuilder.ledger_reset(3, correlation_id)
    """

    @staticmethod
    def subscription_added(
        entry_id: UUID,
        name: str,
        cost: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_ADDED,
            entity_type="subscription",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"Subscription added: {name} - {cost}",
            details={
                "name": name,
                "cost": cost,
            },
            is_user_action=True,
        )

    @staticmethod
    def subscription_rejected(
        kind: str,
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="subscription",
            correlation_id=correlation_id,
            description=f"Subscription rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            error_code=kind,
            is_user_action=True,
        )

    @staticmethod
    def subscription_removed(
        entry_id: UUID,
        name: str,
        position: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_REMOVED,
            entity_type="subscription",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"Subscription removed: {name}",
            details={
                "name": name,
                "position": position,
            },
            is_user_action=True,
        )

    @staticmethod
    def removal_rejected(
        position: Any,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOVAL_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="subscription",
            correlation_id=correlation_id,
            description=f"Removal rejected at position {position!r}",
            details={
                "position": repr(position),
            },
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def ledger_reset(
        cleared_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_RESET,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Ledger reset, {cleared_count} entries cleared",
            details={
                "cleared_count": cleared_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
