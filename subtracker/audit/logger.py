"""
Audit Logger

DESIGN DECISION: Every ledger mutation is logged, and so is every
rejected attempt. This provides:
1. Traceability within a session
2. Debugging capability when input is rejected
3. User can see the history of their actions

The audit logger:
- Is synchronous; ledger operations run inside a single UI event
- Keeps a bounded in-memory history, nothing is persisted
- Supports correlation IDs to trace related events
"""

from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from subtracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


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


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for display in the session)
    """

    def __init__(self, history_limit: int = 200):
        """
        Initialize audit logger.

        Args:
            history_limit: How many events to keep. Oldest are dropped first.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_limit)
        self._logger = structlog.get_logger("subtracker.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event and remember it."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._history.append(event)

    def recent(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events first."""
        events = list(reversed(self._history))
        if limit is not None:
            events = events[:limit]
        return events

    def clear(self) -> None:
        self._history.clear()

    def log_subscription_added(
        self,
        entry_id: UUID,
        name: str,
        cost: str,
        correlation_id: UUID,
    ) -> None:
        """Log a successful add."""
        event = AuditEventBuilder.subscription_added(
            entry_id=entry_id,
            name=name,
            cost=cost,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_subscription_rejected(
        self,
        kind: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log an add that failed validation."""
        event = AuditEventBuilder.subscription_rejected(
            kind=kind,
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_subscription_removed(
        self,
        entry_id: UUID,
        name: str,
        position: int,
        correlation_id: UUID,
    ) -> None:
        """Log a removal."""
        event = AuditEventBuilder.subscription_removed(
            entry_id=entry_id,
            name=name,
            position=position,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_removal_rejected(
        self,
        position,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a removal with a bad or stale position."""
        event = AuditEventBuilder.removal_rejected(
            position=position,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_ledger_reset(
        self,
        cleared_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a reset."""
        event = AuditEventBuilder.ledger_reset(
            cleared_count=cleared_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., pressing Add).
    """
    return uuid4()
