"""
Data Models Package

This package contains all Pydantic models used in the Subscription Tracker.
All data flowing through the ledger must conform to these schemas.
"""

from subtracker.models.subscription import (
    MONTHS_PER_FIVE_YEARS,
    MONTHS_PER_YEAR,
    EntryRow,
    LedgerTotals,
    SubscriptionEntry,
    ValidationErrorKind,
    ValidationIssue,
    ValidationResult,
)
from subtracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "MONTHS_PER_FIVE_YEARS",
    "MONTHS_PER_YEAR",
    "EntryRow",
    "LedgerTotals",
    "SubscriptionEntry",
    "ValidationErrorKind",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
