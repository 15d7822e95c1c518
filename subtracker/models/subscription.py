"""
Core Data Models for Subscription Tracker

These models define the strict schemas for the ledger.
They are designed to:
1. Enforce the entry invariant at runtime (non-empty name, cost > 0)
2. Provide clear validation error messages
3. Be serializable for logging

DESIGN DECISION: Money is held as Decimal, never float.
Totals are sums and fixed multiplications, so Decimal keeps them exact
and independent of the order entries were added in.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


MONTHS_PER_YEAR = 12
MONTHS_PER_FIVE_YEARS = 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class ValidationErrorKind(str, Enum):
    """
    Which input constraint rejected a new subscription.

    The name is checked first, so an entry with both an empty name
    and a bad cost reports EMPTY_NAME.
    """
    EMPTY_NAME = "empty_name"
    INVALID_COST = "invalid_cost"


# =============================================================================
# LEDGER MODELS
# =============================================================================

class SubscriptionEntry(BaseModel):
    """
    One recurring service and its monthly cost.

    Entries are immutable once created. The ledger never edits an entry,
    it only appends, removes or clears.

    entry_id is a stable identity for the row. Two entries may share a
    name; they never share an id.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
    )

    entry_id: UUID = Field(
        default_factory=uuid4,
        description="Unique entry identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Service name"
    )
    cost: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Monthly cost"
    )
    added_at: datetime = Field(
        default_factory=_utcnow,
        description="When the entry was added (UTC)"
    )


class LedgerTotals(BaseModel):
    """
    Aggregate costs derived from the current entries.

    Never stored. Always recomputed by Ledger.compute_totals().
    """
    model_config = ConfigDict(frozen=True)

    monthly: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Sum of all monthly costs"
    )
    annual: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Monthly total times 12"
    )
    five_year: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Monthly total times 60"
    )

    @classmethod
    def from_monthly(cls, monthly: Decimal) -> "LedgerTotals":
        return cls(
            monthly=monthly,
            annual=monthly * MONTHS_PER_YEAR,
            five_year=monthly * MONTHS_PER_FIVE_YEARS,
        )


class EntryRow(BaseModel):
    """A ledger entry prepared for display, with its current position."""
    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=0)
    entry_id: UUID
    name: str
    formatted_cost: str

    @property
    def label(self) -> str:
        return f"{self.name} - {self.formatted_cost}"


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_a_number', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of checking raw add() input.

    parsed_name and parsed_cost are only set for fields that passed.
    """

    parsed_name: Optional[str] = None
    parsed_cost: Optional[Decimal] = None
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        """Input may enter the ledger only when nothing is an error."""
        return not self.has_errors

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        for issue in self.issues:
            if issue.severity == "error":
                return issue
        return None
