"""
Ledger Exceptions

Both failure kinds are recoverable input problems. Neither should ever
end a session; the tracker flow catches them and reports back to the user.
"""

from typing import Optional

from subtracker.models.subscription import ValidationErrorKind, ValidationIssue


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class LedgerValidationError(LedgerError):
    """
    A new subscription was rejected by add().

    kind is the first constraint that failed; issues lists all of them.
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        issues: Optional[list[ValidationIssue]] = None,
    ):
        self.kind = kind
        self.issues = issues or []
        messages = "; ".join(issue.message for issue in self.issues)
        super().__init__(messages or kind.value)


class LedgerIndexError(LedgerError, IndexError):
    """
    remove_at() / remove_by_id() could not find the requested entry.

    Also raised when a position no longer holds the entry the caller
    rendered (stale index).
    """
    pass
