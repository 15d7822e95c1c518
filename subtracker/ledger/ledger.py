"""
Subscription Ledger

The in-memory, ordered list of subscriptions and its totals.

GUARANTEES:
- Every stored entry has a non-empty name and a cost > 0
- A failed operation leaves the ledger exactly as it was
- Totals are derived on demand, never cached

Removal is position-based, as the list is rendered by position.
Callers that rendered the list earlier can pass the entry_id they saw
so that a shifted position fails instead of removing another entry.
"""

from decimal import Decimal
from typing import Iterator, Optional
from uuid import UUID

from subtracker.ledger.errors import LedgerIndexError, LedgerValidationError
from subtracker.models.subscription import (
    LedgerTotals,
    SubscriptionEntry,
    ValidationErrorKind,
)
from subtracker.validation import SubscriptionValidator


class Ledger:
    """
    An ordered sequence of subscription entries.

    One instance is owned by one session. It is not thread-safe and
    does not need to be: the UI delivers one event at a time.
    """

    def __init__(self, validator: Optional[SubscriptionValidator] = None):
        self._validator = validator or SubscriptionValidator()
        self._entries: list[SubscriptionEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SubscriptionEntry]:
        return iter(tuple(self._entries))

    @property
    def entries(self) -> tuple[SubscriptionEntry, ...]:
        """Snapshot of the entries in insertion order."""
        return tuple(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def add(self, name, cost) -> SubscriptionEntry:
        """
        Append a new subscription.

        Args:
            name: Service name; surrounding whitespace is removed
            cost: Monthly cost as a number or numeric text

        Returns:
            The created entry

        Raises:
            LedgerValidationError: If the name is empty or the cost is not
                a finite number above zero
        """
        result = self._validator.validate(name, cost)
        if not result.is_valid:
            first = result.first_error
            kind = (
                ValidationErrorKind.EMPTY_NAME
                if first is not None and first.field == "name"
                else ValidationErrorKind.INVALID_COST
            )
            raise LedgerValidationError(kind, result.issues)

        entry = SubscriptionEntry(name=result.parsed_name, cost=result.parsed_cost)
        self._entries.append(entry)
        return entry

    def _check_position(self, index) -> int:
        # bool is an int subclass; negative positions do not wrap around
        if isinstance(index, bool) or not isinstance(index, int):
            raise LedgerIndexError(f"Position must be an integer, got {index!r}")
        if not 0 <= index < len(self._entries):
            raise LedgerIndexError(
                f"Position {index} is out of range for {len(self._entries)} entries"
            )
        return index

    def remove_at(self, index, expected_id: Optional[UUID] = None) -> SubscriptionEntry:
        """
        Remove the entry at a position. Later entries shift down by one.

        Args:
            index: Position in [0, len(ledger))
            expected_id: entry_id the caller believes is at that position

        Returns:
            The removed entry

        Raises:
            LedgerIndexError: If the position is not valid, or it no longer
                holds the expected entry
        """
        position = self._check_position(index)
        entry = self._entries[position]
        if expected_id is not None and entry.entry_id != expected_id:
            raise LedgerIndexError(
                f"Position {position} no longer holds entry {expected_id}"
            )
        del self._entries[position]
        return entry

    def index_of(self, entry_id: UUID) -> int:
        """Current position of an entry, by id."""
        for position, entry in enumerate(self._entries):
            if entry.entry_id == entry_id:
                return position
        raise LedgerIndexError(f"No entry with id {entry_id}")

    def remove_by_id(self, entry_id: UUID) -> SubscriptionEntry:
        """Remove an entry by its stable id, wherever it currently is."""
        return self.remove_at(self.index_of(entry_id))

    def reset(self) -> None:
        """Remove every entry."""
        self._entries = []

    def compute_totals(self) -> LedgerTotals:
        """
        Derive monthly, annual and five-year totals.

        Decimal addition is exact, so the result does not depend on the
        order entries were added in.
        """
        monthly = sum((entry.cost for entry in self._entries), Decimal("0"))
        return LedgerTotals.from_monthly(monthly)
