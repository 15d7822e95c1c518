"""
Tracker Flow for Subscription Tracker

This module ties the ledger, validation, settings and audit trail
together into the operations the page calls:
1. Add (raw text → validate → append)
2. Delete (rendered position → remove)
3. Reset (clear everything)
4. Display (rows and formatted totals)

DESIGN DECISION: The page never talks to the Ledger directly, and it
never catches ledger exceptions itself. Every user intent comes back
as a plain result the page can show: (ok, message) or a bool.
Rejected input leaves the ledger untouched and is reported, not fixed.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union
from uuid import UUID

from subtracker.audit import AuditLogger, create_correlation_id
from subtracker.config import AppSettings, get_settings
from subtracker.ledger import Ledger, LedgerIndexError, LedgerValidationError
from subtracker.models.subscription import EntryRow, LedgerTotals


def format_currency(
    amount: Union[Decimal, float, int],
    symbol: str = "$",
    decimal_places: int = 2,
) -> str:
    """
    Format an amount for display, e.g. 19.5 → "$19.50".

    Fixed decimal places, half-up rounding, no thousands separators.
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    quantum = Decimal(1).scaleb(-decimal_places)
    with localcontext() as ctx:
        # quantize fails when the result needs more digits than the context has
        ctx.prec = max(ctx.prec, value.adjusted() + decimal_places + 2)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{symbol}{rounded:f}"


class SubscriptionTracker:
    """
    One user session's view of the ledger.

    Holds the single Ledger instance for the session's lifetime.
    Each public method is one user intent and runs to completion.
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._settings = settings or get_settings().app
        self._ledger = ledger if ledger is not None else Ledger()
        self._audit_logger = audit_logger or AuditLogger(
            history_limit=self._settings.audit_history_limit
        )

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def invalid_input_message(self) -> str:
        symbol = self._settings.currency_symbol
        return (
            "Please enter a valid service name and a monthly cost "
            f"greater than {symbol}0."
        )

    def format_currency(self, amount: Union[Decimal, float, int]) -> str:
        return format_currency(
            amount,
            symbol=self._settings.currency_symbol,
            decimal_places=self._settings.display_decimal_places,
        )

    def add_subscription(
        self,
        name_text,
        cost_text,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[bool, str]:
        """
        Add a subscription from raw input.

        Returns:
            (ok, message). On failure the message is meant for the user
            and the ledger is unchanged.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            entry = self._ledger.add(name_text, cost_text)
        except LedgerValidationError as e:
            self._audit_logger.log_subscription_rejected(
                kind=e.kind.value,
                issues=[issue.model_dump() for issue in e.issues],
                correlation_id=correlation_id,
            )
            return False, self.invalid_input_message

        formatted = self.format_currency(entry.cost)
        self._audit_logger.log_subscription_added(
            entry_id=entry.entry_id,
            name=entry.name,
            cost=formatted,
            correlation_id=correlation_id,
        )
        return True, f"Added {entry.name} ({formatted} per month)"

    def delete_subscription(
        self,
        index,
        entry_id: Optional[UUID] = None,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Remove the entry at a rendered position.

        Pass the entry_id that was rendered at that position to refuse
        a removal when the list has changed since it was drawn.

        Returns:
            True if an entry was removed. A bad or stale position is
            logged and ignored.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            entry = self._ledger.remove_at(index, expected_id=entry_id)
        except LedgerIndexError as e:
            self._audit_logger.log_removal_rejected(
                position=index,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            return False

        self._audit_logger.log_subscription_removed(
            entry_id=entry.entry_id,
            name=entry.name,
            position=index,
            correlation_id=correlation_id,
        )
        return True

    def reset_all(self, correlation_id: Optional[UUID] = None) -> None:
        """Empty the ledger. No confirmation, cannot be undone."""
        correlation_id = correlation_id or create_correlation_id()
        cleared = len(self._ledger)
        self._ledger.reset()
        self._audit_logger.log_ledger_reset(
            cleared_count=cleared,
            correlation_id=correlation_id,
        )

    def totals(self) -> LedgerTotals:
        return self._ledger.compute_totals()

    def formatted_totals(self) -> dict[str, str]:
        """Totals as display strings, keyed monthly / annual / five_year."""
        totals = self.totals()
        return {
            "monthly": self.format_currency(totals.monthly),
            "annual": self.format_currency(totals.annual),
            "five_year": self.format_currency(totals.five_year),
        }

    def rows(self) -> list[EntryRow]:
        """One display row per entry, in ledger order."""
        return [
            EntryRow(
                position=position,
                entry_id=entry.entry_id,
                name=entry.name,
                formatted_cost=self.format_currency(entry.cost),
            )
            for position, entry in enumerate(self._ledger.entries)
        ]


def create_tracker(settings: Optional[AppSettings] = None) -> SubscriptionTracker:
    """
    Factory function to create a tracker for a new session.

    Args:
        settings: Override settings (tests). Defaults to cached settings.
    """
    settings = settings or get_settings().app
    return SubscriptionTracker(
        ledger=Ledger(),
        audit_logger=AuditLogger(history_limit=settings.audit_history_limit),
        settings=settings,
    )
