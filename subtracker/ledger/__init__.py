"""Subscription ledger package."""

from subtracker.ledger.errors import (
    LedgerError,
    LedgerIndexError,
    LedgerValidationError,
)
from subtracker.ledger.ledger import Ledger

__all__ = [
    "Ledger",
    # Exceptions
    "LedgerError",
    "LedgerIndexError",
    "LedgerValidationError",
]
