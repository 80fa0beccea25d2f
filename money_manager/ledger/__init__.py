"""Ledger package: the store, its edit-lock policy and its queries."""

from money_manager.ledger.edit_lock import EDIT_WINDOW_HOURS, can_edit
from money_manager.ledger.errors import (
    AccountInUseError,
    LedgerError,
    LedgerValidationError,
)
from money_manager.ledger.store import LedgerStore

__all__ = [
    "EDIT_WINDOW_HOURS",
    "AccountInUseError",
    "LedgerError",
    "LedgerStore",
    "LedgerValidationError",
    "can_edit",
]
