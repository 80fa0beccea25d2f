"""Reference validation package."""

from money_manager.validation.validator import LedgerValidator

__all__ = ["LedgerValidator"]
