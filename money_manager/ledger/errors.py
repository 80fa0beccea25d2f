"""Ledger exceptions."""

from money_manager.models.validation import ValidationResult


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class LedgerValidationError(LedgerError):
    """A draft references accounts or categories the ledger doesn't know."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary())


class AccountInUseError(LedgerError):
    """The account still has transactions or transfers referencing it."""
    pass
