"""Bundled categories and sample data."""

from money_manager.data.seed import (
    DEFAULT_CATEGORIES,
    default_accounts,
    sample_transactions,
    sample_transfers,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "default_accounts",
    "sample_transactions",
    "sample_transfers",
]
