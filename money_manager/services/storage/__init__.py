"""
Storage Services Package

Provides the abstract persistence port and its implementations.
JSON files are the default backend; Google Sheets is optional.
"""

from money_manager.services.storage.interface import (
    COLLECTION_MODELS,
    Collection,
    ConnectionError,
    CorruptDataError,
    LedgerStorageInterface,
    StorageError,
)
from money_manager.services.storage.local import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
)
from money_manager.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsLedgerStorage,
)

__all__ = [
    # Interface
    "COLLECTION_MODELS",
    "Collection",
    "LedgerStorageInterface",
    # Exceptions
    "ConnectionError",
    "CorruptDataError",
    "StorageError",
    # Local implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    # Google Sheets implementation
    "GoogleSheetsClient",
    "GoogleSheetsLedgerStorage",
]
