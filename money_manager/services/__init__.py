"""Services package."""

from money_manager.services.remote import MoneyManagerApiClient, RemoteApiError
from money_manager.services.storage import (
    Collection,
    ConnectionError,
    CorruptDataError,
    GoogleSheetsClient,
    GoogleSheetsLedgerStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
)

__all__ = [
    # Remote REST client
    "MoneyManagerApiClient",
    "RemoteApiError",
    # Storage services
    "Collection",
    "ConnectionError",
    "CorruptDataError",
    "GoogleSheetsClient",
    "GoogleSheetsLedgerStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "StorageError",
]
