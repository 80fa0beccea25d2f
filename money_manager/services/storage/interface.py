"""
Abstract Storage Interface

DESIGN DECISION: The ledger store depends on this port, never on a
concrete backend. This allows us to:
1. Keep data in local JSON files, or in Google Sheets
2. Use in-memory storage for testing
3. Swap in the remote REST backend later

The interface is intentionally tiny: the ledger persists three
collections, each written as a whole after every mutation.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, ValidationError

from money_manager.models.ledger import Account, Transaction, Transfer


class Collection(str, Enum):
    """
    Independently persisted collections.

    The values are the stable storage keys.
    """
    TRANSACTIONS = "money_manager_transactions"
    TRANSFERS = "money_manager_transfers"
    ACCOUNTS = "money_manager_accounts"


COLLECTION_MODELS: dict[Collection, type[BaseModel]] = {
    Collection.TRANSACTIONS: Transaction,
    Collection.TRANSFERS: Transfer,
    Collection.ACCOUNTS: Account,
}


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger persistence.

    Any storage implementation (JSON files, Google Sheets, etc.)
    must implement these methods.
    """

    @abstractmethod
    def load(self, collection: Collection) -> Optional[list[BaseModel]]:
        """
        Load every record of a collection.

        Args:
            collection: Which collection to read

        Returns:
            The records, or None if the collection was never saved

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, collection: Collection, records: Sequence[BaseModel]) -> bool:
        """
        Replace the stored contents of a collection.

        Args:
            collection: Which collection to write
            records: The complete, current list of records

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass


def records_to_json(records: Sequence[BaseModel]) -> list[dict]:
    """Serialize records to JSON-compatible dicts."""
    return [record.model_dump(mode="json") for record in records]


def records_from_json(collection: Collection, data: list[dict]) -> list[BaseModel]:
    """
    Rebuild records of a collection from JSON-compatible dicts.

    Raises:
        CorruptDataError: If any record fails validation
    """
    model = COLLECTION_MODELS[collection]
    try:
        return [model.model_validate(item) for item in data]
    except ValidationError as e:
        raise CorruptDataError(
            f"Stored {collection.value} failed validation: {e}"
        ) from e


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored data could not be parsed back into records."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
