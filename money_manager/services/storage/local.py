"""
Local Storage Implementations

Two backends for the ledger persistence port:

- InMemoryLedgerStorage keeps serialized collections in a dict. It is
  used by the tests and for throwaway sessions.
- JsonFileLedgerStorage writes one JSON array per collection into a
  data directory, keyed by the collection's stable storage key.

Records are stored serialized in both, so a caller can never mutate
stored state through a reference it still holds.
"""

import json
import os
from pathlib import Path
from typing import Optional, Sequence, Union

from pydantic import BaseModel

from money_manager.services.storage.interface import (
    Collection,
    CorruptDataError,
    LedgerStorageInterface,
    StorageError,
    records_from_json,
    records_to_json,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Dict-backed storage."""

    def __init__(self, initial: Optional[dict[Collection, Sequence[BaseModel]]] = None):
        self._data: dict[Collection, list[dict]] = {}
        for collection, records in (initial or {}).items():
            self._data[collection] = records_to_json(records)

    def load(self, collection: Collection) -> Optional[list[BaseModel]]:
        if collection not in self._data:
            return None
        return records_from_json(collection, self._data[collection])

    def save(self, collection: Collection, records: Sequence[BaseModel]) -> bool:
        self._data[collection] = records_to_json(records)
        return True

    def has(self, collection: Collection) -> bool:
        return collection in self._data


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    JSON file storage.

    Each collection lives in ``<data_dir>/<storage key>.json``.
    Writes go to a temporary file first and are moved into place, so a
    crash mid-write leaves the previous version intact.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    def path_for(self, collection: Collection) -> Path:
        return self._data_dir / f"{collection.value}.json"

    def load(self, collection: Collection) -> Optional[list[BaseModel]]:
        path = self.path_for(collection)
        if not path.exists():
            return None

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"{path} is not valid JSON: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

        if not isinstance(data, list):
            raise CorruptDataError(f"{path} does not contain a JSON array")

        return records_from_json(collection, data)

    def save(self, collection: Collection, records: Sequence[BaseModel]) -> bool:
        path = self.path_for(collection)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(records_to_json(records), f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
            return True
        except OSError as e:
            raise StorageError(f"Failed to save {collection.value}: {e}") from e
