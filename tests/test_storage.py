"""
Tests for the persistence backends.

Google Sheets is never contacted: the gspread worksheet is a MagicMock.
"""

import json
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import gspread
import pytest

from money_manager.models.ledger import (
    Account,
    Division,
    Transaction,
    TransactionType,
    Transfer,
)
from money_manager.services.storage import (
    Collection,
    CorruptDataError,
    GoogleSheetsLedgerStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    StorageError,
)
from money_manager.services.storage.google_sheets import collection_columns

ACCOUNTS = [
    Account(id="cash", name="Cash", balance=Decimal("5000"), color="#10b981"),
    Account(id="bank", name="Bank Account", balance=Decimal("25000.50")),
]

TRANSACTION = Transaction(
    id="txn-1",
    type=TransactionType.EXPENSE,
    amount=Decimal("0.10"),
    description="Tea",
    category="food",
    division=Division.OFFICE,
    account_id="cash",
    date_time=datetime(2025, 3, 10, 23, 59, 59, 999000),
    created_at=datetime(2025, 3, 11, 8, 0),
)


class TestCollections:
    """Storage keys are part of the on-disk format."""

    def test_storage_keys(self):
        assert Collection.TRANSACTIONS.value == "money_manager_transactions"
        assert Collection.TRANSFERS.value == "money_manager_transfers"
        assert Collection.ACCOUNTS.value == "money_manager_accounts"


class TestInMemoryStorage:
    """Tests for the dict-backed storage."""

    def test_missing_collection_is_none(self):
        assert InMemoryLedgerStorage().load(Collection.ACCOUNTS) is None

    def test_empty_collection_is_empty_list(self):
        storage = InMemoryLedgerStorage({Collection.ACCOUNTS: []})
        assert storage.load(Collection.ACCOUNTS) == []

    def test_save_and_load(self):
        storage = InMemoryLedgerStorage()
        storage.save(Collection.TRANSACTIONS, [TRANSACTION])
        assert storage.load(Collection.TRANSACTIONS) == [TRANSACTION]

    def test_loaded_records_are_independent(self):
        storage = InMemoryLedgerStorage({Collection.ACCOUNTS: ACCOUNTS})
        first = storage.load(Collection.ACCOUNTS)
        first.clear()
        assert len(storage.load(Collection.ACCOUNTS)) == 2


class TestJsonFileStorage:
    """Tests for the JSON file backend."""

    def test_missing_file_is_none(self, tmp_path):
        assert JsonFileLedgerStorage(tmp_path).load(Collection.TRANSFERS) is None

    def test_save_writes_one_file_per_collection(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path / "data")
        storage.save(Collection.ACCOUNTS, ACCOUNTS)

        path = tmp_path / "data" / "money_manager_accounts.json"
        assert path.exists()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[1]["balance"] == "25000.50"

    def test_round_trip_keeps_exact_values(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path)
        storage.save(Collection.TRANSACTIONS, [TRANSACTION])
        loaded = storage.load(Collection.TRANSACTIONS)[0]
        assert loaded.amount == Decimal("0.10")
        assert loaded.date_time == TRANSACTION.date_time
        assert loaded.division == Division.OFFICE

    def test_invalid_json_is_corrupt(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path)
        storage.path_for(Collection.ACCOUNTS).write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptDataError):
            storage.load(Collection.ACCOUNTS)

    def test_non_array_is_corrupt(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path)
        storage.path_for(Collection.ACCOUNTS).write_text('{"id": "cash"}', encoding="utf-8")
        with pytest.raises(CorruptDataError):
            storage.load(Collection.ACCOUNTS)

    def test_invalid_record_is_corrupt(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path)
        storage.path_for(Collection.ACCOUNTS).write_text('[{"id": "cash"}]', encoding="utf-8")
        with pytest.raises(CorruptDataError):
            storage.load(Collection.ACCOUNTS)

    def test_unwritable_directory_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileLedgerStorage(blocker / "data")
        with pytest.raises(StorageError):
            storage.save(Collection.ACCOUNTS, ACCOUNTS)


class TestGoogleSheetsStorage:
    """Tests for the Sheets backend with a mocked client."""

    @pytest.fixture
    def sheet(self):
        return MagicMock(spec=gspread.Worksheet)

    @pytest.fixture
    def client(self, sheet):
        client = MagicMock()
        client.find_sheet.return_value = sheet
        client.get_or_create_sheet.return_value = sheet
        return client

    def test_columns_follow_model_fields(self):
        assert collection_columns(Collection.ACCOUNTS) == ["id", "name", "balance", "color"]

    def test_missing_sheet_is_none(self, client):
        client.find_sheet.return_value = None
        assert GoogleSheetsLedgerStorage(client).load(Collection.ACCOUNTS) is None

    def test_empty_sheet_is_empty_list(self, client, sheet):
        sheet.get_all_values.return_value = []
        assert GoogleSheetsLedgerStorage(client).load(Collection.ACCOUNTS) == []

    def test_save_writes_header_and_rows(self, client, sheet):
        GoogleSheetsLedgerStorage(client).save(Collection.ACCOUNTS, ACCOUNTS)

        sheet.clear.assert_called_once()
        values = sheet.update.call_args.kwargs["values"]
        assert values[0] == ["id", "name", "balance", "color"]
        assert values[1] == ["cash", "Cash", "5000", "#10b981"]
        assert sheet.update.call_args.kwargs["value_input_option"] == "RAW"

    def test_load_parses_rows(self, client, sheet):
        sheet.get_all_values.return_value = [
            ["id", "from_account_id", "to_account_id", "amount", "description", "date_time", "created_at"],
            ["tr-1", "bank", "cash", "10000", "", "2025-03-01T09:00:00", "2025-03-01T09:00:00"],
        ]
        transfers = GoogleSheetsLedgerStorage(client).load(Collection.TRANSFERS)
        assert transfers == [Transfer(
            id="tr-1",
            from_account_id="bank",
            to_account_id="cash",
            amount=Decimal("10000"),
            date_time=datetime(2025, 3, 1, 9, 0),
            created_at=datetime(2025, 3, 1, 9, 0),
        )]

    def test_load_skips_blank_rows(self, client, sheet):
        sheet.get_all_values.return_value = [
            ["id", "name", "balance", "color"],
            ["cash", "Cash", "5000", "#10b981"],
            ["", "", "", ""],
        ]
        accounts = GoogleSheetsLedgerStorage(client).load(Collection.ACCOUNTS)
        assert [a.id for a in accounts] == ["cash"]

    def test_load_failure_becomes_storage_error(self, client):
        client.find_sheet.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(StorageError, match="quota exceeded"):
            GoogleSheetsLedgerStorage(client).load(Collection.ACCOUNTS)
