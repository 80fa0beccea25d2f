"""Tests for application wiring."""

from decimal import Decimal

import pytest

from conftest import expense
from money_manager.config import get_settings
from money_manager.models.ledger import PeriodKind
from money_manager.orchestrator import create_app_components, create_storage
from money_manager.services.storage import (
    Collection,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestCreateStorage:
    """Tests for backend selection."""

    def test_memory(self):
        assert isinstance(create_storage("memory"), InMemoryLedgerStorage)

    def test_json_uses_data_dir(self, tmp_path):
        storage = create_storage("json", data_dir=tmp_path)
        assert isinstance(storage, JsonFileLedgerStorage)
        assert storage.path_for(Collection.ACCOUNTS).parent == tmp_path

    def test_backend_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONEY_MANAGER_STORAGE_BACKEND", "memory")
        assert isinstance(create_storage(), InMemoryLedgerStorage)

    def test_unconfigured_sheets_falls_back_to_memory(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_SHEETS_CREDENTIALS_PATH", raising=False)
        monkeypatch.delenv("GOOGLE_SHEETS_SPREADSHEET_ID", raising=False)
        assert isinstance(create_storage("sheets"), InMemoryLedgerStorage)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_storage("postgres")


class TestCreateAppComponents:
    """The UI and the tests share the same wiring."""

    def test_components_share_one_store(self, storage, clock):
        components = create_app_components(storage=storage, clock=clock)
        components.store.add_transaction(expense("200"))

        summary = components.dashboard.summary(PeriodKind.WEEKLY)
        assert summary.total_expense == Decimal("200")
        assert components.audit_logger.recent_events(limit=1)[0].entity_type == "transaction"

    def test_json_backend_persists_between_sessions(self, tmp_path, clock):
        first = create_app_components(storage=JsonFileLedgerStorage(tmp_path), clock=clock)
        txn = first.store.add_transaction(expense("10", account_id="cash"))

        second = create_app_components(storage=JsonFileLedgerStorage(tmp_path), clock=clock)
        assert second.store.get_transaction(txn.id) == txn
        assert second.store.get_account("cash").balance == Decimal("4990")
