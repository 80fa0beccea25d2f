"""Shared fixtures: a controllable clock and an empty ledger."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from money_manager.audit import AuditLogger
from money_manager.ledger import LedgerStore
from money_manager.models.ledger import (
    Account,
    Division,
    TransactionDraft,
    TransactionType,
)
from money_manager.services.storage import Collection, InMemoryLedgerStorage


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    # A Wednesday
    return FakeClock(datetime(2025, 3, 12, 10, 0, 0))


@pytest.fixture
def storage():
    """Storage that already holds two accounts and no history."""
    return InMemoryLedgerStorage({
        Collection.TRANSACTIONS: [],
        Collection.TRANSFERS: [],
        Collection.ACCOUNTS: [
            Account(id="a", name="Account A", balance=Decimal("1000")),
            Account(id="b", name="Account B", balance=Decimal("0")),
        ],
    })


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def store(storage, audit_logger, clock):
    return LedgerStore(
        storage,
        audit_logger=audit_logger,
        clock=clock,
        edit_window_hours=12,
    )


def expense(amount: str, account_id: str = "a", category: str = "food", **kwargs) -> TransactionDraft:
    fields = {
        "type": TransactionType.EXPENSE,
        "amount": Decimal(amount),
        "description": "Groceries",
        "category": category,
        "division": Division.PERSONAL,
        "account_id": account_id,
        "date_time": datetime(2025, 3, 12, 9, 0),
    }
    fields.update(kwargs)
    return TransactionDraft(**fields)


def income(amount: str, account_id: str = "a", category: str = "salary", **kwargs) -> TransactionDraft:
    fields = {
        "type": TransactionType.INCOME,
        "amount": Decimal(amount),
        "description": "Pay",
        "category": category,
        "division": Division.OFFICE,
        "account_id": account_id,
        "date_time": datetime(2025, 3, 12, 9, 0),
    }
    fields.update(kwargs)
    return TransactionDraft(**fields)
