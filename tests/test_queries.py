"""Tests for transaction filters and aggregates."""

from datetime import date, datetime, time
from decimal import Decimal

from money_manager.data.seed import DEFAULT_CATEGORIES
from money_manager.ledger import queries
from money_manager.models.ledger import (
    Division,
    FilterOptions,
    Transaction,
    TransactionType,
)

CATEGORIES = {c.id: c for c in DEFAULT_CATEGORIES}


def txn(txn_id, txn_type, amount, category, division, when):
    return Transaction(
        id=txn_id,
        type=txn_type,
        amount=Decimal(amount),
        category=category,
        division=division,
        account_id="a",
        date_time=when,
        created_at=when,
    )


TRANSACTIONS = [
    txn("t1", TransactionType.EXPENSE, "100", "food", Division.PERSONAL, datetime(2025, 3, 1, 12, 0)),
    txn("t2", TransactionType.EXPENSE, "40", "fuel", Division.OFFICE, datetime(2025, 3, 5, 8, 0)),
    txn("t3", TransactionType.INCOME, "5000", "salary", Division.OFFICE, datetime(2025, 3, 5, 9, 0)),
    txn("t4", TransactionType.EXPENSE, "60", "food", Division.OFFICE, datetime(2025, 3, 10, 23, 59, 59, 999000)),
    txn("t5", TransactionType.EXPENSE, "15", "food", Division.PERSONAL, datetime(2025, 3, 11, 0, 0)),
]


class TestDayBounds:
    """Tests for day boundary helpers."""

    def test_start_of_day(self):
        assert queries.start_of_day(date(2025, 3, 1)) == datetime(2025, 3, 1, 0, 0)

    def test_end_of_day_is_last_instant(self):
        assert queries.end_of_day(date(2025, 3, 1)) == datetime.combine(date(2025, 3, 1), time.max)

    def test_within_is_inclusive(self):
        start, end = datetime(2025, 3, 1), datetime(2025, 3, 2)
        assert queries.within(start, start, end)
        assert queries.within(end, start, end)
        assert not queries.within(datetime(2025, 3, 2, 0, 0, 1), start, end)

    def test_within_open_bounds(self):
        assert queries.within(datetime(1990, 1, 1), None, None)


class TestFilterTransactions:
    """Tests for history filters."""

    def test_no_filters_returns_everything_in_order(self):
        result = queries.filter_transactions(TRANSACTIONS, FilterOptions())
        assert [t.id for t in result] == ["t1", "t2", "t3", "t4", "t5"]

    def test_division_filter(self):
        result = queries.filter_transactions(TRANSACTIONS, FilterOptions(division=Division.OFFICE))
        assert [t.id for t in result] == ["t2", "t3", "t4"]

    def test_category_filter(self):
        result = queries.filter_transactions(TRANSACTIONS, FilterOptions(category="food"))
        assert [t.id for t in result] == ["t1", "t4", "t5"]

    def test_end_date_covers_whole_day(self):
        """A transaction at 23:59:59.999 on the end date is included; the next day is not."""
        result = queries.filter_transactions(
            TRANSACTIONS,
            FilterOptions(start_date=date(2025, 3, 10), end_date=date(2025, 3, 10)),
        )
        assert [t.id for t in result] == ["t4"]

    def test_start_date_only(self):
        result = queries.filter_transactions(TRANSACTIONS, FilterOptions(start_date=date(2025, 3, 5)))
        assert [t.id for t in result] == ["t2", "t3", "t4", "t5"]

    def test_filters_combine(self):
        result = queries.filter_transactions(
            TRANSACTIONS,
            FilterOptions(division=Division.PERSONAL, category="food", end_date=date(2025, 3, 5)),
        )
        assert [t.id for t in result] == ["t1"]


class TestTotals:
    """Tests for income, expense and category totals."""

    def test_totals(self):
        assert queries.total_income(TRANSACTIONS) == Decimal("5000")
        assert queries.total_expense(TRANSACTIONS) == Decimal("215")

    def test_totals_of_nothing_are_zero(self):
        assert queries.total_income([]) == Decimal("0")
        assert queries.total_expense([]) == Decimal("0")

    def test_category_totals_first_appearance_order(self):
        totals = queries.category_totals(TRANSACTIONS, CATEGORIES)
        assert [t.category for t in totals] == ["food", "fuel", "salary"]

    def test_category_totals_amounts_and_counts(self):
        food = queries.category_totals(TRANSACTIONS, CATEGORIES)[0]
        assert food.amount == Decimal("175")
        assert food.count == 3
        assert food.name == "Food"
        assert food.type == TransactionType.EXPENSE

    def test_unknown_category_falls_back_to_id(self):
        stray = txn("t9", TransactionType.EXPENSE, "5", "mystery", Division.PERSONAL, datetime(2025, 3, 1))
        total = queries.category_totals([stray], CATEGORIES)[0]
        assert total.name == "mystery"
        assert total.icon == "Receipt"
