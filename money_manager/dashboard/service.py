"""
Dashboard Aggregation

Turns the ledger's transactions into what the dashboard shows for a
period: totals, per-category breakdowns, a short history for the
comparison chart, and the latest entries.

This service only reads from the store.
"""

from datetime import date, datetime
from typing import Optional

from money_manager.config import get_settings
from money_manager.dashboard.periods import (
    HISTORY_LENGTH,
    long_label,
    period_bounds,
    range_label,
    short_label,
)
from money_manager.ledger import queries
from money_manager.ledger.store import LedgerStore
from money_manager.models.ledger import (
    DashboardSummary,
    PeriodData,
    PeriodKind,
    Transaction,
    TransactionType,
)


class DashboardService:
    """Period summaries over a ledger store."""

    def __init__(self, store: LedgerStore, recent_limit: Optional[int] = None):
        self._store = store
        self._recent_limit = (
            recent_limit
            if recent_limit is not None
            else get_settings().ledger.recent_transactions_limit
        )

    def period_transactions(self, kind: PeriodKind, offset: int = 0) -> list[Transaction]:
        start, end = period_bounds(kind, offset, self._store.now())
        return queries.in_range(self._store.transactions, start, end)

    def period_comparison(self, kind: PeriodKind, offset: int = 0) -> list[PeriodData]:
        """
        Income and expense for the requested period and the ones
        before it, oldest first.
        """
        now = self._store.now()
        transactions = self._store.transactions
        history = []
        for back in reversed(range(HISTORY_LENGTH[kind])):
            start, end = period_bounds(kind, offset + back, now)
            bucket = queries.in_range(transactions, start, end)
            history.append(PeriodData(
                period=short_label(kind, start),
                start=start,
                end=end,
                income=queries.total_income(bucket),
                expense=queries.total_expense(bucket),
            ))
        return history

    def summary(self, kind: PeriodKind, offset: int = 0) -> DashboardSummary:
        """Summary of the period ``offset`` periods back (0 = current)."""
        start, end = period_bounds(kind, offset, self._store.now())
        return self._build(
            start,
            end,
            label=long_label(kind, start, end),
            kind=kind,
            offset=offset,
            history=self.period_comparison(kind, offset),
        )

    def custom_summary(self, start: date, end: date) -> DashboardSummary:
        """Summary over an explicit date range, both days included."""
        if end < start:
            raise ValueError("End date cannot be before start date")
        lower, upper = queries.start_of_day(start), queries.end_of_day(end)
        return self._build(lower, upper, label=range_label(lower, upper))

    def _build(
        self,
        start: datetime,
        end: datetime,
        label: str,
        kind: Optional[PeriodKind] = None,
        offset: int = 0,
        history: Optional[list[PeriodData]] = None,
    ) -> DashboardSummary:
        transactions = queries.in_range(self._store.transactions, start, end)
        income = queries.total_income(transactions)
        expense = queries.total_expense(transactions)

        by_type = {
            txn_type: [t for t in transactions if t.type == txn_type]
            for txn_type in TransactionType
        }
        recent = sorted(transactions, key=lambda t: t.date_time, reverse=True)

        return DashboardSummary(
            kind=kind,
            offset=offset,
            label=label,
            start=start,
            end=end,
            total_income=income,
            total_expense=expense,
            balance=income - expense,
            total_account_balance=self._store.get_total_balance(),
            income_categories=self._store.get_category_totals(by_type[TransactionType.INCOME]),
            expense_categories=self._store.get_category_totals(by_type[TransactionType.EXPENSE]),
            period_comparison=history or [],
            recent_transactions=recent[:self._recent_limit],
        )
