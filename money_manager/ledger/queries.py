"""
Read-only queries over lists of transactions.

Pure functions: the store applies them to its own list, the dashboard
applies them to period slices of it.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from money_manager.models.ledger import (
    ALL,
    Category,
    CategoryTotal,
    FilterOptions,
    Transaction,
    TransactionType,
)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last representable instant of ``day`` (23:59:59.999999)."""
    return datetime.combine(day, time.max)


def within(moment: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    """Inclusive on both ends; a missing bound is open."""
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    filters: FilterOptions,
) -> list[Transaction]:
    """
    Apply history filters.

    Division and category match exactly unless set to "all". The date
    range is inclusive and applies to ``date_time``; the end date covers
    its whole day.
    """
    start = start_of_day(filters.start_date) if filters.start_date else None
    end = end_of_day(filters.end_date) if filters.end_date else None

    result = []
    for t in transactions:
        if filters.division != ALL and t.division != filters.division:
            continue
        if filters.category != ALL and t.category != filters.category:
            continue
        if not within(t.date_time, start, end):
            continue
        result.append(t)
    return result


def in_range(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
) -> list[Transaction]:
    return [t for t in transactions if within(t.date_time, start, end)]


def total_of_type(transactions: Iterable[Transaction], txn_type: TransactionType) -> Decimal:
    return sum(
        (t.amount for t in transactions if t.type == txn_type),
        Decimal("0"),
    )


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    return total_of_type(transactions, TransactionType.INCOME)


def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    return total_of_type(transactions, TransactionType.EXPENSE)


def category_totals(
    transactions: Iterable[Transaction],
    categories: Mapping[str, Category],
) -> list[CategoryTotal]:
    """
    Group by category id, in order of first appearance.

    Each group's type is the type of the last transaction visited in it.
    Categories have a single type, so the groups are never mixed.
    """
    groups: dict[str, CategoryTotal] = {}

    for t in transactions:
        group = groups.get(t.category)
        if group is None:
            category = categories.get(t.category)
            group = CategoryTotal(
                category=t.category,
                name=category.name if category else t.category,
                icon=category.icon if category else "Receipt",
                type=t.type,
            )
            groups[t.category] = group

        group.amount += t.amount
        group.count += 1
        group.type = t.type

    return list(groups.values())
