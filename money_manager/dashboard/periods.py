"""
Period bucketing.

Weeks start on Monday. Every period runs from 00:00 of its first day to
the last instant of its last day, and both ends are inclusive.
"""

import calendar
from datetime import date, datetime, timedelta

from money_manager.ledger.queries import end_of_day, start_of_day
from money_manager.models.ledger import PeriodKind

# How many periods the comparison chart shows, current one included
HISTORY_LENGTH = {
    PeriodKind.WEEKLY: 4,
    PeriodKind.MONTHLY: 6,
    PeriodKind.YEARLY: 3,
}


def shift_months(year: int, month: int, months: int) -> tuple[int, int]:
    """(year, month) moved by ``months``, which may be negative."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def period_bounds(kind: PeriodKind, offset: int, now: datetime) -> tuple[datetime, datetime]:
    """
    Start and end of the period ``offset`` periods before the one
    containing ``now``.
    """
    if offset < 0:
        raise ValueError("offset must be zero or positive")

    if kind == PeriodKind.WEEKLY:
        moment = now - timedelta(weeks=offset)
        monday = moment.date() - timedelta(days=moment.weekday())
        return start_of_day(monday), end_of_day(monday + timedelta(days=6))

    if kind == PeriodKind.MONTHLY:
        year, month = shift_months(now.year, now.month, -offset)
        last_day = calendar.monthrange(year, month)[1]
        return start_of_day(date(year, month, 1)), end_of_day(date(year, month, last_day))

    if kind == PeriodKind.YEARLY:
        year = now.year - offset
        return start_of_day(date(year, 1, 1)), end_of_day(date(year, 12, 31))

    raise ValueError(f"Unknown period kind: {kind}")


def short_label(kind: PeriodKind, start: datetime) -> str:
    """Axis label for the comparison chart: 'Mar 3', 'Mar 2025', '2025'."""
    if kind == PeriodKind.WEEKLY:
        return f"{start:%b} {start.day}"
    if kind == PeriodKind.MONTHLY:
        return f"{start:%b %Y}"
    return f"{start:%Y}"


def long_label(kind: PeriodKind, start: datetime, end: datetime) -> str:
    """Heading label: 'Mar 3 - Mar 9, 2025', 'March 2025', '2025'."""
    if kind == PeriodKind.WEEKLY:
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
    if kind == PeriodKind.MONTHLY:
        return f"{start:%B %Y}"
    return f"{start:%Y}"


def range_label(start: datetime, end: datetime) -> str:
    return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"
