"""
Edit-lock policy.

A transaction can be edited or deleted for a fixed window after it was
created. After that it is locked for good. There is no event that locks
it; the state is a pure function of the clock and ``created_at``.
"""

from datetime import datetime, timedelta
from typing import Optional

EDIT_WINDOW_HOURS = 12


def can_edit(
    created_at: datetime,
    now: Optional[datetime] = None,
    window_hours: int = EDIT_WINDOW_HOURS,
) -> bool:
    """True while no more than ``window_hours`` have passed since creation."""
    now = now or datetime.now()
    return now - created_at <= timedelta(hours=window_hours)


def lock_expires_at(created_at: datetime, window_hours: int = EDIT_WINDOW_HOURS) -> datetime:
    """Last instant at which the record is still editable."""
    return created_at + timedelta(hours=window_hours)


def time_left(
    created_at: datetime,
    now: Optional[datetime] = None,
    window_hours: int = EDIT_WINDOW_HOURS,
) -> timedelta:
    """Remaining edit time, zero once locked."""
    now = now or datetime.now()
    return max(lock_expires_at(created_at, window_hours) - now, timedelta(0))
