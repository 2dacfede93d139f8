"""Shared database utilities."""

from __future__ import annotations

import datetime as dt
from typing import Optional, Tuple


def day_range(day: dt.date) -> Tuple[dt.datetime, dt.datetime]:
    """Return the half-open ``[start, next day)`` interval covering ``day``."""
    start = dt.datetime.combine(day, dt.time.min)
    return start, start + dt.timedelta(days=1)


def to_naive_utc(value: dt.datetime) -> dt.datetime:
    """Normalize an aware datetime to naive UTC for SQLite storage."""
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return value


def as_datetime(value: Optional[dt.date | dt.datetime]) -> Optional[dt.datetime]:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return to_naive_utc(value)
    return dt.datetime.combine(value, dt.time.min)


def as_date(value: Optional[dt.datetime]) -> Optional[dt.date]:
    if value is None:
        return None
    return value.date()


__all__ = [
    "as_date",
    "as_datetime",
    "day_range",
    "to_naive_utc",
]
