"""Locale-aware date rendering for the report title banner."""

from __future__ import annotations

import datetime as dt
from typing import Protocol

from babel.dates import format_date


MONTH_YEAR_PATTERN = "LLLL y"
LONG_DATE_FORMAT = "long"


class DateFormatter(Protocol):
    def format(self, value: dt.date, pattern: str) -> str:
        """Render ``value`` with a CLDR pattern or a named format (short/medium/long/full)."""


class BabelDateFormatter:
    """Formats dates through Babel's CLDR data for a fixed locale."""

    def __init__(self, locale: str) -> None:
        self.locale = locale

    def format(self, value: dt.date, pattern: str) -> str:
        return format_date(value, format=pattern, locale=self.locale)

    def __repr__(self) -> str:
        return f"BabelDateFormatter(locale={self.locale!r})"
