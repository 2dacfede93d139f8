"""Title banner and download filename composition."""

from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional

from reporting.config import ReportSettings
from reporting.dates import LONG_DATE_FORMAT, MONTH_YEAR_PATTERN, DateFormatter


NON_ASCII_PATTERN = re.compile(r"[^\x00-\x7F]")
UNSAFE_FILENAME_PATTERN = re.compile(r'[\x00-\x1f\x7f"\\/]')
XLSX_EXTENSION = ".xlsx"


def contains_non_ascii(value: str) -> bool:
    return bool(NON_ASCII_PATTERN.search(value))


def compose_title(
    base_title: str,
    *,
    settings: ReportSettings,
    formatter: DateFormatter,
    target_period: Optional[dt.date] = None,
    deadline: Optional[dt.date] = None,
) -> str:
    """Build the banner text; absent dates contribute no segment at all."""
    segments: List[str] = [base_title]
    if target_period is not None:
        segments.append(formatter.format(target_period, MONTH_YEAR_PATTERN))
    if deadline is not None:
        segments.append(f"{settings.deadline_label}: {formatter.format(deadline, LONG_DATE_FORMAT)}")
    return settings.title_separator.join(segments)


def build_document_name(
    hint: Optional[str],
    target_period: Optional[str],
    *,
    settings: ReportSettings,
) -> str:
    """Return the download name without extension.

    Hints with non-ASCII characters cannot travel in a plain Content-Disposition
    filename, so they fall back to the generic name.
    """
    cleaned = UNSAFE_FILENAME_PATTERN.sub("", hint or "")
    if cleaned.strip() and not contains_non_ascii(cleaned):
        name = "-".join(cleaned.split(" "))
    else:
        name = settings.generic_document_name
    if target_period:
        name = f"{name}_{target_period}"
    return name


def attachment_filename(document_name: str) -> str:
    return f"{document_name}{XLSX_EXTENSION}"
