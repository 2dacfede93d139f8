"""End-to-end pivot report generation."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Iterable, Optional

import structlog
from openpyxl import Workbook

from reporting.config import ReportSettings, get_report_settings
from reporting.dates import BabelDateFormatter, DateFormatter
from reporting.exceptions import EmptyResultError
from reporting.grouping import group_by_organization
from reporting.layout import lay_out_report
from reporting.models import TaskRecord
from reporting.rows import materialize_rows
from reporting.schema import build_column_schema
from reporting.titles import attachment_filename, build_document_name, compose_title
from reporting.writer import XLSX_CONTENT_TYPE, write_workbook


MAX_SHEET_TITLE_LENGTH = 31
INVALID_SHEET_TITLE_CHARS = re.compile(r"[\[\]:*?/\\]")

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReportOptions:
    title: Optional[str] = None
    target_period: Optional[dt.date] = None
    deadline: Optional[dt.date] = None
    document_name: Optional[str] = None


@dataclass(frozen=True)
class ReportDocument:
    content: bytes
    filename: str
    organizations: int
    columns: int
    content_type: str = XLSX_CONTENT_TYPE

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def sheet_title(title: str, fallback: str) -> str:
    cleaned = INVALID_SHEET_TITLE_CHARS.sub("", title).strip()[:MAX_SHEET_TITLE_LENGTH]
    return cleaned or fallback


def generate_report(
    tasks: Iterable[TaskRecord],
    options: Optional[ReportOptions] = None,
    *,
    settings: Optional[ReportSettings] = None,
    formatter: Optional[DateFormatter] = None,
) -> ReportDocument:
    """Turn task records into an organization x task-title xlsx document.

    Raises:
        EmptyResultError: no task belongs to a resolvable organization.
        SerializationError: the workbook could not be written.
    """
    options = options or ReportOptions()
    settings = settings or get_report_settings()
    formatter = formatter or BabelDateFormatter(settings.locale)

    groups = group_by_organization(tasks)
    if not groups:
        raise EmptyResultError()

    schema = build_column_schema(groups)
    rows = materialize_rows(groups, schema)

    base_title = options.title or settings.default_sheet_title
    banner = compose_title(
        base_title,
        settings=settings,
        formatter=formatter,
        target_period=options.target_period,
        deadline=options.deadline,
    )

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title(base_title, settings.default_sheet_title)
    lay_out_report(sheet, schema, rows, banner, settings)
    content = write_workbook(workbook)

    period_suffix = options.target_period.isoformat() if options.target_period else None
    document_name = build_document_name(options.document_name, period_suffix, settings=settings)
    logger.info(
        "report.generated",
        organizations=len(groups),
        columns=len(schema),
        size_bytes=len(content),
        document_name=document_name,
    )
    return ReportDocument(
        content=content,
        filename=attachment_filename(document_name),
        organizations=len(groups),
        columns=len(schema),
    )
