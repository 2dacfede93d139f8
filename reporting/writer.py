"""Serialize a laid-out workbook to xlsx bytes."""

from __future__ import annotations

import io

import structlog
from openpyxl import Workbook

from reporting.exceptions import SerializationError


XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

logger = structlog.get_logger(__name__)


def write_workbook(workbook: Workbook) -> bytes:
    """Save the workbook in a single write; nothing is returned on failure."""
    buffer = io.BytesIO()
    try:
        workbook.save(buffer)
    except Exception as exc:
        logger.exception("report.serialization_failed", error=str(exc))
        raise SerializationError(f"Failed to serialize workbook: {exc}") from exc
    return buffer.getvalue()
