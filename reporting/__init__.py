"""Organization/task pivot report generation."""

from reporting.exceptions import EmptyInputError, EmptyResultError, ReportError, SerializationError
from reporting.generator import ReportDocument, ReportOptions, generate_report
from reporting.models import Organization, TaskRecord, TaskStatus, WebsiteCredential

__all__ = [
    "EmptyInputError",
    "EmptyResultError",
    "Organization",
    "ReportDocument",
    "ReportError",
    "ReportOptions",
    "SerializationError",
    "TaskRecord",
    "TaskStatus",
    "WebsiteCredential",
    "generate_report",
]
