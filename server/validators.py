"""Input validation models for the export API."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reporting.generator import ReportOptions
from reporting.models import TaskStatus
from server.database import TaskFilters


MAX_TITLE_LENGTH = 255
MAX_DOCUMENT_NAME_LENGTH = 120


def _strip_or_none(value: Optional[str], field_name: str) -> Optional[str]:
    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    if any(ord(ch) < 32 for ch in trimmed):
        raise ValueError(f"{field_name} must not contain control characters.")
    return trimmed


class ExportTasksRequest(BaseModel):
    """Body of the task export endpoint (camelCase aliases match the web client)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = Field(default=None, max_length=MAX_TITLE_LENGTH)
    status: Optional[TaskStatus] = None
    label: Optional[int] = Field(default=None, ge=1)
    deadline: Optional[dt.date] = None
    target_period: Optional[dt.date] = Field(default=None, alias="targetPeriod")
    document_name: Optional[str] = Field(
        default=None,
        alias="documentName",
        max_length=MAX_DOCUMENT_NAME_LENGTH,
    )

    @field_validator("title", mode="after")
    @classmethod
    def validate_title(cls, title: Optional[str]) -> Optional[str]:
        return _strip_or_none(title, "Title")

    @field_validator("document_name", mode="after")
    @classmethod
    def validate_document_name(cls, name: Optional[str]) -> Optional[str]:
        return _strip_or_none(name, "Document name")

    def to_filters(self) -> TaskFilters:
        return TaskFilters(
            status=self.status,
            label_id=self.label,
            deadline=self.deadline,
            target_period=self.target_period,
        )

    def to_options(self) -> ReportOptions:
        return ReportOptions(
            title=self.title,
            target_period=self.target_period,
            deadline=self.deadline,
            document_name=self.document_name,
        )
