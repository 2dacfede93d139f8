"""Builders shared by the report tests."""

from __future__ import annotations

import datetime as dt
import io
from typing import Iterable, Optional

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from reporting.models import Organization, TaskRecord, TaskStatus, WebsiteCredential


DEFAULT_DEADLINE = dt.date(2024, 10, 15)
DEFAULT_PERIOD = dt.date(2024, 10, 1)


def website(name: str = "rs.ge", code: str = "123456789", password: str = "pw") -> WebsiteCredential:
    return WebsiteCredential(name=name, identification_code=code, password=password)


def organization(
    org_id: int,
    name: str = "Acme",
    org_type: str = "LLC",
    websites: Iterable[WebsiteCredential] = (),
) -> Organization:
    return Organization(id=org_id, name=name, type=org_type, websites=tuple(websites))


def task(
    task_id: int,
    title: str,
    org: Optional[Organization],
    status: TaskStatus = TaskStatus.IN_PROGRESS,
    deadline: dt.date = DEFAULT_DEADLINE,
    target_period: dt.date = DEFAULT_PERIOD,
) -> TaskRecord:
    return TaskRecord(
        id=task_id,
        title=title,
        status=status,
        deadline=deadline,
        target_period=target_period,
        organization=org,
    )


class FixedFormatter:
    """Date formatter that echoes the requested pattern, for locale-free assertions."""

    def format(self, value: dt.date, pattern: str) -> str:
        return f"<{pattern}:{value.isoformat()}>"


def load_sheet(content: bytes) -> Worksheet:
    return load_workbook(io.BytesIO(content)).active


def two_org_scenario() -> list[TaskRecord]:
    """Two organizations, three titles: two shared, 'Audit' only on the first."""
    alpha = organization(1, name="Alpha", websites=[website("rs.ge", "111", "a-pass")])
    beta = organization(2, name="Beta", org_type="JSC")
    return [
        task(1, "VAT", alpha, TaskStatus.COMPLETED),
        task(2, "Audit", alpha),
        task(3, "VAT", beta),
        task(4, "Payroll", beta, TaskStatus.COMPLETED),
        task(5, "Payroll", alpha),
    ]
