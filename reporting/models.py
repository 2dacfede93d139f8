"""Immutable record types consumed and produced by the report pipeline."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple


class TaskStatus(str, Enum):
    IN_PROGRESS = "progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class WebsiteCredential:
    name: str
    identification_code: str
    password: str


@dataclass(frozen=True)
class Organization:
    id: int | str
    name: str
    type: str
    websites: Tuple[WebsiteCredential, ...] = ()


@dataclass(frozen=True)
class TaskRecord:
    id: int | str
    title: str
    status: TaskStatus
    deadline: Optional[dt.date] = None
    target_period: Optional[dt.date] = None
    organization: Optional[Organization] = None
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TaskRecord":
        """Build a record from a JSON-style mapping (camelCase keys accepted)."""
        org_payload = payload.get("organization")
        organization = None
        if org_payload:
            websites = tuple(
                WebsiteCredential(
                    name=site.get("name", ""),
                    identification_code=site.get("identificationCode", site.get("identification_code", "")),
                    password=site.get("password", ""),
                )
                for site in org_payload.get("websites") or []
            )
            organization = Organization(
                id=org_payload["id"],
                name=org_payload.get("name", ""),
                type=org_payload.get("type", ""),
                websites=websites,
            )
        return cls(
            id=payload["id"],
            title=payload["title"],
            status=TaskStatus(payload.get("status", TaskStatus.IN_PROGRESS.value)),
            deadline=_parse_date(payload.get("deadline")),
            target_period=_parse_date(payload.get("targetPeriod", payload.get("target_period"))),
            organization=organization,
            label=payload.get("label"),
        )


@dataclass
class GroupedOrganization:
    organization: Organization
    tasks: List[TaskRecord] = field(default_factory=list)

    @property
    def id(self) -> int | str:
        return self.organization.id

    @property
    def name(self) -> str:
        return self.organization.name

    @property
    def type(self) -> str:
        return self.organization.type

    @property
    def websites(self) -> Tuple[WebsiteCredential, ...]:
        return self.organization.websites


def _parse_date(value: Any) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value)[:10])


__all__ = [
    "GroupedOrganization",
    "Organization",
    "TaskRecord",
    "TaskStatus",
    "WebsiteCredential",
]
