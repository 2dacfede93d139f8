"""Per-organization row records and the cell state dispatch table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from reporting.config import ReportSettings
from reporting.models import GroupedOrganization, TaskRecord, TaskStatus, WebsiteCredential
from reporting.schema import ColumnSchema


class CellState(str, Enum):
    ABSENT = "absent"
    DONE = "done"
    PENDING = "pending"


@dataclass(frozen=True)
class CellStyle:
    text: Optional[str]
    fill: str
    centered: bool = False


STATUS_STATES: Dict[TaskStatus, CellState] = {
    TaskStatus.COMPLETED: CellState.DONE,
    TaskStatus.IN_PROGRESS: CellState.PENDING,
}


def build_cell_styles(settings: ReportSettings) -> Dict[CellState, CellStyle]:
    # Completed cells carry no value at all; pending cells an explicit empty string.
    return {
        CellState.ABSENT: CellStyle(text=settings.absent_text, fill=settings.absent_fill, centered=True),
        CellState.DONE: CellStyle(text=None, fill=settings.done_fill),
        CellState.PENDING: CellStyle(text="", fill=settings.pending_fill),
    }


@dataclass(frozen=True)
class ReportRow:
    index: int
    organization_label: str
    websites_text: str
    cells: tuple[CellState, ...]

    def fixed_values(self) -> List[object]:
        return [self.index, self.organization_label, self.websites_text]


def organization_label(group: GroupedOrganization) -> str:
    return f"{group.type}-{group.name}"


def render_website(website: WebsiteCredential) -> str:
    return f"{website.name}: \n {website.identification_code} \n {website.password}"


def websites_text(websites: Iterable[WebsiteCredential]) -> str:
    return "\n".join(render_website(website) for website in websites)


def resolve_cell_state(task: Optional[TaskRecord]) -> CellState:
    if task is None:
        return CellState.ABSENT
    return STATUS_STATES[TaskStatus(task.status)]


def materialize_row(position: int, group: GroupedOrganization, schema: ColumnSchema) -> ReportRow:
    # Title is the join key: a later task with the same title replaces an earlier one.
    by_title: Dict[str, TaskRecord] = {task.title: task for task in group.tasks}
    cells = tuple(resolve_cell_state(by_title.get(title)) for title in schema)
    return ReportRow(
        index=position,
        organization_label=organization_label(group),
        websites_text=websites_text(group.websites),
        cells=cells,
    )


def materialize_rows(groups: Sequence[GroupedOrganization], schema: ColumnSchema) -> List[ReportRow]:
    return [materialize_row(position, group, schema) for position, group in enumerate(groups, start=1)]
