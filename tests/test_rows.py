from __future__ import annotations

from reporting.config import ReportSettings
from reporting.grouping import group_by_organization
from reporting.models import TaskStatus
from reporting.rows import (
    CellState,
    build_cell_styles,
    materialize_rows,
    resolve_cell_state,
    websites_text,
)
from reporting.schema import build_column_schema
from tests.utils import organization, task, two_org_scenario, website


def _rows(tasks):
    groups = group_by_organization(tasks)
    schema = build_column_schema(groups)
    return schema, materialize_rows(groups, schema)


def test_two_organizations_three_titles() -> None:
    schema, rows = _rows(two_org_scenario())

    assert schema.titles == ["VAT", "Audit", "Payroll"]
    assert len(rows) == 2
    alpha, beta = rows
    assert alpha.cells == (CellState.DONE, CellState.PENDING, CellState.PENDING)
    assert beta.cells == (CellState.PENDING, CellState.ABSENT, CellState.DONE)


def test_fixed_columns() -> None:
    _, rows = _rows(two_org_scenario())

    assert [row.index for row in rows] == [1, 2]
    assert rows[0].organization_label == "LLC-Alpha"
    assert rows[1].organization_label == "JSC-Beta"
    assert rows[0].websites_text == "rs.ge: \n 111 \n a-pass"
    assert rows[1].websites_text == ""
    assert rows[0].fixed_values() == [1, "LLC-Alpha", "rs.ge: \n 111 \n a-pass"]


def test_websites_joined_in_order() -> None:
    text = websites_text([website("one", "1", "p1"), website("two", "2", "p2")])

    assert text == "one: \n 1 \n p1\ntwo: \n 2 \n p2"


def test_last_task_with_same_title_wins() -> None:
    alpha = organization(1, name="Alpha")
    tasks = [
        task(1, "VAT", alpha, TaskStatus.IN_PROGRESS),
        task(2, "VAT", alpha, TaskStatus.COMPLETED),
    ]
    _, rows = _rows(tasks)
    assert rows[0].cells == (CellState.DONE,)

    _, rows = _rows(list(reversed(tasks)))
    assert rows[0].cells == (CellState.PENDING,)


def test_resolve_cell_state() -> None:
    alpha = organization(1)
    assert resolve_cell_state(None) is CellState.ABSENT
    assert resolve_cell_state(task(1, "t", alpha, TaskStatus.COMPLETED)) is CellState.DONE
    assert resolve_cell_state(task(1, "t", alpha, TaskStatus.IN_PROGRESS)) is CellState.PENDING


def test_cell_styles_dispatch_table() -> None:
    styles = build_cell_styles(ReportSettings())

    assert set(styles) == set(CellState)
    assert styles[CellState.ABSENT].text == "-----"
    assert styles[CellState.ABSENT].fill == "FFFFFFFF"
    assert styles[CellState.ABSENT].centered is True
    assert styles[CellState.DONE].text is None
    assert styles[CellState.DONE].fill == "FF00FF00"
    assert styles[CellState.PENDING].text == ""
    assert styles[CellState.PENDING].fill == "FFFFFF00"


def test_absent_never_uses_status_fills() -> None:
    styles = build_cell_styles(ReportSettings())
    absent = styles[CellState.ABSENT].fill

    assert absent not in {styles[CellState.DONE].fill, styles[CellState.PENDING].fill}
