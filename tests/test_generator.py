from __future__ import annotations

import datetime as dt

import pytest

from reporting import generator
from reporting.config import ReportSettings
from reporting.exceptions import EmptyResultError, SerializationError
from reporting.generator import ReportOptions, generate_report, sheet_title
from reporting.writer import XLSX_CONTENT_TYPE, write_workbook
from tests.utils import FixedFormatter, load_sheet, task, two_org_scenario


SETTINGS = ReportSettings()


def _generate(tasks, **options):
    return generate_report(tasks, ReportOptions(**options), settings=SETTINGS, formatter=FixedFormatter())


def test_document_metadata() -> None:
    document = _generate(two_org_scenario(), document_name="tax report", target_period=dt.date(2024, 10, 1))

    assert document.filename == "tax-report_2024-10-01.xlsx"
    assert document.content_type == XLSX_CONTENT_TYPE
    assert document.content_disposition == 'attachment; filename="tax-report_2024-10-01.xlsx"'
    assert document.organizations == 2
    assert document.columns == 3
    assert document.content.startswith(b"PK")


def test_non_ascii_document_name_uses_generic_filename() -> None:
    document = _generate(two_org_scenario(), document_name="დავალებები", target_period=dt.date(2024, 10, 1))

    assert document.filename == "work-excel_2024-10-01.xlsx"


def test_row_count_matches_distinct_organizations() -> None:
    tasks = two_org_scenario() + [task(99, "Orphan", None)]

    sheet = load_sheet(_generate(tasks).content)

    # Title and header rows precede the data rows.
    assert sheet.max_row - 2 == 2
    assert "Orphan" not in [cell.value for cell in sheet[2]]


@pytest.mark.parametrize("tasks", [[], [task(1, "Orphan", None)]])
def test_empty_result_fails_before_workbook_is_built(monkeypatch, tasks) -> None:
    def fail_workbook():
        raise AssertionError("workbook must not be created")

    monkeypatch.setattr(generator, "Workbook", fail_workbook)

    with pytest.raises(EmptyResultError) as excinfo:
        _generate(tasks)
    assert excinfo.value.status_code == 400
    assert str(excinfo.value) == "No organizations with valid task criteria found"


def test_sheet_title_is_sanitized() -> None:
    sheet = load_sheet(_generate(two_org_scenario(), title="Q3: tasks/reports [final] for all organizations").content)

    assert sheet.title == "Q3 tasksreports final for all o"
    assert len(sheet.title) <= 31
    # The banner keeps the full title.
    assert sheet["B1"].value == "Q3: tasks/reports [final] for all organizations"


def test_sheet_title_fallback() -> None:
    assert sheet_title("???", "Tasks") == "Tasks"
    assert sheet_title("Monthly", "Tasks") == "Monthly"


def test_default_title_used_when_missing() -> None:
    sheet = load_sheet(_generate(two_org_scenario()).content)

    assert sheet.title == "Tasks"
    assert sheet["B1"].value == "Tasks"


def test_identical_input_produces_identical_layout() -> None:
    first = load_sheet(_generate(two_org_scenario()).content)
    second = load_sheet(_generate(two_org_scenario()).content)

    def values(ws):
        return [[cell.value for cell in row] for row in ws.iter_rows()]

    assert values(first) == values(second)


class _BrokenWorkbook:
    def save(self, target) -> None:
        target.write(b"partial")
        raise OSError("disk full")


def test_writer_wraps_failures() -> None:
    with pytest.raises(SerializationError) as excinfo:
        write_workbook(_BrokenWorkbook())
    assert excinfo.value.status_code == 500
    assert "disk full" in str(excinfo.value)


def test_serialization_failure_propagates(monkeypatch) -> None:
    def broken_writer(workbook):
        raise SerializationError("boom")

    monkeypatch.setattr(generator, "write_workbook", broken_writer)

    with pytest.raises(SerializationError):
        _generate(two_org_scenario())
