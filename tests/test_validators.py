from __future__ import annotations

import datetime as dt

import pytest
from pydantic import ValidationError

from reporting.models import TaskStatus
from server.validators import ExportTasksRequest


def test_camel_case_body_accepted() -> None:
    request = ExportTasksRequest.model_validate(
        {
            "title": "Monthly",
            "status": "completed",
            "label": 3,
            "deadline": "2024-10-15",
            "targetPeriod": "2024-10-01",
            "documentName": "tax report",
        }
    )

    assert request.title == "Monthly"
    assert request.status is TaskStatus.COMPLETED
    assert request.label == 3
    assert request.deadline == dt.date(2024, 10, 15)
    assert request.target_period == dt.date(2024, 10, 1)
    assert request.document_name == "tax report"


def test_snake_case_names_also_accepted() -> None:
    request = ExportTasksRequest(target_period=dt.date(2024, 10, 1), document_name="x")

    assert request.target_period == dt.date(2024, 10, 1)
    assert request.document_name == "x"


def test_empty_body_is_valid() -> None:
    request = ExportTasksRequest.model_validate({})

    assert request.title is None
    assert request.status is None


def test_unknown_status_rejected() -> None:
    with pytest.raises(ValidationError):
        ExportTasksRequest.model_validate({"status": "archived"})


def test_invalid_date_rejected() -> None:
    with pytest.raises(ValidationError):
        ExportTasksRequest.model_validate({"deadline": "15/10/2024"})


def test_non_positive_label_rejected() -> None:
    with pytest.raises(ValidationError):
        ExportTasksRequest(label=0)


def test_title_trimmed_and_blank_becomes_none() -> None:
    assert ExportTasksRequest(title="  Monthly  ").title == "Monthly"
    assert ExportTasksRequest(title="   ").title is None


def test_control_characters_rejected() -> None:
    with pytest.raises(ValidationError):
        ExportTasksRequest(title="bad\ttitle")
    with pytest.raises(ValidationError):
        ExportTasksRequest(document_name="bad\nname")


def test_document_name_length_limit() -> None:
    with pytest.raises(ValidationError):
        ExportTasksRequest(document_name="x" * 121)


def test_filters_and_options() -> None:
    request = ExportTasksRequest.model_validate(
        {"title": "T", "status": "progress", "label": 2, "deadline": "2024-10-15", "targetPeriod": "2024-10-01"}
    )

    filters = request.to_filters()
    assert filters.status is TaskStatus.IN_PROGRESS
    assert filters.label_id == 2
    assert filters.deadline == dt.date(2024, 10, 15)
    assert filters.target_period == dt.date(2024, 10, 1)

    options = request.to_options()
    assert options.title == "T"
    assert options.deadline == dt.date(2024, 10, 15)
    assert options.target_period == dt.date(2024, 10, 1)
    assert options.document_name is None
