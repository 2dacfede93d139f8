#!/usr/bin/env python3
"""Build an organization/task pivot workbook from a JSON dump of task records."""

from __future__ import annotations

import argparse
import datetime as dt
import json
import sys
from pathlib import Path
from typing import List, Optional

from reporting.exceptions import ReportError
from reporting.generator import ReportOptions, generate_report
from reporting.models import TaskRecord


def _date_arg(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM-DD, got {value!r}") from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export tasks as an organization x task-title workbook")
    parser.add_argument("input", type=Path, help="JSON file holding a list of task objects")
    parser.add_argument("--title", help="Sheet title and banner text")
    parser.add_argument("--target-period", type=_date_arg, help="Target period date (YYYY-MM-DD) for the banner and filename")
    parser.add_argument("--deadline", type=_date_arg, help="Deadline date (YYYY-MM-DD) for the banner")
    parser.add_argument("--document-name", help="Filename hint; ASCII only, otherwise a generic name is used")
    parser.add_argument("--output-dir", type=Path, default=Path("."), help="Directory to write the workbook to")
    return parser.parse_args(argv)


def load_tasks(path: Path) -> List[TaskRecord]:
    """Read task records; malformed input is reported as a ReportError (400)."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ReportError(f"Cannot read tasks from {path}: {exc}", status_code=400) from exc
    if isinstance(payload, dict):
        payload = payload.get("tasks", [])
    if not isinstance(payload, list):
        raise ReportError(f"{path} must contain a list of tasks", status_code=400)

    tasks: List[TaskRecord] = []
    for position, item in enumerate(payload):
        try:
            tasks.append(TaskRecord.from_dict(item))
        except KeyError as exc:
            raise ReportError(f"Task #{position} is missing field {exc}", status_code=400) from exc
        except (AttributeError, TypeError, ValueError) as exc:
            raise ReportError(f"Task #{position} is invalid: {exc}", status_code=400) from exc
    return tasks


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    tasks = load_tasks(args.input)
    options = ReportOptions(
        title=args.title,
        target_period=args.target_period,
        deadline=args.deadline,
        document_name=args.document_name,
    )
    document = generate_report(tasks, options)
    args.output_dir.mkdir(parents=True, exist_ok=True)
    destination = args.output_dir / document.filename
    destination.write_bytes(document.content)
    print(f"Report for {document.organizations} organizations written to {destination}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    try:
        raise SystemExit(main())
    except ReportError as exc:
        print(f"Report error: {exc}", file=sys.stderr)
        raise SystemExit(1)
