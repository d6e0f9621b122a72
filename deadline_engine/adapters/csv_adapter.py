"""CSV adapter for task snapshots."""

from __future__ import annotations

import csv

from deadline_engine.adapters.fields import REQUIRED_FIELDS, build_task
from deadline_engine.errors import ConfigurationError
from deadline_engine.schema import Task


def _parse_row(row: dict, row_number: int) -> Task:
    missing = sorted(field for field in REQUIRED_FIELDS if not (row.get(field) or "").strip())
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        return build_task(row)
    except ConfigurationError as exc:
        raise ConfigurationError(exc.field, exc.value, f"Row {row_number}: {exc}") from exc
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: {exc}") from exc


def parse(file_path: str) -> list[Task]:
    """Parse CSV file into a list of task snapshots."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        tasks: list[Task] = []
        for row_number, row in enumerate(reader, start=2):
            tasks.append(_parse_row(row, row_number))
        return tasks
