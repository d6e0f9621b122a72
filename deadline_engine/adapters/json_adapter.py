"""JSON adapter for task snapshots."""

from __future__ import annotations

import json

from deadline_engine.adapters.fields import REQUIRED_FIELDS, build_task
from deadline_engine.errors import ConfigurationError
from deadline_engine.schema import Task


def _parse_item(item, index: int) -> Task:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    missing = sorted(field for field in REQUIRED_FIELDS if not str(item.get(field) or "").strip())
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        return build_task(item)
    except ConfigurationError as exc:
        raise ConfigurationError(exc.field, exc.value, f"Item {index}: {exc}") from exc
    except ValueError as exc:
        raise ValueError(f"Item {index}: {exc}") from exc


def parse(file_path: str) -> list[Task]:
    """Parse JSON file into task snapshots."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
