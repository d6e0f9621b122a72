"""Field coercion shared by the task adapters."""

from __future__ import annotations

from datetime import datetime

from deadline_engine.schema import Task

REQUIRED_FIELDS = ("task_id", "priority", "aggression_level", "category")


def _text(raw) -> str:
    return "" if raw is None else str(raw).strip()


def _parse_deadline(raw):
    text = _text(raw)
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"malformed deadline '{text}'") from exc


def _parse_count(raw, name: str) -> int:
    text = _text(raw)
    if not text:
        return 0
    try:
        value = int(float(text))
    except ValueError as exc:
        raise ValueError(f"invalid {name} '{text}'") from exc
    return max(0, value)


def _parse_minutes(raw, name: str):
    if not _text(raw):
        return None
    return _parse_count(raw, name)


def build_task(record: dict) -> Task:
    """Build a task from a flat record of strings or JSON scalars."""

    steps_total = _parse_count(record.get("steps_total"), "steps_total")
    steps_done = _parse_count(record.get("steps_done"), "steps_done")
    ratio = steps_done / steps_total if steps_total else 0.0

    return Task(
        task_id=_text(record["task_id"]),
        title=_text(record.get("title")),
        deadline=_parse_deadline(record.get("deadline")),
        priority=_text(record["priority"]),
        aggression_level=_text(record["aggression_level"]),
        category=_text(record["category"]),
        cognitive_load=_text(record.get("cognitive_load")) or None,
        status=_text(record.get("status")) or "pending",
        step_completion_ratio=ratio,
        has_steps=steps_total > 0,
        estimated_minutes=_parse_minutes(record.get("estimated_minutes"), "estimated_minutes"),
        actual_minutes=_parse_minutes(record.get("actual_minutes"), "actual_minutes"),
    )
