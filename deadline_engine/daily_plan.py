"""Deterministic daily plan assembled from the decision modules."""

from __future__ import annotations

from datetime import datetime

from deadline_engine.config import AggressionSettings
from deadline_engine.energy import current_energy, energy_band, order_tasks
from deadline_engine.estimates import estimate_accuracy
from deadline_engine.pressure import pressure_map, pressure_summary
from deadline_engine.scheduling import schedule_for_task
from deadline_engine.schema import EnergyProfile, Task
from deadline_engine.timemath import end_of_day
from deadline_engine.urgency import rank_by_urgency, urgency_band


def _notification_row(notification) -> dict:
    return {
        "id": notification.id,
        "title": notification.title,
        "body": notification.body,
        "fire_at": notification.fire_at.isoformat(),
        "is_urgent": notification.is_urgent,
        "tone": notification.tone.value,
    }


def due_today(tasks: list[Task], now: datetime) -> list[Task]:
    """Open tasks due by the end of today, overdue ones included, soonest deadline first."""

    cutoff = end_of_day(now)
    due = [task for task in tasks if task.is_open and task.deadline is not None and task.deadline <= cutoff]
    return sorted(due, key=lambda task: (task.deadline, task.task_id))


def build_daily_plan(
    tasks: list[Task],
    now: datetime,
    profile: EnergyProfile | None = None,
    settings: AggressionSettings | None = None,
) -> dict:
    """Combine urgency ranking, energy order, reminders and pressure into one payload."""

    profile = profile or {}
    settings = settings or AggressionSettings()
    open_tasks = [task for task in tasks if task.is_open]
    energy = current_energy(profile, now)

    return {
        "generated_at": now.isoformat(),
        "energy": {"level": energy, "band": energy_band(energy)},
        "urgency": [
            {"task_id": task.task_id, "title": task.title, "score": score, "band": urgency_band(score)}
            for task, score in rank_by_urgency(open_tasks, now)
        ],
        "today": [task.task_id for task in due_today(open_tasks, now)],
        "order": [task.task_id for task in order_tasks(open_tasks, profile, now)],
        "reminders": {
            task.task_id: [_notification_row(n) for n in schedule_for_task(task, settings, now)]
            for task in sorted(open_tasks, key=lambda t: t.task_id)
        },
        "pressure": {
            "grid": pressure_map(open_tasks, now).round(3).tolist(),
            "summary": pressure_summary(open_tasks, now),
        },
        "estimate_accuracy": estimate_accuracy(tasks),
    }
