"""How closely completed tasks matched their time estimates."""

from __future__ import annotations

from typing import Iterable, Optional

from deadline_engine.schema import Task, TaskStatus


def _has_estimate_signal(task: Task) -> bool:
    return (
        task.status == TaskStatus.COMPLETED
        and task.estimated_minutes is not None
        and task.actual_minutes is not None
        and task.actual_minutes > 0
    )


def task_accuracy(task: Task) -> float:
    """``min / max`` of estimate and actual in [0, 1]; 0 when either is not positive."""

    estimated = task.estimated_minutes or 0
    actual = task.actual_minutes or 0
    if estimated <= 0 or actual <= 0:
        return 0.0
    return min(estimated, actual) / max(estimated, actual)


def estimate_accuracy(tasks: Iterable[Task]) -> Optional[float]:
    """Mean per-task accuracy over completed tasks with an estimate and a recorded actual.

    A zero estimate still counts toward the mean with accuracy 0. Returns
    ``None`` when no task qualifies.
    """

    scored = [task_accuracy(task) for task in tasks if _has_estimate_signal(task)]
    if not scored:
        return None
    return sum(scored) / len(scored)
