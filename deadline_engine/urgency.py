"""Additive urgency scoring for open tasks."""

from __future__ import annotations

from datetime import datetime

from deadline_engine.schema import AggressionLevel, Priority, Task
from deadline_engine.timemath import clamp, hours_between

_PRIORITY_POINTS = {
    Priority.CRITICAL: 20.0,
    Priority.HIGH: 14.0,
    Priority.MEDIUM: 8.0,
    Priority.LOW: 3.0,
}

_AGGRESSION_POINTS = {
    AggressionLevel.NUCLEAR: 15.0,
    AggressionLevel.AGGRESSIVE: 10.0,
    AggressionLevel.MODERATE: 5.0,
    AggressionLevel.GENTLE: 0.0,
}

# (upper bound in hours, points), first match wins
_DEADLINE_BUCKETS = (
    (6.0, 42.0),
    (24.0, 35.0),
    (48.0, 28.0),
    (168.0, 18.0),
)

_NO_DEADLINE_POINTS = 5.0
_FAR_DEADLINE_POINTS = 8.0
_OVERDUE_CAP = 50.0
_OVERDUE_FLOOR = 45.0


def _deadline_points(task: Task, now: datetime) -> float:
    if task.deadline is None:
        return _NO_DEADLINE_POINTS

    if task.is_overdue(now):
        hours_overdue = hours_between(task.deadline, now)
        points = min(_OVERDUE_CAP, _OVERDUE_CAP + hours_overdue / 24.0 * 2.0)
        return max(_OVERDUE_FLOOR, points)

    hours_left = hours_between(now, task.deadline)
    for bound, points in _DEADLINE_BUCKETS:
        if hours_left < bound:
            return points
    return _FAR_DEADLINE_POINTS


def _progress_bonus(task: Task) -> float:
    if not task.has_steps:
        return 0.0
    ratio = task.progress
    if ratio > 0.7:
        return 10.0
    if ratio > 0.4:
        return 5.0
    if ratio > 0:
        return 2.0
    return 0.0


def urgency_score(task: Task, now: datetime, return_components: bool = False):
    """Compute a 0-100 urgency score from deadline, priority, aggression and progress.

    The clamp is applied to the grand total only, so an overdue task keeps at
    least its deadline floor and never exceeds 100.
    """

    deadline = _deadline_points(task, now)
    priority = _PRIORITY_POINTS[task.priority]
    aggression = _AGGRESSION_POINTS[task.aggression_level]
    progress = _progress_bonus(task)

    score = clamp(deadline + priority + aggression + progress, 0.0, 100.0)

    if return_components:
        return {
            "score": score,
            "deadline": deadline,
            "priority": priority,
            "aggression": aggression,
            "progress_bonus": progress,
        }

    return score


def rank_by_urgency(tasks: list[Task], now: datetime) -> list[tuple[Task, float]]:
    """Score open tasks and sort by descending urgency, ties by task id."""

    scored = [(task, urgency_score(task, now)) for task in tasks if task.is_open]
    return sorted(scored, key=lambda item: (-item[1], item[0].task_id))


def urgency_band(score: float) -> str:
    if score >= 75:
        return "critical"
    if score >= 55:
        return "high"
    if score >= 35:
        return "elevated"
    return "low"
