"""Per-category deadline pressure over the coming week."""

from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np

from deadline_engine.schema import AggressionLevel, Category, Task
from deadline_engine.timemath import end_of_day, start_of_day

PRESSURE_CATEGORIES = (Category.SCHOOL, Category.WORK, Category.PERSONAL)

_AGGRESSION_PRESSURE = {
    AggressionLevel.NUCLEAR: 0.3,
    AggressionLevel.AGGRESSIVE: 0.2,
    AggressionLevel.MODERATE: 0.1,
    AggressionLevel.GENTLE: 0.0,
}


def _due_on(task: Task, now: datetime, day_offset: int) -> bool:
    if task.deadline is None:
        return False
    day_start = start_of_day(now) + timedelta(days=day_offset)
    day_end = day_start + timedelta(days=1)
    if day_offset == 0:
        # today also carries everything already overdue
        return task.deadline < end_of_day(now)
    return day_start <= task.deadline < day_end


def cell_pressure(tasks: list[Task], now: datetime) -> float:
    if not tasks:
        return 0.0
    pressure = 0.3 * len(tasks)
    for task in tasks:
        if task.is_overdue(now):
            pressure += 0.4
        pressure += _AGGRESSION_PRESSURE[task.aggression_level]
    return min(pressure, 1.0)


def pressure_map(tasks: list[Task], now: datetime, days: int = 7) -> np.ndarray:
    """Pressure grid shaped (category, day offset) with values in [0, 1]."""

    open_tasks = [task for task in tasks if task.is_open]
    grid = np.zeros((len(PRESSURE_CATEGORIES), days))
    for row, category in enumerate(PRESSURE_CATEGORIES):
        in_category = [task for task in open_tasks if task.category == category]
        for day_offset in range(days):
            cell = [task for task in in_category if _due_on(task, now, day_offset)]
            grid[row, day_offset] = cell_pressure(cell, now)
    return grid


def pressure_summary(tasks: list[Task], now: datetime) -> dict:
    open_tasks = [task for task in tasks if task.is_open]
    horizon = now + timedelta(hours=48)
    return {
        "overdue": sum(1 for task in open_tasks if task.is_overdue(now)),
        "due_soon": sum(1 for task in open_tasks if task.deadline is not None and now < task.deadline < horizon),
        "active": len(open_tasks),
    }
