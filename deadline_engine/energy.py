"""Energy profile accumulation and energy-aware task ordering."""

from __future__ import annotations

import logging
from datetime import datetime
from types import MappingProxyType
from typing import Optional

import numpy as np

from deadline_engine.errors import ConfigurationError
from deadline_engine.schema import CognitiveLoad, EnergyProfile, EnergySlot, FocusSession, SlotKey, Task
from deadline_engine.timemath import clamp, weekday_slot

logger = logging.getLogger(__name__)

DEFAULT_ENERGY = 0.5
HIGH_ENERGY = 0.7
LOW_ENERGY = 0.4

_BREAK_MINUTES = {
    CognitiveLoad.HEAVY: 10,
    CognitiveLoad.EXTREME: 10,
    CognitiveLoad.MODERATE: 7,
}
DEFAULT_BREAK_MINUTES = 5


def slot_key(moment: datetime) -> SlotKey:
    return moment.hour, weekday_slot(moment)


def productivity_sample(session: FocusSession) -> Optional[float]:
    """Score a focus interval in [0, 1]; ``None`` when it carries no signal."""

    if session.actual_minutes <= 0:
        return None
    if session.was_completed:
        return 1.0
    if session.planned_minutes <= 0:
        return None
    return clamp(session.actual_minutes / session.planned_minutes, 0.0, 1.0)


def update_slot(slot: EnergySlot, sample: float) -> EnergySlot:
    n = slot.sample_count
    average = (slot.average_productivity * n + sample) / (n + 1)
    return EnergySlot(average_productivity=average, sample_count=n + 1)


def record_session(profile: EnergyProfile, session: FocusSession) -> EnergyProfile:
    """Return a new profile with the session's (hour, weekday) slot updated."""

    sample = productivity_sample(session)
    if sample is None:
        logger.debug("Ignoring focus session at %s with no usable duration", session.started_at)
        return profile

    key = slot_key(session.started_at)
    slot = profile.get(key, EnergySlot(sample_count=0))
    updated = dict(profile)
    updated[key] = update_slot(slot, sample)
    return MappingProxyType(updated)


def current_energy(profile: EnergyProfile, now: datetime) -> float:
    slot = profile.get(slot_key(now))
    if slot is None:
        return DEFAULT_ENERGY
    return slot.average_productivity


def energy_band(value: float) -> str:
    if value > HIGH_ENERGY:
        return "high"
    if value < LOW_ENERGY:
        return "low"
    return "neutral"


def _load_rank(task: Task) -> int:
    return task.cognitive_load.sort_order if task.cognitive_load is not None else 0


def order_tasks(tasks: list[Task], profile: EnergyProfile, now: datetime) -> list[Task]:
    """Order tasks for the current energy window.

    Overdue tasks lead. High energy puts heavier cognitive load first, low
    energy puts lighter load first. Then soonest deadline, tasks without a
    deadline last, and task id as the final tie-break.
    """

    band = energy_band(current_energy(profile, now))

    def sort_key(task: Task):
        load = _load_rank(task)
        if band == "high":
            load_key = -load
        elif band == "low":
            load_key = load
        else:
            load_key = 0

        no_deadline = task.deadline is None
        deadline_key = 0.0 if no_deadline else (task.deadline - now).total_seconds()
        return (not task.is_overdue(now), load_key, no_deadline, deadline_key, task.task_id)

    return sorted(tasks, key=sort_key)


def break_minutes(task: Optional[Task]) -> int:
    """Rest period after a focus session on ``task``, scaled by cognitive load."""

    if task is None or task.cognitive_load is None:
        return DEFAULT_BREAK_MINUTES
    return _BREAK_MINUTES.get(task.cognitive_load, DEFAULT_BREAK_MINUTES)


def energy_heatmap(profile: EnergyProfile) -> np.ndarray:
    """7x24 grid of average productivity, row ``weekday - 1``; NaN where unseen."""

    grid = np.full((7, 24), np.nan)
    for (hour, weekday), slot in profile.items():
        if not 0 <= hour <= 23 or not 1 <= weekday <= 7:
            raise ConfigurationError(
                "slot_key", (hour, weekday), f"Slot key must be (hour 0..23, weekday 1..7), got {(hour, weekday)!r}"
            )
        if slot.sample_count > 0:
            grid[weekday - 1, hour] = slot.average_productivity
    return grid


def peak_slots(profile: EnergyProfile, top_n: int = 3, min_samples: int = 1) -> list[SlotKey]:
    """Best (hour, weekday) slots by average productivity, ties by slot order."""

    candidates = [(key, slot) for key, slot in profile.items() if slot.sample_count >= min_samples]
    ranked = sorted(candidates, key=lambda item: (-item[1].average_productivity, item[0][1], item[0][0]))
    return [key for key, _ in ranked[:top_n]]
