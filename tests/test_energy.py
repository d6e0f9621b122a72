from datetime import datetime, timedelta

import numpy as np
import pytest

from deadline_engine.energy import (
    break_minutes,
    current_energy,
    energy_band,
    energy_heatmap,
    order_tasks,
    peak_slots,
    productivity_sample,
    record_session,
)
from deadline_engine.errors import ConfigurationError
from deadline_engine.schema import EnergySlot, FocusSession, Task

NOW = datetime(2025, 3, 10, 9, 0)  # Monday, slot (9, 2)


def make_task(task_id, load=None, hours=None):
    return Task(
        task_id=task_id,
        priority="medium",
        aggression_level="moderate",
        category="work",
        cognitive_load=load,
        deadline=NOW + timedelta(hours=hours) if hours is not None else None,
    )


def profile_at(value):
    return {(9, 2): EnergySlot(average_productivity=value, sample_count=4)}


def test_productivity_sample():
    assert productivity_sample(FocusSession(NOW, 25, 10, was_completed=True)) == 1.0
    assert productivity_sample(FocusSession(NOW, 40, 10)) == 0.25
    assert productivity_sample(FocusSession(NOW, 20, 30)) == 1.0
    assert productivity_sample(FocusSession(NOW, 25, 0)) is None


def test_record_session_running_mean():
    profile = {}
    profile = record_session(profile, FocusSession(NOW, 50, 50, was_completed=True))
    profile = record_session(profile, FocusSession(NOW + timedelta(minutes=30), 50, 25))

    slot = profile[(9, 2)]
    assert slot.sample_count == 2
    assert slot.average_productivity == pytest.approx(0.75)


def test_record_session_does_not_mutate_input():
    original = {(9, 2): EnergySlot(0.5, 1)}
    updated = record_session(original, FocusSession(NOW, 50, 50, was_completed=True))
    assert original[(9, 2)] == EnergySlot(0.5, 1)
    assert updated[(9, 2)] == EnergySlot(0.75, 2)


def test_empty_session_is_ignored():
    profile = {}
    assert record_session(profile, FocusSession(NOW, 25, 0)) is profile


def test_current_energy_defaults():
    assert current_energy({}, NOW) == 0.5
    assert current_energy(profile_at(0.9), NOW) == 0.9
    assert energy_band(0.9) == "high"
    assert energy_band(0.2) == "low"
    assert energy_band(0.7) == "neutral"


def test_overdue_tasks_lead():
    tasks = [make_task("soon", "extreme", hours=2), make_task("late", "light", hours=-3)]
    ordered = order_tasks(tasks, profile_at(0.9), NOW)
    assert [t.task_id for t in ordered] == ["late", "soon"]


def test_high_energy_front_loads_heavy_work():
    tasks = [
        make_task("unset", None, hours=1),
        make_task("light", "light", hours=2),
        make_task("extreme", "extreme", hours=50),
        make_task("heavy", "heavy", hours=3),
        make_task("moderate", "moderate", hours=4),
    ]
    ordered = order_tasks(tasks, profile_at(0.9), NOW)
    assert [t.task_id for t in ordered] == ["extreme", "heavy", "moderate", "light", "unset"]


def test_low_energy_reverses_load_order():
    tasks = [
        make_task("extreme", "extreme", hours=1),
        make_task("light", "light", hours=20),
        make_task("heavy", "heavy", hours=2),
    ]
    ordered = order_tasks(tasks, profile_at(0.2), NOW)
    assert [t.task_id for t in ordered] == ["light", "heavy", "extreme"]


def test_neutral_energy_orders_by_deadline_then_id():
    tasks = [
        make_task("none", "extreme"),
        make_task("b", "light", hours=5),
        make_task("a", "heavy", hours=5),
        make_task("first", "light", hours=1),
    ]
    ordered = order_tasks(tasks, {}, NOW)
    assert [t.task_id for t in ordered] == ["first", "a", "b", "none"]


def test_heatmap_and_peaks():
    profile = {
        (9, 2): EnergySlot(0.9, 3),
        (14, 6): EnergySlot(0.4, 2),
        (20, 1): EnergySlot(0.95, 1),
    }
    grid = energy_heatmap(profile)
    assert grid.shape == (7, 24)
    assert grid[1, 9] == 0.9
    assert np.isnan(grid[0, 0])

    assert peak_slots(profile, top_n=2) == [(20, 1), (9, 2)]
    assert peak_slots(profile, top_n=2, min_samples=2) == [(9, 2), (14, 6)]


def test_heatmap_rejects_out_of_range_slot_keys():
    for key in [(9, 0), (9, 8), (24, 2), (-1, 2)]:
        with pytest.raises(ConfigurationError):
            energy_heatmap({key: EnergySlot(0.5, 1)})


def test_overdue_tasks_ordered_by_load_on_high_energy():
    tasks = [make_task("a", "light", hours=-5), make_task("b", "extreme", hours=-1)]
    ordered = order_tasks(tasks, profile_at(0.9), NOW)
    assert [t.task_id for t in ordered] == ["b", "a"]


def test_overdue_tasks_ordered_by_load_on_low_energy():
    tasks = [make_task("b", "extreme", hours=-1), make_task("a", "light", hours=-5)]
    ordered = order_tasks(tasks, profile_at(0.2), NOW)
    assert [t.task_id for t in ordered] == ["a", "b"]


def test_overdue_tasks_with_equal_load_ordered_by_deadline():
    tasks = [make_task("recent", "heavy", hours=-1), make_task("oldest", "heavy", hours=-5)]
    ordered = order_tasks(tasks, profile_at(0.9), NOW)
    assert [t.task_id for t in ordered] == ["oldest", "recent"]


def test_break_minutes_by_cognitive_load():
    assert break_minutes(make_task("x", "extreme")) == 10
    assert break_minutes(make_task("x", "heavy")) == 10
    assert break_minutes(make_task("x", "moderate")) == 7
    assert break_minutes(make_task("x", "light")) == 5
    assert break_minutes(make_task("x")) == 5
    assert break_minutes(None) == 5
