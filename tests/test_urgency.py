from datetime import datetime, timedelta

from deadline_engine.schema import Task
from deadline_engine.urgency import rank_by_urgency, urgency_band, urgency_score

NOW = datetime(2025, 3, 10, 9, 0)


def make_task(task_id="t1", hours=None, priority="medium", aggression="moderate", **kwargs):
    deadline = NOW + timedelta(hours=hours) if hours is not None else None
    return Task(
        task_id=task_id,
        priority=priority,
        aggression_level=aggression,
        category="school",
        deadline=deadline,
        **kwargs,
    )


def test_three_hours_high_aggressive_no_steps():
    task = make_task(hours=3, priority="high", aggression="aggressive")
    assert urgency_score(task, NOW) == 66


def test_deadline_buckets():
    expected = [(2, 42), (12, 35), (30, 28), (100, 18), (24 * 10, 8)]
    for hours, points in expected:
        components = urgency_score(make_task(hours=hours), NOW, return_components=True)
        assert components["deadline"] == points


def test_no_deadline_gets_flat_points():
    components = urgency_score(make_task(), NOW, return_components=True)
    assert components["deadline"] == 5
    assert components["score"] == 5 + 8 + 5


def test_overdue_never_below_floor():
    for priority in ("low", "medium", "high", "critical"):
        for aggression in ("gentle", "moderate", "aggressive", "nuclear"):
            task = make_task(hours=-1, priority=priority, aggression=aggression)
            assert urgency_score(task, NOW) >= 45


def test_ten_years_overdue_is_clamped():
    task = make_task(
        hours=-24 * 365 * 10,
        priority="critical",
        aggression="nuclear",
        has_steps=True,
        step_completion_ratio=0.9,
    )
    assert urgency_score(task, NOW) == 95
    assert 0 <= urgency_score(task, NOW) <= 100


def test_completed_task_past_deadline_is_not_overdue():
    task = make_task(hours=-5, status="completed")
    assert urgency_score(task, NOW, return_components=True)["deadline"] == 42


def test_progress_bonus_requires_steps():
    assert urgency_score(make_task(step_completion_ratio=0.9), NOW, return_components=True)["progress_bonus"] == 0

    bonuses = [(0.0, 0), (0.1, 2), (0.5, 5), (0.71, 10), (1.3, 10)]
    for ratio, bonus in bonuses:
        task = make_task(has_steps=True, step_completion_ratio=ratio)
        assert urgency_score(task, NOW, return_components=True)["progress_bonus"] == bonus


def test_rank_by_urgency_breaks_ties_by_id_and_skips_closed():
    tasks = [
        make_task("b", hours=3),
        make_task("a", hours=3),
        make_task("c", hours=200, priority="low", aggression="gentle"),
        make_task("done", hours=1, status="completed"),
    ]
    ranked = rank_by_urgency(tasks, NOW)
    assert [task.task_id for task, _ in ranked] == ["a", "b", "c"]
    assert ranked[0][1] == ranked[1][1]


def test_urgency_band():
    assert urgency_band(90) == "critical"
    assert urgency_band(66) == "high"
    assert urgency_band(40) == "elevated"
    assert urgency_band(10) == "low"


def test_non_finite_step_ratio_counts_as_no_progress():
    for ratio in (float("nan"), float("inf"), float("-inf")):
        task = make_task(has_steps=True, step_completion_ratio=ratio)
        assert task.progress == 0.0
        assert urgency_score(task, NOW, return_components=True)["progress_bonus"] == 0
