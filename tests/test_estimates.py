import pytest

from deadline_engine.estimates import estimate_accuracy, task_accuracy
from deadline_engine.schema import Task


def make_task(task_id, estimated=None, actual=None, status="completed"):
    return Task(
        task_id=task_id,
        priority="medium",
        aggression_level="moderate",
        category="work",
        status=status,
        estimated_minutes=estimated,
        actual_minutes=actual,
    )


def test_task_accuracy_is_symmetric_ratio():
    assert task_accuracy(make_task("a", 30, 60)) == 0.5
    assert task_accuracy(make_task("b", 60, 30)) == 0.5
    assert task_accuracy(make_task("c", 45, 45)) == 1.0
    assert task_accuracy(make_task("d", 0, 45)) == 0.0


def test_estimate_accuracy_averages_completed_tasks():
    tasks = [
        make_task("a", 30, 60),
        make_task("b", 40, 40),
        make_task("open", 10, 100, status="in_progress"),
        make_task("no-estimate", None, 50),
        make_task("no-actual", 20, 0),
    ]
    assert estimate_accuracy(tasks) == pytest.approx(0.75)


def test_zero_estimate_still_counts_toward_mean():
    assert estimate_accuracy([make_task("a", 0, 30), make_task("b", 30, 30)]) == pytest.approx(0.5)


def test_estimate_accuracy_none_without_signal():
    assert estimate_accuracy([]) is None
    assert estimate_accuracy([make_task("a", 30, None), make_task("b", None, 20)]) is None
