"""Demo script for deadline-engine."""

import sys
from datetime import date, datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from deadline_engine.adapters.csv_adapter import parse
from deadline_engine.daily_plan import build_daily_plan
from deadline_engine.energy import record_session
from deadline_engine.schema import FocusSession
from deadline_engine.streaks import record_completion


def main() -> None:
    now = datetime(2025, 3, 10, 9, 0)
    tasks = parse("examples/sample_tasks.csv")

    profile = {}
    for session in (
        FocusSession(datetime(2025, 3, 3, 9, 5), planned_minutes=50, actual_minutes=50, was_completed=True),
        FocusSession(datetime(2025, 3, 3, 9, 40), planned_minutes=25, actual_minutes=20),
    ):
        profile = record_session(profile, session)

    streaks = {}
    for day in (date(2025, 3, 8), date(2025, 3, 9), date(2025, 3, 10)):
        streaks = record_completion(streaks, "school", day)

    plan = build_daily_plan(tasks, now, profile=profile)
    print("Energy:", plan["energy"])
    print("Urgency:", [(row["task_id"], row["score"]) for row in plan["urgency"]])
    print("Order:", plan["order"])
    print("Due today:", plan["today"])
    print("Streaks:", {key.value: (s.current_count, round(s.momentum_score, 3)) for key, s in streaks.items()})


if __name__ == "__main__":
    main()
