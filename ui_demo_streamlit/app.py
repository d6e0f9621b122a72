"""Streamlit demo UI for deadline-engine."""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from deadline_engine.adapters import csv_adapter, json_adapter
from deadline_engine.config import AggressionSettings, default_config
from deadline_engine.daily_plan import build_daily_plan
from deadline_engine.energy import energy_heatmap, record_session
from deadline_engine.pressure import PRESSURE_CATEGORIES
from deadline_engine.schema import AggressionConfig, AggressionLevel, FocusSession

LEVELS = [level.value for level in AggressionLevel]


def _parse_tasks_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        return _parse_tasks_from_path(temp_path)
    finally:
        Path(temp_path).unlink(missing_ok=True)


def _demo_profile(now: datetime, productivity: float):
    """Seed the current slot so the energy band can be explored from the sidebar."""

    planned = 50
    session = FocusSession(now, planned_minutes=planned, actual_minutes=max(1, round(planned * productivity)))
    return record_session({}, session)


def run_engine(tasks: list, now: datetime, productivity: float, level: str, config: AggressionConfig) -> dict[str, Any]:
    """Run all engine steps and return a UI-friendly result payload."""

    profile = _demo_profile(now, productivity)
    settings = AggressionSettings().with_override(level, config)
    plan = build_daily_plan(tasks, now, profile=profile, settings=settings)
    plan["heatmap"] = energy_heatmap(profile)
    return plan


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Deadline Engine Demo", layout="wide")
    st.title("Deadline Engine: Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload task snapshot", type=["csv", "json"])
        use_demo = st.checkbox("Load demo tasks", value=True)
        now_date = st.date_input("Plan date", value=datetime(2025, 3, 10).date())
        now_hour = st.slider("Now hour", min_value=0, max_value=23, value=9)
        productivity = st.slider("Productivity in this slot", min_value=0.0, max_value=1.0, value=0.5, step=0.05)

        st.subheader("Aggression override")
        level = st.selectbox("Level", options=LEVELS, index=LEVELS.index("aggressive"))
        defaults = default_config(level)
        count = st.number_input("Notifications", min_value=0, max_value=20, value=defaults.notification_count)
        first = st.number_input(
            "First reminder (minutes before)", min_value=0, max_value=20160, value=defaults.first_reminder_minutes
        )
        interval = st.number_input(
            "Overdue interval (minutes)", min_value=0, max_value=240, value=defaults.overdue_interval_minutes
        )
        overdue_count = st.number_input("Overdue reminders", min_value=0, max_value=20, value=defaults.overdue_count)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            tasks = csv_adapter.parse("examples/sample_tasks.csv")
            data_source = "demo tasks (examples/sample_tasks.csv)"
        elif uploaded is not None:
            tasks = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo tasks'.")
            return

        if not tasks:
            st.error("No tasks were found in the selected input.")
            return

        now = datetime.combine(now_date, datetime.min.time()) + timedelta(hours=int(now_hour))
        config = AggressionConfig(int(count), int(first), int(interval), int(overdue_count))
        result = run_engine(tasks, now, float(productivity), level, config)

        st.success(f"Loaded {len(tasks)} tasks from {data_source}.")

        st.subheader("A) Pressure")
        summary = result["pressure"]["summary"]
        c1, c2, c3 = st.columns(3)
        c1.metric("Overdue", summary["overdue"])
        c2.metric("Due soon", summary["due_soon"])
        c3.metric("Active", summary["active"])
        st.table(
            {
                category.value: row
                for category, row in zip(PRESSURE_CATEGORIES, result["pressure"]["grid"])
            }
        )

        st.subheader("B) Urgency ranking")
        st.table(result["urgency"])

        st.subheader("C) Energy-aware order")
        e1, e2 = st.columns(2)
        e1.metric("Energy", f"{result['energy']['level']:.2f}")
        e2.metric("Band", result["energy"]["band"])
        st.write(" > ".join(result["order"]))

        st.subheader("D) Reminder schedules")
        for task_id, reminders in result["reminders"].items():
            with st.expander(f"{task_id} ({len(reminders)} reminders)"):
                if reminders:
                    st.table(reminders)
                else:
                    st.write("Nothing left to schedule.")

        st.subheader("E) Productivity heatmap (weekday x hour)")
        st.dataframe(result["heatmap"])

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the demo. Please verify the input format.")


if __name__ == "__main__":
    main()
