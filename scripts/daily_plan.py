"""Build a daily plan from a CSV/JSON task snapshot file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from deadline_engine.adapters import csv_adapter, json_adapter
from deadline_engine.config import load_settings
from deadline_engine.daily_plan import build_daily_plan
from deadline_engine.errors import ConfigurationError


def _load_tasks(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Build a deadline-engine daily plan")
    parser.add_argument("--tasks", required=True, help="Path to CSV/JSON task snapshot file")
    parser.add_argument("--settings", help="Path to aggression settings JSON")
    parser.add_argument("--now", help="ISO-8601 timestamp to plan for (defaults to the current time)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        tasks = _load_tasks(Path(args.tasks))
        settings = load_settings(args.settings) if args.settings else None
    except ConfigurationError as exc:
        parser.error(f"configuration error: {exc}")

    now = datetime.fromisoformat(args.now) if args.now else datetime.now()
    plan = build_daily_plan(tasks, now, settings=settings)

    print(json.dumps(plan, indent=2))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "daily_plan.json"
    out_path.write_text(json.dumps(plan, indent=2), encoding="utf-8")
    print(f"Saved daily plan to {out_path}")


if __name__ == "__main__":
    main()
