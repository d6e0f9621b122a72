"""Duration and day-boundary helpers shared by the decision modules."""

from __future__ import annotations

from datetime import date, datetime, timedelta


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60.0


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def add_minutes(moment: datetime, minutes: float) -> datetime:
    return moment + timedelta(minutes=minutes)


def format_minutes(minutes: int) -> str:
    """Render a whole-minute duration as days, hours or minutes, rounding down."""

    minutes = int(minutes)
    if minutes >= 1440:
        days = minutes // 1440
        return "1 day" if days == 1 else f"{days} days"
    if minutes >= 60:
        hours = minutes // 60
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} min"


def to_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    """Start of the following calendar day."""

    return start_of_day(moment) + timedelta(days=1)


def days_between(earlier: date | datetime, later: date | datetime) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""

    return (to_date(later) - to_date(earlier)).days


def weekday_slot(moment: datetime) -> int:
    """Day of week in 1..7 with Sunday=1, Saturday=7."""

    return moment.isoweekday() % 7 + 1
