from datetime import date, datetime

from deadline_engine.timemath import (
    clamp,
    days_between,
    end_of_day,
    format_minutes,
    hours_between,
    start_of_day,
    weekday_slot,
)


def test_format_minutes():
    assert format_minutes(4320) == "3 days"
    assert format_minutes(1440) == "1 day"
    assert format_minutes(1439) == "23 hours"
    assert format_minutes(60) == "1 hour"
    assert format_minutes(59) == "59 min"
    assert format_minutes(0) == "0 min"


def test_day_boundaries():
    moment = datetime(2025, 3, 10, 17, 45, 12)
    assert start_of_day(moment) == datetime(2025, 3, 10)
    assert end_of_day(moment) == datetime(2025, 3, 11)
    assert days_between(date(2025, 2, 28), datetime(2025, 3, 1, 0, 5)) == 1
    assert hours_between(datetime(2025, 3, 10), moment) > 17


def test_weekday_slot_starts_on_sunday():
    assert weekday_slot(datetime(2025, 3, 9)) == 1  # Sunday
    assert weekday_slot(datetime(2025, 3, 10)) == 2
    assert weekday_slot(datetime(2025, 3, 15)) == 7


def test_clamp():
    assert clamp(1.2, 0.0, 1.0) == 1.0
    assert clamp(-3, 0, 100) == 0
