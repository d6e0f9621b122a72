"""Day-over-day completion streaks and momentum."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from types import MappingProxyType
from typing import Mapping

from deadline_engine.schema import Category, Streak, StreakCategory, parse_enum
from deadline_engine.timemath import clamp, days_between, to_date

logger = logging.getLogger(__name__)

MOMENTUM_DECAY = 0.7
MOMENTUM_CAP_DAYS = 10


def new_streak(category: StreakCategory | str) -> Streak:
    return Streak(category=parse_enum(StreakCategory, category, "streak_category"))


def _momentum(previous: float, count: int) -> float:
    target = min(count, MOMENTUM_CAP_DAYS) / MOMENTUM_CAP_DAYS
    return clamp(previous * MOMENTUM_DECAY + target * (1 - MOMENTUM_DECAY), 0.0, 1.0)


def record_activity(streak: Streak, today: date | datetime) -> Streak:
    """Apply one day of activity; a second call on the same day is a no-op."""

    today = to_date(today)
    last = streak.last_active_date

    if last is not None and days_between(last, today) == 0:
        return streak

    if last is not None and days_between(last, today) == 1:
        count = streak.current_count + 1
    else:
        count = 1
        if last is not None and streak.current_count > 1:
            logger.debug("Streak %s reset after %s", streak.category.value, last)

    return replace(
        streak,
        current_count=count,
        longest_count=max(streak.longest_count, count),
        last_active_date=today,
        momentum_score=_momentum(streak.momentum_score, count),
    )


def streak_category_for(category: Category | str) -> StreakCategory:
    category = parse_enum(Category, category, "category")
    return StreakCategory(category.value)


def record_completion(
    streaks: Mapping[StreakCategory, Streak], category: Category | str, today: date | datetime
) -> Mapping[StreakCategory, Streak]:
    """Update the category streak and the overall streak for one completed task."""

    updated = dict(streaks)
    for key in (streak_category_for(category), StreakCategory.OVERALL):
        current = updated.get(key) or new_streak(key)
        updated[key] = record_activity(current, today)
    return MappingProxyType(updated)


def is_streak_alive(streak: Streak, today: date | datetime) -> bool:
    """True while the streak can still be extended today."""

    if streak.last_active_date is None or streak.current_count == 0:
        return False
    return days_between(streak.last_active_date, to_date(today)) in (0, 1)
