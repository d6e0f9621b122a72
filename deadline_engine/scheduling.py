"""Reminder schedule generation per aggression level."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Mapping

from deadline_engine.config import AggressionSettings
from deadline_engine.escalation import notification_content, overdue_message, tone_tier
from deadline_engine.schema import (
    AggressionConfig,
    AggressionLevel,
    ScheduledNotification,
    Task,
    ToneTier,
    parse_enum,
)
from deadline_engine.timemath import add_minutes

logger = logging.getLogger(__name__)

_URGENT_FRACTION = 0.6
_REMINDER_SUFFIX = re.compile(r"(?:overdue-)?\d+")


def stale_prefix(task_id: str, level: AggressionLevel) -> str:
    """Id prefix shared by a task's reminders at one aggression level, for cancel-by-prefix."""

    level = parse_enum(AggressionLevel, level, "aggression_level")
    return f"{task_id}-{level.value}-"


def stale_prefixes(task_id: str) -> tuple[str, ...]:
    """Prefixes for every level, covering reminders installed before a level change."""

    return tuple(stale_prefix(task_id, level) for level in AggressionLevel)


def owns_reminder(task_id: str, notification_id: str) -> bool:
    """True when ``notification_id`` was generated for exactly ``task_id``."""

    return any(
        _REMINDER_SUFFIX.fullmatch(notification_id[len(prefix):])
        for prefix in stale_prefixes(task_id)
        if notification_id.startswith(prefix)
    )


def _position_fraction(index: int, count: int) -> float:
    # A lone reminder sits at the start of the window, first_reminder_minutes out.
    if count == 1:
        return 0.0
    return index / (count - 1)


def _pre_deadline(task: Task, config: AggressionConfig, now: datetime) -> list[ScheduledNotification]:
    level = task.aggression_level
    count = max(1, config.notification_count)
    total_minutes = float(config.first_reminder_minutes)

    notifications = []
    for index in range(count):
        fraction = _position_fraction(index, count)
        offset = total_minutes * (1.0 - fraction)
        fire_at = add_minutes(task.deadline, -offset)
        if fire_at <= now:
            logger.debug("Dropping past reminder %s-%s-%d at %s", task.task_id, level.value, index, fire_at)
            continue

        title, body = notification_content(level, task.title, int(offset), fraction)
        notifications.append(
            ScheduledNotification(
                id=f"{task.task_id}-{level.value}-{index}",
                title=title,
                body=body,
                fire_at=fire_at,
                is_urgent=fraction > _URGENT_FRACTION,
                tone=tone_tier(level, fraction),
            )
        )
    return notifications


def _post_deadline(task: Task, config: AggressionConfig, now: datetime) -> list[ScheduledNotification]:
    level = task.aggression_level
    if level != AggressionLevel.NUCLEAR:
        return []
    if config.overdue_count <= 0 or config.overdue_interval_minutes <= 0:
        return []

    notifications = []
    for index in range(1, config.overdue_count + 1):
        minutes_overdue = index * config.overdue_interval_minutes
        fire_at = add_minutes(task.deadline, minutes_overdue)
        if fire_at <= now:
            continue
        notifications.append(
            ScheduledNotification(
                id=f"{task.task_id}-{level.value}-overdue-{index}",
                title=f"OVERDUE: {task.title}",
                body=overdue_message(task.title, minutes_overdue),
                fire_at=fire_at,
                is_urgent=True,
                tone=ToneTier.OVERDUE,
            )
        )
    return notifications


def schedule_notifications(task: Task, config: AggressionConfig, now: datetime) -> list[ScheduledNotification]:
    """Build the reminders for ``task`` that still lie in the future, ordered by fire time.

    Ids encode task, level and sequence index, so identical inputs always
    produce identical schedules.
    """

    if task.deadline is None:
        return []

    notifications = _pre_deadline(task, config, now) + _post_deadline(task, config, now)
    return sorted(notifications, key=lambda n: n.fire_at)


def schedule_for_task(task: Task, settings: AggressionSettings, now: datetime) -> list[ScheduledNotification]:
    return schedule_notifications(task, settings.config_for(task.aggression_level), now)


def diff_schedules(
    installed: Mapping[str, datetime], fresh: list[ScheduledNotification]
) -> tuple[list[str], list[ScheduledNotification]]:
    """Compare installed ``{id: fire_at}`` against a fresh schedule.

    Returns the ids to cancel and the notifications to install. A reminder
    whose fire time moved is cancelled and reinstalled under the same id.
    """

    fresh_by_id = {notification.id: notification for notification in fresh}
    changed = {
        notification_id
        for notification_id, fire_at in installed.items()
        if notification_id in fresh_by_id and fresh_by_id[notification_id].fire_at != fire_at
    }
    to_cancel = sorted((set(installed) - set(fresh_by_id)) | changed)
    to_install = [n for n in fresh if n.id not in installed or n.id in changed]
    return to_cancel, to_install
