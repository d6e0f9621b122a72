"""Core data schema for task snapshots and decision outputs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Mapping, Optional, TypeVar

from deadline_engine.errors import ConfigurationError


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AggressionLevel(str, Enum):
    GENTLE = "gentle"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
    NUCLEAR = "nuclear"


class Category(str, Enum):
    SCHOOL = "school"
    WORK = "work"
    PERSONAL = "personal"


class CognitiveLoad(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    EXTREME = "extreme"

    @property
    def sort_order(self) -> int:
        return _LOAD_ORDER[self]


_LOAD_ORDER = {
    CognitiveLoad.LIGHT: 1,
    CognitiveLoad.MODERATE: 2,
    CognitiveLoad.HEAVY: 3,
    CognitiveLoad.EXTREME: 4,
}


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class ToneTier(str, Enum):
    """Message tone; downstream code maps each tier to a notification channel."""

    INFORMATIONAL = "informational"
    NUDGE = "nudge"
    FIRM = "firm"
    COMMANDING = "commanding"
    OVERDUE = "overdue"


class StreakCategory(str, Enum):
    SCHOOL = "school"
    WORK = "work"
    PERSONAL = "personal"
    OVERALL = "overall"


E = TypeVar("E", bound=Enum)


def parse_enum(enum_type: type[E], value, field: str) -> E:
    """Coerce ``value`` into ``enum_type``; unknown values are a configuration error."""

    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        try:
            return enum_type(value.strip().lower())
        except ValueError:
            pass
    raise ConfigurationError(field, value)


@dataclass(frozen=True)
class Task:
    """Read-only task snapshot handed to the core by the orchestrator."""

    task_id: str
    priority: Priority
    aggression_level: AggressionLevel
    category: Category
    title: str = ""
    deadline: Optional[datetime] = None
    cognitive_load: Optional[CognitiveLoad] = None
    status: TaskStatus = TaskStatus.PENDING
    step_completion_ratio: float = 0.0
    has_steps: bool = False
    estimated_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "priority", parse_enum(Priority, self.priority, "priority"))
        object.__setattr__(
            self, "aggression_level", parse_enum(AggressionLevel, self.aggression_level, "aggression_level")
        )
        object.__setattr__(self, "category", parse_enum(Category, self.category, "category"))
        object.__setattr__(self, "status", parse_enum(TaskStatus, self.status, "status"))
        if self.cognitive_load is not None:
            object.__setattr__(
                self, "cognitive_load", parse_enum(CognitiveLoad, self.cognitive_load, "cognitive_load")
            )

    @property
    def is_open(self) -> bool:
        return self.status not in (TaskStatus.COMPLETED, TaskStatus.ABANDONED)

    def is_overdue(self, now: datetime) -> bool:
        if self.deadline is None:
            return False
        return self.deadline < now and self.status != TaskStatus.COMPLETED

    @property
    def progress(self) -> float:
        """Step completion ratio saturated to [0, 1]; NaN and infinities count as no progress."""

        ratio = float(self.step_completion_ratio)
        if not math.isfinite(ratio):
            return 0.0
        return max(0.0, min(1.0, ratio))


@dataclass(frozen=True)
class AggressionConfig:
    """Reminder intensity for one aggression level."""

    notification_count: int
    first_reminder_minutes: int
    overdue_interval_minutes: int = 0
    overdue_count: int = 0

    def __post_init__(self) -> None:
        for name in (
            "notification_count",
            "first_reminder_minutes",
            "overdue_interval_minutes",
            "overdue_count",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(name, value, f"{name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class ScheduledNotification:
    """A reminder the orchestrator should install; never persisted by the core."""

    id: str
    title: str
    body: str
    fire_at: datetime
    is_urgent: bool
    tone: ToneTier = ToneTier.INFORMATIONAL


@dataclass(frozen=True)
class EnergySlot:
    average_productivity: float = 0.5
    sample_count: int = 0


# (hour 0..23, weekday 1..7 with Sunday=1)
SlotKey = tuple[int, int]
EnergyProfile = Mapping[SlotKey, EnergySlot]


@dataclass(frozen=True)
class FocusSession:
    """A completed or abandoned focus interval."""

    started_at: datetime
    planned_minutes: int
    actual_minutes: int
    was_completed: bool = False


@dataclass(frozen=True)
class Streak:
    category: StreakCategory
    current_count: int = 0
    longest_count: int = 0
    last_active_date: Optional[date] = None
    momentum_score: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", parse_enum(StreakCategory, self.category, "streak_category"))
