"""Reminder tone escalation rules."""

from __future__ import annotations

from deadline_engine.schema import AggressionLevel, ToneTier
from deadline_engine.timemath import format_minutes


# (exclusive upper bound on position fraction, tier); the last band is open-ended
_TIER_BANDS = {
    AggressionLevel.GENTLE: ((None, ToneTier.INFORMATIONAL),),
    AggressionLevel.MODERATE: (
        (0.5, ToneTier.INFORMATIONAL),
        (0.8, ToneTier.FIRM),
        (None, ToneTier.COMMANDING),
    ),
    AggressionLevel.AGGRESSIVE: (
        (0.3, ToneTier.INFORMATIONAL),
        (0.6, ToneTier.NUDGE),
        (0.85, ToneTier.FIRM),
        (None, ToneTier.COMMANDING),
    ),
}
_TIER_BANDS[AggressionLevel.NUCLEAR] = _TIER_BANDS[AggressionLevel.AGGRESSIVE]


def tone_tier(level: AggressionLevel, fraction: float) -> ToneTier:
    """Pick the tone for a reminder at ``fraction`` (0 = earliest, 1 = at deadline)."""

    bands = _TIER_BANDS[level]
    for bound, tier in bands[:-1]:
        if fraction < bound:
            return tier
    return bands[-1][1]


def notification_content(level: AggressionLevel, title: str, minutes_before: int, fraction: float) -> tuple[str, str]:
    """Return (title, body) for a pre-deadline reminder."""

    time_str = format_minutes(minutes_before)
    tier = tone_tier(level, fraction)

    if level == AggressionLevel.GENTLE:
        return f"Reminder: {title}", f"Due in {time_str}. You've got this."

    if level == AggressionLevel.MODERATE:
        if tier == ToneTier.INFORMATIONAL:
            return f"Heads up: {title}", f"'{title}' is due in {time_str}."
        if tier == ToneTier.FIRM:
            return f"{time_str} left", f"'{title}' needs your attention now."
        return f"{time_str} left", f"'{title}': finish it now."

    if tier == ToneTier.INFORMATIONAL:
        return f"{time_str} out", f"'{title}': start now to stay ahead."
    if tier == ToneTier.NUDGE:
        return f"{time_str} left", f"'{title}': you need to move on this."
    if tier == ToneTier.FIRM:
        return f"{time_str} left", f"'{title}': seriously, do it now."
    return time_str, f"'{title}': you're about to miss this."


def overdue_message(title: str, minutes_overdue: int) -> str:
    if minutes_overdue < 30:
        return f"'{title}' is overdue. Submit it NOW."
    if minutes_overdue < 60:
        return f"'{title}': {minutes_overdue}min overdue. This is unacceptable."
    return f"'{title}': {minutes_overdue}min overdue. Every minute counts. DO IT."
