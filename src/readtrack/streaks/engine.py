"""Streak calculation - pure functions, no DB access.

All functions work on calendar days. Callers convert timestamps to the
user's local day before calling in, and always pass ``today`` explicitly
so results never depend on the machine clock.
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from .schemas import FlameLevel, StreakBadge, StreakSummary

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# Date part of an ISO string, optionally followed by a "T" or space separated time
ISO_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})(?:[T ]\d.*)?")

# Milestone ladder used for progress display
MILESTONES = (7, 30, 100, 365, 1000)

# (days required, badge name, flame count)
BADGES = (
    (7, "7 Day Streak", 1),
    (30, "30 Day Streak", 2),
    (100, "100 Day Streak", 3),
)


def _as_day(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _distinct_days(dates: Iterable[date]) -> set[date]:
    return {_as_day(d) for d in dates}


def to_calendar_days(values: Iterable[object]) -> list[date]:
    """Convert raw activity values to calendar days.

    Accepts ``date``, ``datetime`` and ISO strings (``YYYY-MM-DD``, with an
    optional ``T`` or space separated time that is ignored). Anything else
    is skipped with a warning rather than failing the whole computation.

    Args:
        values: Raw activity dates

    Returns:
        List of calendar days, in input order, duplicates kept
    """
    days = []
    for value in values:
        if isinstance(value, date):
            days.append(_as_day(value))
            continue
        if isinstance(value, str):
            match = ISO_DATE_RE.fullmatch(value.strip())
            if match:
                try:
                    days.append(date.fromisoformat(match.group(1)))
                    continue
                except ValueError:
                    pass
        logger.warning("Skipping unparseable activity date: %r", value)
    return days


def compute_current_streak(dates: Iterable[date], today: date) -> int:
    """Count consecutive days ending today or yesterday.

    Args:
        dates: Check-in days, any order, duplicates allowed
        today: Reference day

    Returns:
        Current streak length, 0 if the latest check-in is older than yesterday
    """
    days = sorted(_distinct_days(dates), reverse=True)
    if not days:
        return 0

    today = _as_day(today)
    if days[0] != today and days[0] != today - ONE_DAY:
        return 0

    streak = 1
    for newer, older in zip(days, days[1:]):
        if newer - older != ONE_DAY:
            break
        streak += 1
    return streak


def compute_longest_streak(dates: Iterable[date]) -> int:
    """Find the longest run of consecutive days anywhere in the history."""
    days = sorted(_distinct_days(dates))
    if not days:
        return 0

    max_run = 1
    current_run = 1
    for earlier, later in zip(days, days[1:]):
        if later - earlier == ONE_DAY:
            current_run += 1
            max_run = max(max_run, current_run)
        else:
            current_run = 1
    return max_run


def is_checked_in_today(dates: Iterable[date], today: date) -> bool:
    """Check whether ``today`` is among the check-in days."""
    return _as_day(today) in _distinct_days(dates)


def last_activity_date(dates: Iterable[date]) -> Optional[date]:
    """Most recent check-in day, or None for an empty history."""
    return max(_distinct_days(dates), default=None)


def next_milestone(current_streak: int) -> int:
    """Smallest milestone above the streak; 1000 once past 365."""
    for milestone in MILESTONES:
        if current_streak < milestone:
            return milestone
    return MILESTONES[-1]


def milestone_progress(current_streak: int) -> float:
    """Percentage of the way to the next milestone, capped at 100."""
    return min(100.0, current_streak / next_milestone(current_streak) * 100)


def earned_badges(current_streak: int) -> list[StreakBadge]:
    """Badges reached by the current streak, smallest first."""
    return [
        StreakBadge(name=name, days_required=days, flames=flames)
        for days, name, flames in BADGES
        if current_streak >= days
    ]


def flame_level(current_streak: int) -> FlameLevel:
    """Display intensity for a streak length."""
    if current_streak >= 100:
        return FlameLevel.BLAZING
    if current_streak >= 30:
        return FlameLevel.HOT
    if current_streak >= 7:
        return FlameLevel.WARM
    return FlameLevel.SPARK


def summarize(dates: Iterable[date], today: date) -> StreakSummary:
    """Compute every derived streak value for one user's history.

    Args:
        dates: Check-in days, any order, duplicates allowed
        today: Reference day in the user's local calendar

    Returns:
        StreakSummary
    """
    days = _distinct_days(dates)
    current = compute_current_streak(days, today)

    return StreakSummary(
        current_streak=current,
        longest_streak=compute_longest_streak(days),
        checked_in_today=is_checked_in_today(days, today),
        last_activity_date=last_activity_date(days),
        next_milestone=next_milestone(current),
        milestone_progress=round(milestone_progress(current), 1),
        badges=earned_badges(current),
        flame_level=flame_level(current),
    )
