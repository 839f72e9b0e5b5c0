"""Reading check-ins and streaks module."""

from .engine import (
    compute_current_streak,
    compute_longest_streak,
    is_checked_in_today,
    next_milestone,
    milestone_progress,
    summarize,
    to_calendar_days,
)
from .errors import StreakError, InvalidCheckInError
from .manager import StreakManager
from .models import CheckIn
from .schemas import (
    FlameLevel,
    CheckInCreate,
    CheckInResponse,
    CheckInResult,
    StreakBadge,
    StreakSummary,
    MilestoneStatus,
)

__all__ = [
    "compute_current_streak",
    "compute_longest_streak",
    "is_checked_in_today",
    "next_milestone",
    "milestone_progress",
    "summarize",
    "to_calendar_days",
    "StreakError",
    "InvalidCheckInError",
    "StreakManager",
    "CheckIn",
    "FlameLevel",
    "CheckInCreate",
    "CheckInResponse",
    "CheckInResult",
    "StreakBadge",
    "StreakSummary",
    "MilestoneStatus",
]
