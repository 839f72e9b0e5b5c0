"""Pydantic schemas for reading check-ins and streaks."""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class FlameLevel(str, Enum):
    """Intensity of the current streak, used for display."""

    SPARK = "spark"  # under a week
    WARM = "warm"  # 7+ days
    HOT = "hot"  # 30+ days
    BLAZING = "blazing"  # 100+ days


class CheckInCreate(BaseModel):
    """Schema for recording a check-in."""

    user_id: str = Field(..., min_length=1, max_length=255)
    activity_date: date
    activity_type: str = Field("check_in", min_length=1, max_length=50)

    @field_validator("user_id", "activity_type")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("activity_date", mode="before")
    @classmethod
    def drop_time_component(cls, v):
        """Reduce datetimes to their calendar day."""
        if isinstance(v, datetime):
            return v.date()
        return v


class CheckInResponse(BaseModel):
    """Schema for check-in response."""

    id: UUID
    user_id: str
    activity_date: date
    activity_type: str
    created_at: datetime

    model_config = {"from_attributes": True}


class StreakBadge(BaseModel):
    """A badge earned by reaching a streak length."""

    name: str
    days_required: int
    flames: int


class StreakSummary(BaseModel):
    """Streak values derived from a user's check-in history."""

    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    checked_in_today: bool = False
    last_activity_date: Optional[date] = None

    # Milestones
    next_milestone: int = 7
    milestone_progress: float = Field(0.0, ge=0, le=100)  # percentage
    badges: list[StreakBadge] = Field(default_factory=list)
    flame_level: FlameLevel = FlameLevel.SPARK

    @property
    def days_to_next_milestone(self) -> int:
        """Days remaining until the next milestone."""
        return max(self.next_milestone - self.current_streak, 0)


class CheckInResult(BaseModel):
    """Outcome of a check-in write followed by a recompute."""

    check_in: CheckInResponse
    created: bool  # False when the day was already checked in
    summary: StreakSummary


class MilestoneStatus(BaseModel):
    """A rung of the milestone ladder for one user."""

    days_required: int
    achieved: bool  # reached by the longest streak
    is_next: bool  # the milestone the current streak is working toward
    days_remaining: int
