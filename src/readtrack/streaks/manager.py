"""Streak manager for check-in persistence and streak lookups."""

import logging
from datetime import date
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Config, get_config
from ..db.sqlite import Database, get_db
from . import engine
from .errors import InvalidCheckInError
from .models import CheckIn
from .schemas import (
    CheckInCreate,
    CheckInResponse,
    CheckInResult,
    MilestoneStatus,
    StreakSummary,
)

logger = logging.getLogger(__name__)


class StreakManager:
    """Stores check-ins and recomputes streaks from the stored history."""

    def __init__(self, db: Optional[Database] = None, config: Optional[Config] = None):
        """Initialize streak manager.

        Args:
            db: Database instance
            config: Configuration, used for the local time zone
        """
        self.db = db or get_db()
        self.config = config or get_config()

    def today(self) -> date:
        """Current calendar day in the configured time zone."""
        return self.config.local_today()

    # -------------------------------------------------------------------------
    # Check-ins
    # -------------------------------------------------------------------------

    @staticmethod
    def _find(session: Session, user_id: str, activity_date: date) -> Optional[CheckIn]:
        stmt = select(CheckIn).where(
            CheckIn.user_id == user_id,
            CheckIn.activity_date == activity_date.isoformat(),
        )
        return session.execute(stmt).scalar_one_or_none()

    def check_in(
        self,
        user_id: str,
        activity_date: Optional[date] = None,
        activity_type: str = "check_in",
    ) -> CheckInResult:
        """Record reading activity for a day.

        A second check-in for the same user and day leaves the stored
        history unchanged and returns the existing record.

        Args:
            user_id: Owner of the check-in
            activity_date: Calendar day (default: local today)
            activity_type: Free-form tag

        Returns:
            CheckInResult with the record and the recomputed summary

        Raises:
            InvalidCheckInError: If the input fails validation or the day is after today
        """
        if activity_date is None:
            activity_date = self.today()

        try:
            data = CheckInCreate(
                user_id=user_id,
                activity_date=activity_date,
                activity_type=activity_type,
            )
        except ValidationError as e:
            raise InvalidCheckInError(f"Invalid check-in: {e}") from e

        if data.activity_date > self.today():
            raise InvalidCheckInError(f"Cannot check in for a future day: {data.activity_date}")

        created = False
        with self.db.get_session() as session:
            record = self._find(session, data.user_id, data.activity_date)

            if record is None:
                record = CheckIn(
                    user_id=data.user_id,
                    activity_date=data.activity_date.isoformat(),
                    activity_type=data.activity_type,
                )
                session.add(record)
                try:
                    session.commit()
                    created = True
                except IntegrityError:
                    # Another writer recorded the same day first
                    session.rollback()
                    record = self._find(session, data.user_id, data.activity_date)
                    if record is None:
                        raise

            response = CheckInResponse.model_validate(record)

        if created:
            logger.info("Recorded check-in for %s on %s", data.user_id, data.activity_date)
        else:
            logger.debug("Already checked in for %s on %s", data.user_id, data.activity_date)

        return CheckInResult(
            check_in=response,
            created=created,
            summary=self.get_summary(data.user_id),
        )

    def get_activity_dates(self, user_id: str) -> list[date]:
        """Get every check-in day for a user.

        Args:
            user_id: Owner of the check-ins

        Returns:
            List of dates, newest first
        """
        with self.db.get_session() as session:
            stmt = (
                select(CheckIn.activity_date)
                .where(CheckIn.user_id == user_id)
                .order_by(CheckIn.activity_date.desc())
            )
            raw = session.execute(stmt).scalars().all()

        return engine.to_calendar_days(raw)

    def get_history(self, user_id: str, limit: int = 30) -> list[CheckIn]:
        """Get recent check-ins.

        Args:
            user_id: Owner of the check-ins
            limit: Maximum entries to return

        Returns:
            List of CheckIn, newest first
        """
        with self.db.get_session() as session:
            stmt = (
                select(CheckIn)
                .where(CheckIn.user_id == user_id)
                .order_by(CheckIn.activity_date.desc())
                .limit(limit)
            )
            check_ins = session.execute(stmt).scalars().all()
            for check_in in check_ins:
                session.expunge(check_in)
            return list(check_ins)

    # -------------------------------------------------------------------------
    # Streaks
    # -------------------------------------------------------------------------

    def get_summary(self, user_id: str, today: Optional[date] = None) -> StreakSummary:
        """Compute streak values from the user's full history.

        Args:
            user_id: Owner of the check-ins
            today: Reference day (default: local today)

        Returns:
            StreakSummary
        """
        if today is None:
            today = self.today()
        return engine.summarize(self.get_activity_dates(user_id), today)

    def get_milestones(self, user_id: str, today: Optional[date] = None) -> list[MilestoneStatus]:
        """Get the milestone ladder with achievement status.

        Args:
            user_id: Owner of the check-ins
            today: Reference day (default: local today)

        Returns:
            One MilestoneStatus per milestone, smallest first
        """
        summary = self.get_summary(user_id, today)

        return [
            MilestoneStatus(
                days_required=days,
                achieved=summary.longest_streak >= days,
                is_next=days == summary.next_milestone,
                days_remaining=max(days - summary.current_streak, 0),
            )
            for days in engine.MILESTONES
        ]
