"""SQLAlchemy models for reading check-ins.

Tables:
- check_ins: Append-only log of daily reading check-ins, one per user per day
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base, generate_uuid


class CheckIn(Base):
    """Check-in model - one row per user per calendar day."""

    __tablename__ = "check_ins"
    __table_args__ = (
        UniqueConstraint("user_id", "activity_date", name="uq_check_ins_user_day"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)

    # Owner
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Calendar day of the activity
    activity_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # ISO date

    # Free-form tag, not used by streak math
    activity_type: Mapped[str] = mapped_column(String(50), default="check_in")

    created_at: Mapped[str] = mapped_column(
        String(32), default=lambda: datetime.now(timezone.utc).isoformat()
    )

    def __repr__(self) -> str:
        return f"<CheckIn(user={self.user_id}, date={self.activity_date})>"

    @property
    def day(self) -> Optional[date]:
        """Activity date as a date object, None if the stored value is malformed."""
        try:
            return date.fromisoformat(self.activity_date)
        except (TypeError, ValueError):
            return None
