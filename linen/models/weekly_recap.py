"""Weekly recap ORM models.

WeeklyRecap: one generated recap per (user, week start).
RecapPreferences: per-user delivery schedule for recaps.
"""

from datetime import date
from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User

DELIVERY_DAYS = ("sunday", "monday", "disabled")
DEFAULT_DELIVERY_DAY = "sunday"
DEFAULT_DELIVERY_TIME = "18:00"


class WeeklyRecap(Base, TimestampMixin):
    """Generated summary of one user's week."""

    __tablename__ = "weekly_recaps"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start_date", name="uq_weekly_recaps_user_week"),
        Index("ix_weekly_recaps_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    week_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    week_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    scripture_section: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    body_section: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    community_section: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    prompting_section: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)

    # Premium only
    personal_synthesis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    practice_visualization: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON, nullable=True
    )

    user: Mapped["User"] = relationship("User", back_populates="weekly_recaps")

    def __repr__(self) -> str:
        return (
            f"<WeeklyRecap(id={self.id}, user_id={self.user_id}, "
            f"week_start_date={self.week_start_date}, premium={self.is_premium})>"
        )


class RecapPreferences(Base, TimestampMixin):
    """When a user wants their weekly recap delivered."""

    __tablename__ = "recap_preferences"
    __table_args__ = (
        Index("ix_recap_preferences_delivery", "delivery_day", "delivery_time"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    delivery_day: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_DELIVERY_DAY, nullable=False
    )  # sunday, monday, disabled
    delivery_time: Mapped[str] = mapped_column(
        String(5), default=DEFAULT_DELIVERY_TIME, nullable=False
    )  # HH:MM

    user: Mapped["User"] = relationship("User", back_populates="recap_preferences")

    def __init__(self, **kwargs):
        kwargs.setdefault("delivery_day", DEFAULT_DELIVERY_DAY)
        kwargs.setdefault("delivery_time", DEFAULT_DELIVERY_TIME)
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"<RecapPreferences(user_id={self.user_id}, "
            f"day={self.delivery_day}, time={self.delivery_time})>"
        )
