"""Liturgical content ORM models.

WeeklyTheme: one theme per calendar week, keyed by the Sunday it starts on.
DailyContent: scripture and prompts for one day (0=Sunday..6=Saturday) of a theme.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class WeeklyTheme(Base, TimestampMixin):
    """Theme for a single liturgical week."""

    __tablename__ = "weekly_themes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    week_start_date: Mapped[date] = mapped_column(
        Date, unique=True, nullable=False, index=True
    )
    liturgical_season: Mapped[str] = mapped_column(String(50), nullable=False)
    theme_title: Mapped[str] = mapped_column(String(255), nullable=False)
    theme_description: Mapped[str] = mapped_column(Text, nullable=False)

    # Weak references to the exercise catalogue
    somatic_exercise_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("somatic_exercises.id", ondelete="SET NULL"), nullable=True
    )
    featured_exercise_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("somatic_exercises.id", ondelete="SET NULL"), nullable=True
    )
    reflection_prompt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    daily_content: Mapped[List["DailyContent"]] = relationship(
        "DailyContent",
        back_populates="weekly_theme",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DailyContent.day_of_week",
    )

    def __repr__(self) -> str:
        return (
            f"<WeeklyTheme(id={self.id}, week_start_date={self.week_start_date}, "
            f"season={self.liturgical_season})>"
        )


class DailyContent(Base, TimestampMixin):
    """Scripture and reflection prompt for one day of a weekly theme."""

    __tablename__ = "daily_content"
    __table_args__ = (
        UniqueConstraint(
            "weekly_theme_id", "day_of_week", name="uq_daily_content_theme_day"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    weekly_theme_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("weekly_themes.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0=Sunday
    day_title: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    scripture_reference: Mapped[str] = mapped_column(String(255), nullable=False)
    scripture_text: Mapped[str] = mapped_column(Text, nullable=False)
    reflection_prompt: Mapped[str] = mapped_column(Text, nullable=False)
    somatic_prompt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    weekly_theme: Mapped["WeeklyTheme"] = relationship(
        "WeeklyTheme", back_populates="daily_content"
    )

    def __repr__(self) -> str:
        return (
            f"<DailyContent(id={self.id}, theme={self.weekly_theme_id}, "
            f"day={self.day_of_week})>"
        )
