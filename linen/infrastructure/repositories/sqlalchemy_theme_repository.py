"""SQLAlchemy implementation of ThemeRepository."""

import logging
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linen.models.weekly_theme import DailyContent, WeeklyTheme

logger = logging.getLogger(__name__)


class SqlAlchemyThemeRepository:
    """Concrete ThemeRepository backed by SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def has_any_theme(self) -> bool:
        result = await self._session.execute(select(WeeklyTheme.id).limit(1))
        return result.first() is not None

    async def get_by_week_start(self, week_start: date) -> Optional[WeeklyTheme]:
        result = await self._session.execute(
            select(WeeklyTheme).where(WeeklyTheme.week_start_date == week_start)
        )
        return result.scalar_one_or_none()

    async def get_daily_content(
        self, theme_id: int, day_of_week: int
    ) -> Optional[DailyContent]:
        result = await self._session.execute(
            select(DailyContent).where(
                DailyContent.weekly_theme_id == theme_id,
                DailyContent.day_of_week == day_of_week,
            )
        )
        return result.scalar_one_or_none()

    async def add_themes(self, themes: Sequence[WeeklyTheme]) -> List[WeeklyTheme]:
        try:
            self._session.add_all(themes)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        logger.debug(f"Stored {len(themes)} weekly themes")
        return list(themes)

    async def list_themes(self) -> List[WeeklyTheme]:
        result = await self._session.execute(
            select(WeeklyTheme).order_by(WeeklyTheme.week_start_date)
        )
        return list(result.scalars().all())
