"""SQLAlchemy implementation of RecapRepository."""

import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linen.models.weekly_recap import RecapPreferences, WeeklyRecap

logger = logging.getLogger(__name__)


class SqlAlchemyRecapRepository:
    """Concrete RecapRepository backed by SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_week(self, user_id: str, week_start: date) -> Optional[WeeklyRecap]:
        result = await self._session.execute(
            select(WeeklyRecap).where(
                WeeklyRecap.user_id == user_id,
                WeeklyRecap.week_start_date == week_start,
            )
        )
        return result.scalar_one_or_none()

    async def insert_if_absent(self, recap: WeeklyRecap) -> Tuple[WeeklyRecap, bool]:
        self._session.add(recap)
        try:
            await self._session.commit()
        except IntegrityError:
            # Another request stored this week first; theirs is authoritative
            await self._session.rollback()
            logger.info(
                f"Recap for user {recap.user_id} week {recap.week_start_date} "
                "already created concurrently, returning existing row"
            )
            existing = await self.get_by_week(recap.user_id, recap.week_start_date)
            if existing is None:
                raise
            return existing, False
        await self._session.refresh(recap)
        return recap, True

    async def save(self, recap: WeeklyRecap) -> WeeklyRecap:
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        await self._session.refresh(recap)
        return recap

    async def list_for_user(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[WeeklyRecap]:
        query = (
            select(WeeklyRecap)
            .where(WeeklyRecap.user_id == user_id)
            .order_by(WeeklyRecap.week_start_date.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def get_preferences(self, user_id: str) -> Optional[RecapPreferences]:
        result = await self._session.execute(
            select(RecapPreferences).where(RecapPreferences.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def save_preferences(self, preferences: RecapPreferences) -> RecapPreferences:
        self._session.add(preferences)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            existing = await self.get_preferences(preferences.user_id)
            if existing is None:
                raise
            return existing
        await self._session.refresh(preferences)
        return preferences
