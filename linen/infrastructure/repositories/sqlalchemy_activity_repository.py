"""SQLAlchemy implementation of ActivityRepository."""

from datetime import datetime
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from linen.models.activity import (
    CheckInConversation,
    CommunityPost,
    SomaticCompletion,
    SomaticExercise,
    UserReflection,
)


class SqlAlchemyActivityRepository:
    """Concrete ActivityRepository backed by SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def reflection_texts(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> List[str]:
        result = await self._session.execute(
            select(UserReflection.reflection_text)
            .where(
                UserReflection.user_id == user_id,
                UserReflection.created_at >= lower,
                UserReflection.created_at <= upper,
            )
            .order_by(UserReflection.created_at)
        )
        return list(result.scalars().all())

    async def practice_completions(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> List[Tuple[str, datetime]]:
        result = await self._session.execute(
            select(SomaticExercise.title, SomaticCompletion.completed_at)
            .select_from(SomaticCompletion)
            .join(SomaticExercise, SomaticCompletion.exercise_id == SomaticExercise.id)
            .where(
                SomaticCompletion.user_id == user_id,
                SomaticCompletion.completed_at >= lower,
                SomaticCompletion.completed_at <= upper,
            )
            .order_by(SomaticCompletion.completed_at)
        )
        return [(title, completed_at) for title, completed_at in result.all()]

    async def count_check_ins(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> int:
        result = await self._session.execute(
            select(func.count(CheckInConversation.id)).where(
                CheckInConversation.user_id == user_id,
                CheckInConversation.created_at >= lower,
                CheckInConversation.created_at <= upper,
            )
        )
        return result.scalar() or 0

    async def count_community_posts(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> int:
        result = await self._session.execute(
            select(func.count(CommunityPost.id)).where(
                CommunityPost.user_id == user_id,
                CommunityPost.created_at >= lower,
                CommunityPost.created_at <= upper,
            )
        )
        return result.scalar() or 0
