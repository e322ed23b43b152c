"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linen.models.user import User, UserSession

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository:
    """Concrete UserRepository backed by SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Look up a user by id."""
        result = await self._session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_session_by_token(self, token: str) -> Optional[UserSession]:
        """Look up a bearer session by token."""
        result = await self._session.execute(
            select(UserSession).where(UserSession.token == token)
        )
        return result.scalar_one_or_none()

    async def ensure_user(self, user_id: str, name: str, email: str) -> User:
        """Return the user, inserting it on first sight."""
        existing = await self.get_by_id(user_id)
        if existing is not None:
            return existing

        user = User(id=user_id, name=name, email=email)
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            existing = await self.get_by_id(user_id)
            if existing is None:
                raise
            return existing
        logger.info(f"Provisioned user row for {user_id}")
        return user
