"""Tests for the SQLAlchemy repository implementations and schema constraints."""

from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from linen.domain.repositories import (
    ActivityRepository,
    RecapRepository,
    ThemeRepository,
    UserRepository,
)
from linen.infrastructure.repositories import (
    SqlAlchemyActivityRepository,
    SqlAlchemyRecapRepository,
    SqlAlchemyThemeRepository,
    SqlAlchemyUserRepository,
)
from linen.models import DailyContent, RecapPreferences, User, WeeklyRecap, WeeklyTheme


def _recap(user_id: str, start: date) -> WeeklyRecap:
    return WeeklyRecap(
        user_id=user_id,
        week_start_date=start,
        week_end_date=start,
        scripture_section={"reflections": [], "sharedReflections": []},
        body_section={"practices": [], "notes": []},
        community_section={"checkInSummary": "", "sharedPosts": []},
        prompting_section={"suggestions": []},
    )


def test_implementations_satisfy_protocols(db_session):
    assert isinstance(SqlAlchemyThemeRepository(db_session), ThemeRepository)
    assert isinstance(SqlAlchemyRecapRepository(db_session), RecapRepository)
    assert isinstance(SqlAlchemyActivityRepository(db_session), ActivityRepository)
    assert isinstance(SqlAlchemyUserRepository(db_session), UserRepository)


class TestRecapRepository:
    async def test_insert_if_absent_creates_once(self, db_session, users):
        repo = SqlAlchemyRecapRepository(db_session)

        first, created = await repo.insert_if_absent(_recap("user-1", date(2025, 10, 5)))
        second, created_again = await repo.insert_if_absent(_recap("user-1", date(2025, 10, 5)))

        assert created is True
        assert created_again is False
        assert second.id == first.id
        count = await db_session.execute(select(func.count(WeeklyRecap.id)))
        assert count.scalar() == 1

    async def test_unique_constraint_on_user_week(self, session_factory, users):
        async with session_factory() as session:
            session.add_all([_recap("user-1", date(2025, 10, 5)), _recap("user-1", date(2025, 10, 5))])
            with pytest.raises(IntegrityError):
                await session.commit()

    async def test_get_by_week_is_exact(self, db_session, users):
        repo = SqlAlchemyRecapRepository(db_session)
        await repo.insert_if_absent(_recap("user-1", date(2025, 10, 5)))

        assert await repo.get_by_week("user-1", date(2025, 10, 5)) is not None
        assert await repo.get_by_week("user-1", date(2025, 10, 6)) is None
        assert await repo.get_by_week("user-2", date(2025, 10, 5)) is None

    async def test_save_preferences_conflict_returns_existing(self, db_session, users):
        repo = SqlAlchemyRecapRepository(db_session)
        first = await repo.save_preferences(RecapPreferences(user_id="user-1"))

        second = await repo.save_preferences(RecapPreferences(user_id="user-1", delivery_day="monday"))

        assert second.id == first.id
        assert second.delivery_day == "sunday"


class TestCascades:
    async def test_deleting_user_removes_recaps_and_preferences(self, db_session, users):
        repo = SqlAlchemyRecapRepository(db_session)
        await repo.insert_if_absent(_recap("user-1", date(2025, 10, 5)))
        await repo.save_preferences(RecapPreferences(user_id="user-1"))

        user = await SqlAlchemyUserRepository(db_session).get_by_id("user-1")
        await db_session.delete(user)
        await db_session.commit()

        assert await repo.get_by_week("user-1", date(2025, 10, 5)) is None
        assert await repo.get_preferences("user-1") is None

    async def test_deleting_theme_removes_daily_content(self, db_session):
        theme = WeeklyTheme(
            week_start_date=date(2025, 10, 12),
            liturgical_season="Advent",
            theme_title="T",
            theme_description="D",
        )
        theme.daily_content.append(
            DailyContent(
                day_of_week=0,
                day_title="Sunday",
                scripture_reference="Psalm 46:10",
                scripture_text="Be still, and know that I am God.",
                reflection_prompt="Notice",
            )
        )
        await SqlAlchemyThemeRepository(db_session).add_themes([theme])

        await db_session.delete(theme)
        await db_session.commit()

        count = await db_session.execute(select(func.count(DailyContent.id)))
        assert count.scalar() == 0


class TestUserRepository:
    async def test_ensure_user_inserts_then_reuses(self, db_session):
        repo = SqlAlchemyUserRepository(db_session)

        created = await repo.ensure_user("guest-user", "Guest User", "guest@linen.app")
        again = await repo.ensure_user("guest-user", "Other", "other@linen.app")

        assert again.id == created.id
        assert again.name == "Guest User"
        count = await db_session.execute(select(func.count(User.id)))
        assert count.scalar() == 1
