"""Tests for ThemeService seeding and current-content lookup."""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from linen.domain.errors import DailyContentNotFound, ThemeNotFound
from linen.infrastructure.repositories import SqlAlchemyThemeRepository
from linen.models import DailyContent, WeeklyTheme
from linen.services.liturgical_calendar import FALLBACK_SCRIPTURE
from linen.services.theme_service import ThemeService


@pytest.fixture
def service(db_session, wednesday_clock):
    return ThemeService(SqlAlchemyThemeRepository(db_session), wednesday_clock)


async def _count(session, model) -> int:
    result = await session.execute(select(func.count(model.id)))
    return result.scalar()


class TestSeedRotation:
    async def test_seeds_one_year_from_next_sunday(self, service, db_session):
        result = await service.seed_rotation()

        assert result.themes_created == 52
        assert result.daily_content_created == 52 * 7
        assert result.start_date == date(2025, 10, 19)
        assert await _count(db_session, WeeklyTheme) == 52
        assert await _count(db_session, DailyContent) == 52 * 7

    async def test_week_starts_are_seven_days_apart(self, service, db_session):
        start = date(2025, 11, 30)
        await service.seed_rotation(start)

        themes = await SqlAlchemyThemeRepository(db_session).list_themes()
        assert [t.week_start_date for t in themes] == [
            start + timedelta(days=7 * i) for i in range(52)
        ]

    async def test_non_sunday_start_moves_back_to_its_sunday(self, service, db_session):
        result = await service.seed_rotation(date(2025, 12, 3))

        assert result.start_date == date(2025, 11, 30)
        themes = await SqlAlchemyThemeRepository(db_session).list_themes()
        assert themes[0].week_start_date == date(2025, 11, 30)
        assert all(t.week_start_date.weekday() == 6 for t in themes)

    async def test_second_seed_is_noop(self, service, db_session):
        await service.seed_rotation(date(2025, 11, 30))
        again = await service.seed_rotation(date(2026, 1, 4))

        assert again.already_seeded
        assert again.themes_created == 0
        assert await _count(db_session, WeeklyTheme) == 52

    async def test_daily_rows_carry_day_titles_and_fallback(self, service, db_session):
        await service.seed_rotation(date(2025, 11, 30))
        repo = SqlAlchemyThemeRepository(db_session)

        first = await repo.get_by_week_start(date(2025, 11, 30))
        sunday = await repo.get_daily_content(first.id, 0)
        assert sunday.day_title == "Sunday"
        assert sunday.scripture_reference == "Isaiah 2:1-5"

        second = await repo.get_by_week_start(date(2025, 12, 7))
        saturday = await repo.get_daily_content(second.id, 6)
        assert saturday.day_title == "Saturday"
        assert saturday.scripture_reference == FALLBACK_SCRIPTURE.reference


class TestCurrentContent:
    async def test_no_theme_this_week(self, service):
        with pytest.raises(ThemeNotFound):
            await service.get_current_theme()

    async def test_theme_and_today(self, service):
        # Current week (Sun 2025-10-12) is the first rotation week
        await service.seed_rotation(date(2025, 10, 12))

        theme, content = await service.get_today()

        assert theme.week_start_date == date(2025, 10, 12)
        assert theme.liturgical_season == "Advent"
        assert content.day_of_week == 3
        assert content.day_title == "Wednesday"

    async def test_theme_without_today_row(self, db_session, service):
        db_session.add(
            WeeklyTheme(
                week_start_date=date(2025, 10, 12),
                liturgical_season="Ordinary Time",
                theme_title="Sparse",
                theme_description="No daily rows",
            )
        )
        await db_session.commit()

        with pytest.raises(DailyContentNotFound):
            await service.get_today()

    async def test_preview_falls_back_when_unseeded(self, service):
        preview = await service.get_preview()

        assert preview.is_fallback
        assert preview.theme is None
        assert preview.scripture_reference == "Psalm 46:10"
        assert preview.day_title == "Wednesday"

    async def test_preview_uses_stored_content(self, service):
        await service.seed_rotation(date(2025, 10, 12))

        preview = await service.get_preview()

        assert not preview.is_fallback
        assert preview.theme.theme_title == "The Weight I'm Carrying"
        assert preview.scripture_reference == "Luke 21:25-36"

    async def test_week_lookup_follows_civil_timezone(self, db_session, clock_at):
        # Saturday evening in Los Angeles, already Sunday in UTC
        clock = clock_at(datetime(2025, 10, 19, 3, 0, tzinfo=timezone.utc))
        service = ThemeService(SqlAlchemyThemeRepository(db_session), clock)
        await service.seed_rotation(date(2025, 10, 12))

        theme, content = await service.get_today()
        assert theme.week_start_date == date(2025, 10, 12)
        assert content.day_of_week == 6
