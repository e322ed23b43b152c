"""Weekly theme service: rotation seeding and current-content serving.

Application layer over the liturgical rotation table:
- Seeding one year of WeeklyTheme / DailyContent rows (one-time bootstrap)
- Resolving the theme and daily content for "now"
- Public preview that never fails, falling back to a fixed verse
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from ..core.clock import DAY_TITLES, Clock, is_week_start, week_start_for
from ..domain.errors import DailyContentNotFound, ThemeNotFound
from ..domain.repositories import ThemeRepository
from ..models.weekly_theme import DailyContent, WeeklyTheme
from .liturgical_calendar import FALLBACK_SCRIPTURE, LITURGICAL_THEMES, plan_rotation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedResult:
    themes_created: int
    daily_content_created: int
    start_date: Optional[date]

    @property
    def already_seeded(self) -> bool:
        return self.themes_created == 0


@dataclass(frozen=True)
class PreviewContent:
    """Today's content for the public preview, possibly the fallback verse."""

    theme: Optional[WeeklyTheme]
    day_of_week: int
    day_title: str
    scripture_reference: str
    scripture_text: str
    reflection_prompt: str
    somatic_prompt: Optional[str]
    is_fallback: bool


class ThemeService:
    """Seeds and serves liturgical weekly themes."""

    def __init__(self, repository: ThemeRepository, clock: Clock) -> None:
        self.repository = repository
        self.clock = clock

    async def seed_rotation(self, start: Optional[date] = None) -> SeedResult:
        """Create one WeeklyTheme (with seven DailyContent rows) per rotation entry.

        A no-op when any theme already exists.

        Args:
            start: Week start of the first theme (defaults to next Sunday). A
                non-Sunday date is moved back to the Sunday of its week.

        Returns:
            SeedResult with the number of rows created.
        """
        if await self.repository.has_any_theme():
            logger.info("Weekly themes already seeded, skipping")
            return SeedResult(themes_created=0, daily_content_created=0, start_date=None)

        if start is None:
            start = self.clock.next_week_start()
        elif not is_week_start(start):
            logger.warning(
                f"Seed start {start.isoformat()} is not a Sunday, "
                f"using {week_start_for(start).isoformat()}"
            )
            start = week_start_for(start)
        logger.info(
            f"Seeding {len(LITURGICAL_THEMES)} weekly themes starting {start.isoformat()}"
        )

        themes = []
        fallback_days = 0
        for week in plan_rotation(start):
            theme = WeeklyTheme(
                week_start_date=week.week_start,
                liturgical_season=week.descriptor.season,
                theme_title=week.descriptor.title,
                theme_description=week.descriptor.description,
            )
            for day in week.days:
                fallback_days += day.is_fallback
                theme.daily_content.append(
                    DailyContent(
                        day_of_week=day.day_of_week,
                        day_title=day.day_title,
                        scripture_reference=day.scripture.reference,
                        scripture_text=day.scripture.text,
                        reflection_prompt=day.scripture.prompt,
                    )
                )
            themes.append(theme)

        created = await self.repository.add_themes(themes)
        daily_count = len(created) * 7
        logger.info(
            f"Seeded {len(created)} themes with {daily_count} daily content rows "
            f"({fallback_days} using the fallback scripture)"
        )
        return SeedResult(
            themes_created=len(created),
            daily_content_created=daily_count,
            start_date=start,
        )

    async def get_current_theme(self) -> WeeklyTheme:
        """Theme for the current week.

        Raises:
            ThemeNotFound: If no theme row exists for this week.
        """
        week_start = self.clock.current_week_start()
        theme = await self.repository.get_by_week_start(week_start)
        if theme is None:
            logger.warning(f"No weekly theme for week starting {week_start.isoformat()}")
            raise ThemeNotFound(week_start)
        return theme

    async def get_current_daily_content(self, theme: WeeklyTheme) -> DailyContent:
        """Content row for today within *theme*.

        Raises:
            DailyContentNotFound: If the theme has no row for today.
        """
        day = self.clock.current_day_of_week()
        content = await self.repository.get_daily_content(theme.id, day)
        if content is None:
            logger.warning(f"Theme {theme.id} has no daily content for day {day}")
            raise DailyContentNotFound(theme.id, day)
        return content

    async def get_today(self) -> Tuple[WeeklyTheme, DailyContent]:
        """Current theme plus today's content, both required."""
        theme = await self.get_current_theme()
        content = await self.get_current_daily_content(theme)
        return theme, content

    async def get_preview(self) -> PreviewContent:
        """Today's content for unauthenticated callers; never raises not-found."""
        day = self.clock.current_day_of_week()
        theme: Optional[WeeklyTheme] = None
        content: Optional[DailyContent] = None
        try:
            theme = await self.get_current_theme()
            content = await self.get_current_daily_content(theme)
        except (ThemeNotFound, DailyContentNotFound) as e:
            logger.info(f"Preview falling back to default scripture: {e}")

        if content is None:
            return PreviewContent(
                theme=theme,
                day_of_week=day,
                day_title=DAY_TITLES[day],
                scripture_reference=FALLBACK_SCRIPTURE.reference,
                scripture_text=FALLBACK_SCRIPTURE.text,
                reflection_prompt=FALLBACK_SCRIPTURE.prompt,
                somatic_prompt=None,
                is_fallback=True,
            )

        return PreviewContent(
            theme=theme,
            day_of_week=content.day_of_week,
            day_title=content.day_title or DAY_TITLES[content.day_of_week],
            scripture_reference=content.scripture_reference,
            scripture_text=content.scripture_text,
            reflection_prompt=content.reflection_prompt,
            somatic_prompt=content.somatic_prompt,
            is_fallback=False,
        )
