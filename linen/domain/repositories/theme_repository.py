"""ThemeRepository protocol: defines weekly theme / daily content contract."""

from datetime import date
from typing import List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ThemeRepository(Protocol):
    """Repository interface for WeeklyTheme and DailyContent access."""

    async def has_any_theme(self) -> bool:
        """Return True if at least one WeeklyTheme row exists."""
        ...

    async def get_by_week_start(self, week_start: date) -> Optional[object]:
        """Look up the theme for the week starting on *week_start*."""
        ...

    async def get_daily_content(
        self, theme_id: int, day_of_week: int
    ) -> Optional[object]:
        """Look up the content row for (theme, day of week)."""
        ...

    async def add_themes(self, themes: Sequence[object]) -> List[object]:
        """Persist themes (with their daily content) in one transaction.

        Returns:
            The stored themes with identities assigned.
        """
        ...

    async def list_themes(self) -> List[object]:
        """Return every theme ordered by week start."""
        ...
