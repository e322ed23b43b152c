"""RecapRepository protocol: defines weekly recap persistence contract."""

from datetime import date
from typing import List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class RecapRepository(Protocol):
    """Repository interface for WeeklyRecap and RecapPreferences access."""

    async def get_by_week(self, user_id: str, week_start: date) -> Optional[object]:
        """Exact lookup of a user's recap for one week."""
        ...

    async def insert_if_absent(self, recap: object) -> Tuple[object, bool]:
        """Insert *recap* unless (user_id, week_start_date) is taken.

        Returns:
            (stored recap, created). On a uniqueness conflict the row that won
            is returned with created=False.
        """
        ...

    async def save(self, recap: object) -> object:
        """Commit changes made to an already persisted recap."""
        ...

    async def list_for_user(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[object]:
        """All recaps of a user, newest week first."""
        ...

    async def get_preferences(self, user_id: str) -> Optional[object]:
        ...

    async def save_preferences(self, preferences: object) -> object:
        """Insert or update a preferences row and return it."""
        ...
