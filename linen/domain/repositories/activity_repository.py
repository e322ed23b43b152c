"""ActivityRepository protocol: read-only access to a user's activity rows."""

from datetime import datetime
from typing import List, Protocol, Tuple, runtime_checkable


@runtime_checkable
class ActivityRepository(Protocol):
    """Range-filtered reads over activity owned by other parts of the app.

    All bounds are naive UTC datetimes, both ends inclusive.
    """

    async def reflection_texts(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> List[str]:
        ...

    async def practice_completions(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> List[Tuple[str, datetime]]:
        """(exercise title, completed_at) for each completion in range."""
        ...

    async def count_check_ins(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> int:
        ...

    async def count_community_posts(
        self, user_id: str, lower: datetime, upper: datetime
    ) -> int:
        ...
