"""Collects one user's week of activity for recap generation."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

from ..core.clock import Clock, day_of_week
from ..domain.repositories import ActivityRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PracticeSummary:
    title: str
    completed_count: int


@dataclass
class ActivityData:
    """Aggregated activity for one week. Empty lists and zeros are valid."""

    reflection_texts: List[str] = field(default_factory=list)
    practices: List[PracticeSummary] = field(default_factory=list)
    check_in_count: int = 0
    shared_post_count: int = 0
    total_practice_sessions: int = 0
    # Practice completions per weekday, index 0=Sunday
    daily_practice_counts: List[int] = field(default_factory=lambda: [0] * 7)

    @property
    def is_empty(self) -> bool:
        return not (
            self.reflection_texts
            or self.total_practice_sessions
            or self.check_in_count
            or self.shared_post_count
        )


class ActivityAggregator:
    """Range-filtered reads over reflections, practices, check-ins and posts."""

    def __init__(self, repository: ActivityRepository, clock: Clock) -> None:
        self.repository = repository
        self.clock = clock

    async def collect(self, user_id: str, week_start: date, week_end: date) -> ActivityData:
        """Gather activity with timestamps inside [week_start, end of week_end].

        Args:
            user_id: Owner of the activity rows.
            week_start: First civil date of the range.
            week_end: Last civil date of the range (included through 23:59:59.999999).

        Returns:
            ActivityData; never raises for a week without activity.
        """
        lower, upper = self.clock.utc_bounds(week_start, week_end)

        reflections = await self.repository.reflection_texts(user_id, lower, upper)
        completions = await self.repository.practice_completions(user_id, lower, upper)
        check_ins = await self.repository.count_check_ins(user_id, lower, upper)
        posts = await self.repository.count_community_posts(user_id, lower, upper)

        per_title: Dict[str, int] = {}
        per_day = [0] * 7
        for title, completed_at in completions:
            per_title[title] = per_title.get(title, 0) + 1
            per_day[day_of_week(self.clock.civil_date(completed_at))] += 1

        activity = ActivityData(
            reflection_texts=list(reflections),
            practices=[
                PracticeSummary(title=title, completed_count=count)
                for title, count in per_title.items()
            ],
            check_in_count=check_ins,
            shared_post_count=posts,
            total_practice_sessions=len(completions),
            daily_practice_counts=per_day,
        )

        logger.info(
            f"Collected activity for user {user_id} {week_start.isoformat()}..{week_end.isoformat()}: "
            f"{len(activity.reflection_texts)} reflections, "
            f"{activity.total_practice_sessions} practice sessions, "
            f"{activity.check_in_count} check-ins, {activity.shared_post_count} posts"
        )
        return activity

