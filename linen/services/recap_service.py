"""Weekly recap service: the recap store and its lifecycle rules.

A recap is created lazily for the last completed week, stays a stable record
once stored, and can be upgraded in place by a premium regeneration. Only one
row ever exists per (user, week start); concurrent creators converge on the
row that was stored first.
"""

import logging
import re
from datetime import date, datetime, timezone
from typing import List, Optional

from ..core.clock import Clock, is_week_start
from ..domain.errors import InvalidDeliveryPreferences, InvalidWeekStart
from ..domain.repositories import RecapRepository
from ..models.weekly_recap import DELIVERY_DAYS, RecapPreferences, WeeklyRecap
from .activity_aggregator import ActivityAggregator
from .recap_generator import RecapGenerator, RecapSections

logger = logging.getLogger(__name__)

_DELIVERY_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_week_start(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` week start.

    Raises:
        InvalidWeekStart: If the value is not an ISO calendar date.
    """
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidWeekStart(value)


def validate_delivery_day(value: str) -> str:
    if value not in DELIVERY_DAYS:
        raise InvalidDeliveryPreferences("deliveryDay", value)
    return value


def validate_delivery_time(value: str) -> str:
    if not isinstance(value, str) or not _DELIVERY_TIME.match(value):
        raise InvalidDeliveryPreferences("deliveryTime", value)
    return value


class RecapService:
    """Creates, regenerates and lists weekly recaps for a user."""

    def __init__(
        self,
        repository: RecapRepository,
        aggregator: ActivityAggregator,
        generator: RecapGenerator,
        clock: Clock,
    ) -> None:
        self.repository = repository
        self.aggregator = aggregator
        self.generator = generator
        self.clock = clock

    async def _build_sections(
        self, user_id: str, week_start: date, week_end: date, is_premium: bool
    ) -> RecapSections:
        activity = await self.aggregator.collect(user_id, week_start, week_end)
        return await self.generator.generate(
            user_id, week_start, week_end, is_premium, activity
        )

    async def get_or_create(
        self, user_id: str, week_start: date, week_end: date
    ) -> WeeklyRecap:
        """Return the stored recap for the week, generating a free one if absent.

        An existing recap is returned unchanged even if the underlying activity
        has changed since it was generated.
        """
        existing = await self.repository.get_by_week(user_id, week_start)
        if existing is not None:
            return existing

        logger.info(
            f"No recap for user {user_id} week {week_start.isoformat()}, generating"
        )
        sections = await self._build_sections(user_id, week_start, week_end, False)
        recap = WeeklyRecap(
            user_id=user_id,
            week_start_date=week_start,
            week_end_date=week_end,
            is_premium=False,
            **sections.to_columns(),
        )
        stored, created = await self.repository.insert_if_absent(recap)
        if not created:
            logger.info(
                f"Recap for user {user_id} week {week_start.isoformat()} "
                "was stored by another request, using it"
            )
        return stored

    async def get_or_create_current(self, user_id: str) -> WeeklyRecap:
        """Recap for the last completed Sunday..Saturday week."""
        week = self.clock.last_completed_week()
        return await self.get_or_create(user_id, week.start, week.end)

    async def regenerate(self, user_id: str, is_premium: bool) -> WeeklyRecap:
        """Generate (or upgrade) the recap for the last completed week.

        A free request against an existing row returns it untouched, which also
        keeps a premium recap from being downgraded. A premium request
        regenerates and overwrites the row in place, but only when the model
        produced premium content; after a failed premium generation an existing
        row is left as it was and a new row is stored as a free recap.
        """
        week = self.clock.last_completed_week()
        existing = await self.repository.get_by_week(user_id, week.start)

        if existing is not None and not is_premium:
            logger.info(
                f"Skipping free regeneration for user {user_id} "
                f"week {week.start.isoformat()}: recap already exists"
            )
            return existing

        sections = await self._build_sections(user_id, week.start, week.end, is_premium)
        premium_content = is_premium and sections.personal_synthesis is not None

        if existing is None:
            recap = WeeklyRecap(
                user_id=user_id,
                week_start_date=week.start,
                week_end_date=week.end,
                is_premium=premium_content,
                **sections.to_columns(),
            )
            stored, created = await self.repository.insert_if_absent(recap)
            if created or not is_premium:
                return stored
            # Lost the race to a concurrent creator; upgrade their row instead
            existing = stored

        if not premium_content:
            logger.warning(
                f"Premium generation for user {user_id} week {week.start.isoformat()} "
                f"produced no premium content, keeping recap {existing.id} unchanged"
            )
            return existing

        for column, value in sections.to_columns().items():
            setattr(existing, column, value)
        existing.is_premium = True
        existing.updated_at = datetime.now(timezone.utc)

        logger.info(
            f"Regenerated premium recap {existing.id} for user {user_id} "
            f"week {week.start.isoformat()}"
        )
        return await self.repository.save(existing)

    async def get_by_week(self, user_id: str, week_start: date) -> Optional[WeeklyRecap]:
        """Stored recap for an explicit week, or None. Never generates."""
        if not is_week_start(week_start):
            logger.debug(f"Week lookup with non-Sunday start {week_start.isoformat()}")
        return await self.repository.get_by_week(user_id, week_start)

    async def history(self, user_id: str, limit: Optional[int] = None) -> List[WeeklyRecap]:
        """All recaps for the user, newest week first; unbounded unless *limit* is set."""
        return await self.repository.list_for_user(user_id, limit=limit)

    # ------------------------------------------------------------------
    # Delivery preferences
    # ------------------------------------------------------------------

    async def get_preferences(self, user_id: str) -> RecapPreferences:
        """Preferences row for the user, created with defaults on first access."""
        preferences = await self.repository.get_preferences(user_id)
        if preferences is not None:
            return preferences
        logger.info(f"Creating default recap preferences for user {user_id}")
        return await self.repository.save_preferences(RecapPreferences(user_id=user_id))

    async def update_preferences(
        self,
        user_id: str,
        delivery_day: Optional[str] = None,
        delivery_time: Optional[str] = None,
    ) -> RecapPreferences:
        """Validate and apply a partial preferences update.

        Raises:
            InvalidDeliveryPreferences: If neither field is given, or the day or
                time is malformed. Nothing is written in that case.
        """
        if delivery_day is None and delivery_time is None:
            raise InvalidDeliveryPreferences("deliveryDay", None)
        if delivery_day is not None:
            validate_delivery_day(delivery_day)
        if delivery_time is not None:
            validate_delivery_time(delivery_time)

        preferences = await self.get_preferences(user_id)
        if delivery_day is not None:
            preferences.delivery_day = delivery_day
        if delivery_time is not None:
            preferences.delivery_time = delivery_time
        return await self.repository.save_preferences(preferences)
