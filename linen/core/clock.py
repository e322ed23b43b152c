"""Calendar clock: week and day boundaries in a fixed civil timezone.

Daily and weekly boundaries follow one region's calendar regardless of the
host or device locale. Only reading "now" needs the timezone database; every
value handed out afterwards is a plain ``date`` or a Sunday-based weekday.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional, Protocol, Tuple, runtime_checkable
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Los_Angeles"

DAY_TITLES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


@dataclass(frozen=True)
class WeekRange:
    """A Sunday..Saturday span of civil dates (both ends inclusive)."""

    start: date
    end: date

    def days(self) -> Tuple[date, ...]:
        return tuple(self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1))


# ---------------------------------------------------------------------------
# Pure date arithmetic
# ---------------------------------------------------------------------------


def day_of_week(day: date) -> int:
    """Return the weekday with 0=Sunday..6=Saturday."""
    return (day.weekday() + 1) % 7


def week_start_for(day: date) -> date:
    """Return the Sunday starting the week that contains *day*."""
    return day - timedelta(days=day_of_week(day))


def next_week_start_for(day: date) -> date:
    """Return the next Sunday strictly after *day* (never *day* itself)."""
    dow = day_of_week(day)
    return day + timedelta(days=7 if dow == 0 else 7 - dow)


def last_completed_week_for(day: date) -> WeekRange:
    """Return the full Sunday..Saturday week before the one containing *day*.

    On a Sunday the week that just started is skipped, so the result ends on
    the preceding day.
    """
    start = week_start_for(day) - timedelta(days=7)
    return WeekRange(start=start, end=start + timedelta(days=6))


def is_week_start(day: date) -> bool:
    return day_of_week(day) == 0


# ---------------------------------------------------------------------------
# Clock capability
# ---------------------------------------------------------------------------


@runtime_checkable
class Clock(Protocol):
    """Source of already-localized calendar values."""

    def today(self) -> date:
        ...

    def current_week_start(self) -> date:
        ...

    def current_day_of_week(self) -> int:
        ...

    def next_week_start(self) -> date:
        ...

    def last_completed_week(self) -> WeekRange:
        ...

    def utc_bounds(self, start: date, end: date) -> Tuple[datetime, datetime]:
        ...

    def civil_date(self, stored: datetime) -> date:
        ...


class CalendarClock:
    """Clock pinned to a civil timezone.

    Args:
        tz_name: IANA timezone whose midnight defines day boundaries.
        now: Callable returning the current instant (aware UTC). Tests pass a
            fixed instant here instead of patching the system clock.
    """

    def __init__(
        self,
        tz_name: str = DEFAULT_TIMEZONE,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.tz = ZoneInfo(tz_name)
        self._now = now or (lambda: datetime.now(timezone.utc))

    def now(self) -> datetime:
        instant = self._now()
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self.tz)

    def today(self) -> date:
        return self.now().date()

    def current_week_start(self) -> date:
        return week_start_for(self.today())

    def current_day_of_week(self) -> int:
        return day_of_week(self.today())

    def next_week_start(self) -> date:
        return next_week_start_for(self.today())

    def last_completed_week(self) -> WeekRange:
        return last_completed_week_for(self.today())

    def utc_bounds(self, start: date, end: date) -> Tuple[datetime, datetime]:
        """Convert an inclusive civil date range to naive UTC datetimes.

        Activity rows store naive UTC timestamps; the upper bound is the last
        microsecond of *end* in the civil timezone.
        """
        lower = datetime.combine(start, time.min, tzinfo=self.tz)
        upper = datetime.combine(end, time.max, tzinfo=self.tz)
        return (
            lower.astimezone(timezone.utc).replace(tzinfo=None),
            upper.astimezone(timezone.utc).replace(tzinfo=None),
        )

    def civil_date(self, stored: datetime) -> date:
        """Civil date of a stored timestamp (naive values are UTC)."""
        if stored.tzinfo is None:
            stored = stored.replace(tzinfo=timezone.utc)
        return stored.astimezone(self.tz).date()

    def __repr__(self) -> str:
        return f"<CalendarClock(tz={self.tz.key})>"


_clock: Optional[CalendarClock] = None


def get_clock() -> CalendarClock:
    """Get the global clock instance configured from settings."""
    global _clock
    if _clock is None:
        from .config import get_settings

        _clock = CalendarClock(get_settings().calendar_timezone)
    return _clock
