"""
Typed domain errors for the Linen recap service.

Callers can distinguish specific failure modes (no theme this week vs. no
content for today vs. bad preference input) and map each to an appropriate
HTTP response.
"""

from datetime import date


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# Liturgical content
# ---------------------------------------------------------------------------


class ThemeNotFound(DomainError):
    """No WeeklyTheme row exists for the requested week."""

    def __init__(self, week_start: date) -> None:
        self.week_start = week_start
        super().__init__(f"No theme available for week starting {week_start.isoformat()}")


class DailyContentNotFound(DomainError):
    """The theme exists but has no row for the requested day."""

    def __init__(self, theme_id: int, day_of_week: int) -> None:
        self.theme_id = theme_id
        self.day_of_week = day_of_week
        super().__init__(
            f"No daily content for theme {theme_id} on day {day_of_week}"
        )


# ---------------------------------------------------------------------------
# Recaps
# ---------------------------------------------------------------------------


class InvalidDeliveryPreferences(DomainError):
    """Recap delivery preference failed validation."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}")


class InvalidWeekStart(DomainError):
    """A week start date could not be parsed."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid week start date: {value!r} (expected YYYY-MM-DD)")


class RecapGenerationFailure(DomainError):
    """The generative-text call failed or returned an unusable payload."""


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class NotAuthenticated(DomainError):
    """Request carried no usable session."""
