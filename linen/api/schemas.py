"""Wire models for the HTTP API (camelCase on the wire, snake_case in Python)."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

PREMIUM_ONLY_FIELDS = ("personal_synthesis", "practice_visualization")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# ---------------------------------------------------------------------------
# Weekly theme
# ---------------------------------------------------------------------------


class WeeklyThemeOut(CamelModel):
    id: int
    week_start_date: date
    liturgical_season: str
    theme_title: str
    theme_description: str
    featured_exercise_id: Optional[int] = None
    reflection_prompt: Optional[str] = None


class DailyContentOut(CamelModel):
    id: Optional[int] = None
    day_of_week: int
    day_title: Optional[str] = None
    scripture_reference: str
    scripture_text: str
    reflection_prompt: str
    somatic_prompt: Optional[str] = None


class CurrentThemeResponse(CamelModel):
    weekly_theme: WeeklyThemeOut
    daily_content: DailyContentOut


class ThemePreviewResponse(CamelModel):
    weekly_theme: Optional[WeeklyThemeOut] = None
    daily_content: DailyContentOut
    is_fallback: bool


class SeedRequest(CamelModel):
    start_date: Optional[str] = Field(default=None, description="YYYY-MM-DD")


class SeedResponse(CamelModel):
    message: str
    themes_created: int


# ---------------------------------------------------------------------------
# Weekly recap
# ---------------------------------------------------------------------------


class WeeklyRecapOut(CamelModel):
    id: int
    user_id: str
    week_start_date: date
    week_end_date: date
    is_premium: bool
    scripture_section: Dict[str, Any]
    body_section: Dict[str, Any]
    community_section: Dict[str, Any]
    prompting_section: Dict[str, Any]
    personal_synthesis: Optional[str] = None
    practice_visualization: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_serializer(mode="wrap")
    def _drop_premium_fields(self, handler):
        data = handler(self)
        if not self.is_premium:
            for name in PREMIUM_ONLY_FIELDS:
                data.pop(name, None)
                data.pop(to_camel(name), None)
        return data


class CurrentRecapResponse(CamelModel):
    recap: WeeklyRecapOut
    week_start_date: date
    week_end_date: date


class RecapResponse(CamelModel):
    recap: Optional[WeeklyRecapOut] = None


class RecapHistoryResponse(CamelModel):
    recaps: List[WeeklyRecapOut]


class GenerateRecapRequest(CamelModel):
    is_premium: bool = False


class RecapPreferencesOut(CamelModel):
    user_id: str
    delivery_day: str
    delivery_time: str


class PreferencesResponse(CamelModel):
    preferences: RecapPreferencesOut


class PreferencesUpdate(CamelModel):
    delivery_day: Optional[str] = None
    delivery_time: Optional[str] = None
