"""Weekly recap generator: turns a week of activity into structured recap content.

Builds a readable data context, asks the generative-text capability for a
single JSON object, and validates it against the recap contract. Anything
that goes wrong upstream (call raises, non-JSON text, wrong shape) degrades
to an empty-but-valid recap; no exception reaches the caller.
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.clock import DAY_TITLES
from ..domain.errors import RecapGenerationFailure
from .activity_aggregator import ActivityData
from .llm_service import TextGenerator

logger = logging.getLogger(__name__)

MAX_SAMPLE_REFLECTIONS = 3
NO_REFLECTIONS_PLACEHOLDER = "No reflections this week"

_FENCED_JSON = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


# ---------------------------------------------------------------------------
# Output contract
# ---------------------------------------------------------------------------


class _Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ScriptureSection(_Section):
    reflections: List[str]
    shared_reflections: List[str] = Field(alias="sharedReflections")


class BodySection(_Section):
    practices: List[str]
    notes: List[str]


class CommunitySection(_Section):
    check_in_summary: str = Field(alias="checkInSummary")
    shared_posts: List[str] = Field(alias="sharedPosts")


class PromptingSection(_Section):
    suggestions: List[str]


class DailyCount(_Section):
    date: str
    count: int


class PracticeVisualization(_Section):
    weekly_data: List[DailyCount] = Field(alias="weeklyData")


class RecapSections(_Section):
    """Validated recap content; the two trailing fields are premium only."""

    scripture_section: ScriptureSection = Field(alias="scriptureSection")
    body_section: BodySection = Field(alias="bodySection")
    community_section: CommunitySection = Field(alias="communitySection")
    prompting_section: PromptingSection = Field(alias="promptingSection")
    personal_synthesis: Optional[str] = Field(default=None, alias="personalSynthesis")
    practice_visualization: Optional[PracticeVisualization] = Field(
        default=None, alias="practiceVisualization"
    )

    @classmethod
    def empty(cls) -> "RecapSections":
        """Safe default: every required section present, nothing premium."""
        return cls(
            scripture_section=ScriptureSection(reflections=[], shared_reflections=[]),
            body_section=BodySection(practices=[], notes=[]),
            community_section=CommunitySection(check_in_summary="", shared_posts=[]),
            prompting_section=PromptingSection(suggestions=[]),
        )

    @property
    def has_premium_fields(self) -> bool:
        return self.personal_synthesis is not None or self.practice_visualization is not None

    def without_premium(self) -> "RecapSections":
        return self.model_copy(update={"personal_synthesis": None, "practice_visualization": None})

    def to_columns(self) -> Dict[str, Any]:
        """JSON-ready values keyed by WeeklyRecap column name."""
        return {
            "scripture_section": self.scripture_section.model_dump(by_alias=True),
            "body_section": self.body_section.model_dump(by_alias=True),
            "community_section": self.community_section.model_dump(by_alias=True),
            "prompting_section": self.prompting_section.model_dump(by_alias=True),
            "personal_synthesis": self.personal_synthesis,
            "practice_visualization": (
                self.practice_visualization.model_dump(by_alias=True)
                if self.practice_visualization is not None
                else None
            ),
        }


@dataclass(frozen=True)
class ParseFailure:
    """Model output that could not be accepted as RecapSections."""

    reason: str
    raw_text: str


ParseOutcome = Union[RecapSections, ParseFailure]


def _unwrap_fenced(raw_text: str) -> str:
    match = _FENCED_JSON.match(raw_text)
    return match.group(1) if match else raw_text.strip()


def parse_recap_response(raw_text: str, is_premium: bool) -> ParseOutcome:
    """Parse and validate raw model text against the recap contract.

    Args:
        raw_text: Text returned by the generative-text capability.
        is_premium: Whether premium-only keys may be kept.

    Returns:
        RecapSections when the text is a JSON object with all four required
        sections of the right shape (plus personalSynthesis when premium),
        otherwise ParseFailure.
    """
    try:
        payload = json.loads(_unwrap_fenced(raw_text or ""))
    except (json.JSONDecodeError, TypeError) as e:
        return ParseFailure(reason=f"invalid JSON: {e}", raw_text=raw_text)

    if not isinstance(payload, dict):
        return ParseFailure(
            reason=f"expected a JSON object, got {type(payload).__name__}",
            raw_text=raw_text,
        )

    try:
        sections = RecapSections.model_validate(payload)
    except ValidationError as e:
        return ParseFailure(
            reason=f"schema mismatch: {e.error_count()} error(s)", raw_text=raw_text
        )

    if not is_premium:
        return sections.without_premium()
    if not sections.personal_synthesis:
        return ParseFailure(
            reason="premium reply is missing personalSynthesis", raw_text=raw_text
        )
    return sections


# ---------------------------------------------------------------------------
# Prompt construction
# ---------------------------------------------------------------------------


def format_date_range(week_start: date, week_end: date) -> str:
    """Short label such as ``"Oct 4-10"`` or ``"Sep 28 - Oct 4"``."""
    start_month = week_start.strftime("%b")
    end_month = week_end.strftime("%b")
    if start_month == end_month:
        return f"{start_month} {week_start.day}-{week_end.day}"
    return f"{start_month} {week_start.day} - {end_month} {week_end.day}"


def build_data_context(
    week_start: date, week_end: date, activity: ActivityData, is_premium: bool = False
) -> str:
    """Readable summary of the week that goes in the user prompt."""
    practices = (
        ", ".join(f"{p.title} ({p.completed_count}x)" for p in activity.practices)
        or "none"
    )
    samples = (
        " | ".join(activity.reflection_texts[:MAX_SAMPLE_REFLECTIONS])
        or NO_REFLECTIONS_PLACEHOLDER
    )

    lines = [
        f"Week of {format_date_range(week_start, week_end)}:",
        f"- Daily reflections explored: {len(activity.reflection_texts)}",
        f"- Somatic practices completed: {activity.total_practice_sessions} sessions",
        f"- Practices: {practices}",
        f"- Check-in conversations: {activity.check_in_count}",
        f"- Community posts shared: {activity.shared_post_count}",
    ]
    if is_premium:
        per_day = ", ".join(
            f"{DAY_TITLES[i][:3]} {count}"
            for i, count in enumerate(activity.daily_practice_counts)
        )
        lines.append(f"- Practice sessions by day: {per_day}")

    lines.append("")
    lines.append(f"Sample reflections: {samples}")
    return "\n".join(lines)


_SYSTEM_PROMPT = """You are a contemplative spiritual director writing a weekly recap for someone walking the Linen spiritual practice journey.
Write as if by hand, in warm and poetic language, always in the second person ("you explored", "your practice").
Reach for concrete imagery and metaphor and vary your sentences. Name both what they engaged with and the patterns that emerge.

Reply with a single JSON object and nothing else. Use exactly these keys:
{
  "scriptureSection": {
    "reflections": ["which passages they explored"],
    "sharedReflections": ["one reflection of theirs worth holding up"]
  },
  "bodySection": {
    "practices": ["the somatic practices they completed, with imagery of the physical experience"],
    "notes": ["observations about their embodied practice"]
  },
  "communitySection": {
    "checkInSummary": "how they took part in check-ins and the tone of it",
    "sharedPosts": ["examples of what they shared"]
  },
  "promptingSection": {
    "suggestions": ["gentle ways to deepen the practice, drawn from what you observed"]
  }%s
}"""

_PREMIUM_KEYS = """,
  "personalSynthesis": "an opening contemplative paragraph honouring the shape of their week",
  "practiceVisualization": {"weeklyData": [{"date": "Sun", "count": 0}, {"date": "Mon", "count": 1}]}"""


def build_system_prompt(is_premium: bool) -> str:
    return _SYSTEM_PROMPT % (_PREMIUM_KEYS if is_premium else "")


def build_user_prompt(data_context: str) -> str:
    return f"Here is this week's practice data:\n\n{data_context}"


def practice_visualization_from(activity: ActivityData) -> PracticeVisualization:
    """Per-day session counts (Sun..Sat) computed from the aggregated activity."""
    return PracticeVisualization(
        weekly_data=[
            DailyCount(date=DAY_TITLES[i][:3], count=count)
            for i, count in enumerate(activity.daily_practice_counts)
        ]
    )


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class RecapGenerator:
    """Produces RecapSections for one user's week via the text generator."""

    def __init__(self, text_generator: TextGenerator) -> None:
        self.text_generator = text_generator

    async def _request(self, data_context: str, is_premium: bool) -> RecapSections:
        """One model call plus validation.

        Raises:
            RecapGenerationFailure: If the call raises or the reply is unusable.
        """
        try:
            raw_text = await self.text_generator.generate(
                build_system_prompt(is_premium), build_user_prompt(data_context)
            )
        except Exception as e:
            raise RecapGenerationFailure(f"generation call failed: {e}") from e

        outcome = parse_recap_response(raw_text, is_premium)
        if isinstance(outcome, ParseFailure):
            raise RecapGenerationFailure(
                f"{outcome.reason}; raw={(outcome.raw_text or '')[:500]!r}"
            )
        return outcome

    async def generate(
        self,
        user_id: str,
        week_start: date,
        week_end: date,
        is_premium: bool,
        activity: ActivityData,
    ) -> RecapSections:
        """Generate recap content; falls back to RecapSections.empty() on any failure."""
        data_context = build_data_context(week_start, week_end, activity, is_premium)

        try:
            outcome = await self._request(data_context, is_premium)
        except RecapGenerationFailure as e:
            logger.error(
                f"Recap generation failed for user {user_id} week {week_start.isoformat()}, "
                f"using empty recap: {e}",
                exc_info=e.__cause__ is not None,
            )
            return RecapSections.empty()

        if is_premium and outcome.practice_visualization is None:
            outcome = outcome.model_copy(
                update={"practice_visualization": practice_visualization_from(activity)}
            )

        logger.info(
            f"Generated {'premium' if is_premium else 'free'} recap for user {user_id} "
            f"week {week_start.isoformat()}"
        )
        return outcome
