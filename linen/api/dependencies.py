"""FastAPI dependency providers wiring repositories and services per request.

Tests swap collaborators through ``app.dependency_overrides`` on these
functions (session, clock, text generator, current user).
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.clock import Clock, get_clock
from ..core.database import get_db_session_dependency
from ..infrastructure.repositories import (
    SqlAlchemyActivityRepository,
    SqlAlchemyRecapRepository,
    SqlAlchemyThemeRepository,
)
from ..services.activity_aggregator import ActivityAggregator
from ..services.llm_service import TextGenerator, get_llm_service
from ..services.recap_generator import RecapGenerator
from ..services.recap_service import RecapService
from ..services.theme_service import ThemeService


def get_calendar_clock() -> Clock:
    return get_clock()


def get_text_generator() -> TextGenerator:
    return get_llm_service()


def get_theme_service(
    session: AsyncSession = Depends(get_db_session_dependency),
    clock: Clock = Depends(get_calendar_clock),
) -> ThemeService:
    return ThemeService(SqlAlchemyThemeRepository(session), clock)


def get_recap_service(
    session: AsyncSession = Depends(get_db_session_dependency),
    clock: Clock = Depends(get_calendar_clock),
    text_generator: TextGenerator = Depends(get_text_generator),
) -> RecapService:
    return RecapService(
        repository=SqlAlchemyRecapRepository(session),
        aggregator=ActivityAggregator(SqlAlchemyActivityRepository(session), clock),
        generator=RecapGenerator(text_generator),
        clock=clock,
    )
