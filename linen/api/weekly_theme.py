"""
Weekly theme endpoints: today's liturgical content and rotation seeding.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.authorization import get_current_user_id, require_admin_key
from ..domain.errors import DailyContentNotFound, InvalidWeekStart, ThemeNotFound
from ..services.recap_service import parse_week_start
from ..services.theme_service import ThemeService
from .dependencies import get_theme_service
from .schemas import (
    CurrentThemeResponse,
    DailyContentOut,
    SeedRequest,
    SeedResponse,
    ThemePreviewResponse,
    WeeklyThemeOut,
)

logger = logging.getLogger(__name__)


def create_weekly_theme_router() -> APIRouter:
    """Create and return the weekly theme router."""
    router = APIRouter(prefix="/api/weekly-theme", tags=["weekly-theme"])

    @router.get("/current", response_model=CurrentThemeResponse)
    async def current_theme(
        user_id: str = Depends(get_current_user_id),
        service: ThemeService = Depends(get_theme_service),
    ) -> CurrentThemeResponse:
        """Theme for this week plus today's daily content."""
        try:
            theme, content = await service.get_today()
        except ThemeNotFound:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No theme available for this week",
            )
        except DailyContentNotFound:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No daily content available for today",
            )

        logger.info(
            f"Serving theme {theme.id} day {content.day_of_week} to user {user_id}"
        )
        return CurrentThemeResponse(
            weekly_theme=WeeklyThemeOut.model_validate(theme),
            daily_content=DailyContentOut.model_validate(content),
        )

    @router.get("/preview", response_model=ThemePreviewResponse)
    async def preview_theme(
        service: ThemeService = Depends(get_theme_service),
    ) -> ThemePreviewResponse:
        """Unauthenticated preview; serves the fallback verse instead of 404."""
        preview = await service.get_preview()
        return ThemePreviewResponse(
            weekly_theme=(
                WeeklyThemeOut.model_validate(preview.theme) if preview.theme else None
            ),
            daily_content=DailyContentOut(
                day_of_week=preview.day_of_week,
                day_title=preview.day_title,
                scripture_reference=preview.scripture_reference,
                scripture_text=preview.scripture_text,
                reflection_prompt=preview.reflection_prompt,
                somatic_prompt=preview.somatic_prompt,
            ),
            is_fallback=preview.is_fallback,
        )

    @router.post(
        "/seed",
        response_model=SeedResponse,
        dependencies=[Depends(require_admin_key)],
    )
    async def seed_themes(
        response: Response,
        body: Optional[SeedRequest] = None,
        service: ThemeService = Depends(get_theme_service),
    ) -> SeedResponse:
        """Seed the rotation table once. Requires admin API key via X-Api-Key header."""
        start = None
        if body is not None and body.start_date:
            try:
                start = parse_week_start(body.start_date)
            except InvalidWeekStart as e:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        result = await service.seed_rotation(start)
        if result.already_seeded:
            response.status_code = status.HTTP_200_OK
            return SeedResponse(message="Weekly themes already seeded", themes_created=0)

        response.status_code = status.HTTP_201_CREATED
        return SeedResponse(
            message=f"Created {result.themes_created} weekly themes with daily content",
            themes_created=result.themes_created,
        )

    return router
