"""
Weekly recap endpoints: current recap, history, explicit weeks, regeneration
and delivery preferences.

Fixed paths are registered before ``/{week_start_date}`` so they are never
captured by the path parameter.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ..core.authorization import get_current_user_id
from ..domain.errors import InvalidDeliveryPreferences, InvalidWeekStart
from ..services.recap_service import RecapService, parse_week_start
from .dependencies import get_recap_service
from .schemas import (
    CurrentRecapResponse,
    GenerateRecapRequest,
    PreferencesResponse,
    PreferencesUpdate,
    RecapHistoryResponse,
    RecapPreferencesOut,
    RecapResponse,
    WeeklyRecapOut,
)

logger = logging.getLogger(__name__)


def create_weekly_recap_router() -> APIRouter:
    """Create and return the weekly recap router."""
    router = APIRouter(prefix="/api/weekly-recap", tags=["weekly-recap"])

    @router.get("/current", response_model=CurrentRecapResponse)
    async def current_recap(
        user_id: str = Depends(get_current_user_id),
        service: RecapService = Depends(get_recap_service),
    ) -> CurrentRecapResponse:
        """Recap for the last completed week, generated on first request."""
        week = service.clock.last_completed_week()
        recap = await service.get_or_create(user_id, week.start, week.end)
        logger.info(f"Current recap {recap.id} served to user {user_id}")
        return CurrentRecapResponse(
            recap=WeeklyRecapOut.model_validate(recap),
            week_start_date=week.start,
            week_end_date=week.end,
        )

    @router.get("/history", response_model=RecapHistoryResponse)
    async def recap_history(
        limit: Optional[int] = Query(None, ge=1),
        user_id: str = Depends(get_current_user_id),
        service: RecapService = Depends(get_recap_service),
    ) -> RecapHistoryResponse:
        recaps = await service.history(user_id, limit=limit)
        logger.info(f"Returning {len(recaps)} recaps for user {user_id}")
        return RecapHistoryResponse(
            recaps=[WeeklyRecapOut.model_validate(r) for r in recaps]
        )

    @router.get("/preferences", response_model=PreferencesResponse)
    async def get_preferences(
        user_id: str = Depends(get_current_user_id),
        service: RecapService = Depends(get_recap_service),
    ) -> PreferencesResponse:
        preferences = await service.get_preferences(user_id)
        return PreferencesResponse(
            preferences=RecapPreferencesOut.model_validate(preferences)
        )

    @router.post("/preferences", response_model=PreferencesResponse)
    async def update_preferences(
        body: PreferencesUpdate,
        user_id: str = Depends(get_current_user_id),
        service: RecapService = Depends(get_recap_service),
    ) -> PreferencesResponse:
        """Validate and store delivery day / time."""
        try:
            preferences = await service.update_preferences(
                user_id,
                delivery_day=body.delivery_day,
                delivery_time=body.delivery_time,
            )
        except InvalidDeliveryPreferences as e:
            logger.info(f"Rejected preferences update for user {user_id}: {e}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        logger.info(
            f"Updated recap preferences for user {user_id}: "
            f"{preferences.delivery_day} {preferences.delivery_time}"
        )
        return PreferencesResponse(
            preferences=RecapPreferencesOut.model_validate(preferences)
        )

    @router.post("/generate", response_model=RecapResponse)
    async def generate_recap(
        body: Optional[GenerateRecapRequest] = Body(None),
        user_id: str = Depends(get_current_user_id),
        service: RecapService = Depends(get_recap_service),
    ) -> RecapResponse:
        """Generate or upgrade the recap for the last completed week."""
        is_premium = body.is_premium if body is not None else False
        recap = await service.regenerate(user_id, is_premium)
        return RecapResponse(recap=WeeklyRecapOut.model_validate(recap))

    @router.get("/{week_start_date}", response_model=RecapResponse)
    async def recap_for_week(
        week_start_date: str,
        user_id: str = Depends(get_current_user_id),
        service: RecapService = Depends(get_recap_service),
    ) -> RecapResponse:
        """Stored recap for an explicit week; ``{"recap": null}`` when absent."""
        try:
            week_start = parse_week_start(week_start_date)
        except InvalidWeekStart as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        recap = await service.get_by_week(user_id, week_start)
        logger.info(
            f"Week recap lookup for user {user_id} {week_start.isoformat()}: "
            f"{'found' if recap else 'none'}"
        )
        return RecapResponse(
            recap=WeeklyRecapOut.model_validate(recap) if recap else None
        )

    return router
