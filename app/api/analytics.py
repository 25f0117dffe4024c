"""Analytics endpoints"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_analytics_service
from app.middleware.auth import get_current_user_id
from app.models.analytics import AnalyticsReport, TimeFrame
from app.models.pomodoro_session import CompletedSession
from app.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsReport)
async def get_report(
    time_frame: TimeFrame = Query(TimeFrame.WEEK),
    user_id: str = Depends(get_current_user_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Dashboard report over the user's completed sessions"""
    try:
        return await service.build_report(user_id, time_frame)
    except Exception as e:
        logger.error(f"Error fetching analytics data: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build analytics: {str(e)}"
        )


@router.get("/sessions", response_model=List[CompletedSession])
async def list_completed_sessions(
    user_id: str = Depends(get_current_user_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Completed sessions with task titles, newest first"""
    return await service.get_completed_sessions(user_id)
