"""Feedback endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.api.deps import get_feedback_service
from app.middleware.auth import get_current_user_id
from app.models.feedback import Feedback, FeedbackType
from app.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


class SubmitFeedbackRequest(BaseModel):
    type: FeedbackType = FeedbackType.SUGGESTION
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)
    user_email: Optional[str] = None


@router.post("", response_model=Feedback, status_code=201)
async def submit_feedback(
    request: SubmitFeedbackRequest,
    user_id: str = Depends(get_current_user_id),
    service: FeedbackService = Depends(get_feedback_service),
):
    try:
        return await service.submit(
            user_id=user_id,
            type=request.type,
            subject=request.subject,
            message=request.message,
            rating=request.rating,
            user_email=request.user_email,
        )
    except Exception as e:
        logger.error(f"Error submitting feedback: {e}")
        raise HTTPException(
            status_code=500,
            detail="There was an error submitting your feedback. Please try again."
        )
