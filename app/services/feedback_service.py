"""Feedback Service"""

import logging
from typing import Optional

from app.infra.supabase.repositories.feedback import FeedbackRepository
from app.models.feedback import Feedback, FeedbackCreate, FeedbackType

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, feedback_repo: FeedbackRepository):
        self.feedback_repo = feedback_repo

    async def submit(
        self,
        user_id: str,
        type: FeedbackType,
        subject: str,
        message: str,
        rating: int,
        user_email: Optional[str] = None,
    ) -> Feedback:
        feedback = await self.feedback_repo.create(
            FeedbackCreate(
                user_id=user_id,
                type=type,
                subject=subject.strip(),
                message=message.strip(),
                rating=rating,
                user_email=user_email,
            )
        )
        logger.info(f"Feedback {feedback.id} ({type.value}) submitted by user {user_id}")
        return feedback
