"""Feedback repository"""
from pydantic import BaseModel
from supabase import Client  # type: ignore

from app.models.feedback import Feedback, FeedbackCreate

from .base import BaseRepository


class FeedbackRepository(BaseRepository[Feedback, FeedbackCreate, BaseModel]):
    """Repository for feedback submissions (insert-only from the app)"""
    
    def __init__(self, client: Client):
        super().__init__(client, "feedback", Feedback)
