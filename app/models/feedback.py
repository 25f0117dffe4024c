"""Feedback domain model"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class FeedbackType(str, Enum):
    """Feedback categories offered on the feedback page"""
    SUGGESTION = "suggestion"
    BUG = "bug"
    COMPLIMENT = "compliment"
    GENERAL = "general"


class FeedbackBase(BaseModel):
    type: FeedbackType = FeedbackType.SUGGESTION
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)


class FeedbackCreate(FeedbackBase):
    """Feedback creation model"""
    user_id: str
    user_email: Optional[str] = None


class Feedback(FeedbackCreate):
    """Complete feedback row from database"""
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
