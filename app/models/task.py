"""Task domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

MIN_ESTIMATED_POMODOROS = 1
MAX_ESTIMATED_POMODOROS = 20


class TaskBase(BaseModel):
    """Base task fields for creation"""
    title: str = Field(..., min_length=1)
    description: str = ""
    estimated_pomodoros: int = Field(1, ge=MIN_ESTIMATED_POMODOROS, le=MAX_ESTIMATED_POMODOROS)
    completed: bool = False


class TaskCreate(TaskBase):
    """Task creation model"""
    user_id: str   # UUID as string


class TaskUpdate(BaseModel):
    """Task update model - all fields optional"""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    estimated_pomodoros: Optional[int] = Field(None, ge=MIN_ESTIMATED_POMODOROS, le=MAX_ESTIMATED_POMODOROS)
    completed: Optional[bool] = None
    updated_at: Optional[datetime] = None


class Task(TaskBase):
    """Complete task model from database"""
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


def clamp_estimated_pomodoros(value: Optional[int]) -> int:
    """Clamp a user-entered estimate into the accepted range (non-numbers become 1)"""
    if value is None:
        return MIN_ESTIMATED_POMODOROS
    return max(MIN_ESTIMATED_POMODOROS, min(MAX_ESTIMATED_POMODOROS, int(value)))
