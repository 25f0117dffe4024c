"""Pomodoro session domain model"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .pomodoro import SessionType


class PomodoroSessionBase(BaseModel):
    """Fields written when a phase starts"""
    user_id: str  # UUID as string
    task_id: Optional[str] = None
    session_type: SessionType
    planned_duration: float  # minutes
    started_at: datetime


class PomodoroSessionCreate(PomodoroSessionBase):
    """Session creation model"""
    pass


class PomodoroSessionUpdate(BaseModel):
    """Session finalization model - all fields optional"""
    actual_duration: Optional[float] = None  # minutes
    ended_at: Optional[datetime] = None
    completed: Optional[bool] = None


class PomodoroSession(PomodoroSessionBase):
    """Complete session record from database"""
    id: str
    actual_duration: Optional[float] = None
    ended_at: Optional[datetime] = None
    completed: bool = False

    class Config:
        from_attributes = True


class CompletedSession(BaseModel):
    """Completed session joined with its task title, as read by analytics"""
    id: str
    session_type: SessionType
    actual_duration: Optional[float] = None
    started_at: datetime
    task_id: Optional[str] = None
    task_title: str = "No Task"
