"""Analytics read models"""
from enum import Enum
from typing import List

from pydantic import BaseModel

from .pomodoro_session import CompletedSession


class TimeFrame(str, Enum):
    WEEK = "week"
    MONTH = "month"


class SessionStats(BaseModel):
    """Headline numbers shown on the dashboard"""
    total_sessions: int = 0
    total_focus_time: float = 0  # minutes
    completed_tasks: int = 0
    average_session_length: float = 0  # minutes
    today_sessions: int = 0
    this_week_sessions: int = 0


class DailyFocus(BaseModel):
    date: str  # ISO date
    label: str
    sessions: int
    minutes: float


class SessionTypeShare(BaseModel):
    session_type: str
    sessions: int
    minutes: float


class TaskFocus(BaseModel):
    task_title: str
    sessions: int
    minutes: float


class AnalyticsReport(BaseModel):
    time_frame: TimeFrame
    stats: SessionStats
    daily: List[DailyFocus]
    by_session_type: List[SessionTypeShare]
    by_task: List[TaskFocus]
    recent_sessions: List[CompletedSession]
