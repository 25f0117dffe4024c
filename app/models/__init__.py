"""Domain models for the application"""
from .pomodoro import SessionType, nominal_duration, nominal_minutes
from .timer_state import TimerState, TimerSnapshot
from .pomodoro_session import PomodoroSession, PomodoroSessionCreate, PomodoroSessionUpdate, CompletedSession
from .task import Task, TaskCreate, TaskUpdate
from .feedback import Feedback, FeedbackCreate, FeedbackType
from .analytics import AnalyticsReport, SessionStats, DailyFocus, SessionTypeShare, TaskFocus, TimeFrame

__all__ = [
    'SessionType', 'nominal_duration', 'nominal_minutes',
    'TimerState', 'TimerSnapshot',
    'PomodoroSession', 'PomodoroSessionCreate', 'PomodoroSessionUpdate', 'CompletedSession',
    'Task', 'TaskCreate', 'TaskUpdate',
    'Feedback', 'FeedbackCreate', 'FeedbackType',
    'AnalyticsReport', 'SessionStats', 'DailyFocus', 'SessionTypeShare', 'TaskFocus', 'TimeFrame',
]
