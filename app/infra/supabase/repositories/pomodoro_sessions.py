"""Pomodoro session repository"""
from typing import List

from supabase import Client  # type: ignore

from app.models.pomodoro_session import (
    CompletedSession,
    PomodoroSession,
    PomodoroSessionCreate,
    PomodoroSessionUpdate,
)

from .base import BaseRepository


class PomodoroSessionRepository(BaseRepository[PomodoroSession, PomodoroSessionCreate, PomodoroSessionUpdate]):
    """Repository for pomodoro_sessions rows"""
    
    def __init__(self, client: Client):
        super().__init__(client, "pomodoro_sessions", PomodoroSession)
    
    async def find_completed_by_user(self, user_id: str) -> List[CompletedSession]:
        """Completed sessions for a user with the linked task title, newest first"""
        query = (
            self._table()
            .select("id, session_type, actual_duration, started_at, task_id, tasks(title)")
            .eq("user_id", user_id)
            .eq("completed", True)
            .order("started_at", desc=True)
        )
        response = await self._execute(query)
        
        sessions = []
        for row in response.data:
            task = row.pop("tasks", None) or {}
            sessions.append(CompletedSession(**row, task_title=task.get("title") or "No Task"))
        return sessions
