"""Session Recorder - opens and finalizes pomodoro_sessions rows"""
import logging
from datetime import datetime, timezone
from typing import Optional

from app.infra.supabase.repositories.pomodoro_sessions import PomodoroSessionRepository
from app.models.pomodoro import SessionType, nominal_minutes
from app.models.pomodoro_session import PomodoroSessionCreate, PomodoroSessionUpdate

logger = logging.getLogger(__name__)


class SessionRecorder:
    """
    Writes session records for analytics.

    Neither operation raises: the timer keeps counting when Supabase is
    unreachable, sessions just go unrecorded.
    """

    def __init__(self, repository: PomodoroSessionRepository):
        self.repository = repository

    async def open(
        self,
        user_id: Optional[str],
        task_id: Optional[str],
        session_type: SessionType,
    ) -> Optional[str]:
        """
        Create an incomplete session row.

        Returns:
            The new session id, or None when there is no user or the insert failed
        """
        if not user_id:
            return None

        data = PomodoroSessionCreate(
            user_id=user_id,
            task_id=task_id,
            session_type=session_type,
            planned_duration=nominal_minutes(session_type),
            started_at=datetime.now(timezone.utc),
        )
        try:
            session = await self.repository.create(data)
        except Exception as e:
            logger.error(f"Error creating session: {e}")
            return None

        logger.info(f"Opened {session_type.value} session {session.id} for user {user_id}")
        return session.id

    async def finalize(self, session_id: str, actual_duration: float) -> bool:
        """Mark a session completed with its actual duration in minutes"""
        update = PomodoroSessionUpdate(
            actual_duration=actual_duration,
            ended_at=datetime.now(timezone.utc),
            completed=True,
        )
        try:
            session = await self.repository.update(session_id, update)
        except Exception as e:
            logger.error(f"Error completing session {session_id}: {e}")
            return False

        if session is None:
            logger.warning(f"Session {session_id} not found when completing")
            return False
        return True
