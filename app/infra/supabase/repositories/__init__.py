"""Repository factory and exports"""
from supabase import Client
from .tasks import TaskRepository
from .pomodoro_sessions import PomodoroSessionRepository
from .feedback import FeedbackRepository
from .push_tokens import PushTokenRepository


class RepositoryFactory:
    """Factory for creating repository instances"""
    
    def __init__(self, client: Client):
        self._client = client
        self._tasks: TaskRepository = None
        self._sessions: PomodoroSessionRepository = None
        self._feedback: FeedbackRepository = None
        self._push_tokens: PushTokenRepository = None
    
    @property
    def tasks(self) -> TaskRepository:
        """Get task repository"""
        if self._tasks is None:
            self._tasks = TaskRepository(self._client)
        return self._tasks
    
    @property
    def sessions(self) -> PomodoroSessionRepository:
        """Get pomodoro session repository"""
        if self._sessions is None:
            self._sessions = PomodoroSessionRepository(self._client)
        return self._sessions
    
    @property
    def feedback(self) -> FeedbackRepository:
        """Get feedback repository"""
        if self._feedback is None:
            self._feedback = FeedbackRepository(self._client)
        return self._feedback
    
    @property
    def push_tokens(self) -> PushTokenRepository:
        """Get push token repository"""
        if self._push_tokens is None:
            self._push_tokens = PushTokenRepository(self._client)
        return self._push_tokens


__all__ = [
    'RepositoryFactory',
    'TaskRepository',
    'PomodoroSessionRepository',
    'FeedbackRepository',
    'PushTokenRepository',
]
