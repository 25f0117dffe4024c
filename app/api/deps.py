"""Shared FastAPI dependencies"""
from fastapi import Depends, Request

from app.infra.supabase.client import get_supabase_client
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.services.analytics_service import AnalyticsService
from app.services.feedback_service import FeedbackService
from app.services.pomodoro import PomodoroTimer, TimerRegistry
from app.services.task_service import TaskService


def get_repositories() -> RepositoryFactory:
    return RepositoryFactory(get_supabase_client())


def get_timer_registry(request: Request) -> TimerRegistry:
    return request.app.state.timer_registry


async def get_user_timer(
    user_id: str = Depends(get_current_user_id),
    registry: TimerRegistry = Depends(get_timer_registry),
) -> PomodoroTimer:
    return registry.get(user_id)


def get_task_service(repos: RepositoryFactory = Depends(get_repositories)) -> TaskService:
    return TaskService(repos.tasks)


def get_analytics_service(repos: RepositoryFactory = Depends(get_repositories)) -> AnalyticsService:
    return AnalyticsService(repos.sessions, repos.tasks)


def get_feedback_service(repos: RepositoryFactory = Depends(get_repositories)) -> FeedbackService:
    return FeedbackService(repos.feedback)
