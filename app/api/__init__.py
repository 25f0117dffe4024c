# API module exports
from app.api import analytics, feedback, health, tasks, timer
from app.api.base import api_router

__all__ = ["analytics", "feedback", "health", "tasks", "timer", "api_router"]
