from fastapi import APIRouter
from app.api import analytics, feedback, health, tasks, timer

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(timer.router)
api_router.include_router(tasks.router)
api_router.include_router(analytics.router)
api_router.include_router(feedback.router)
api_router.include_router(health.router)
