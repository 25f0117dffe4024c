import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from app.api.base import api_router  # noqa: E402
from app.config import Settings, get_settings  # noqa: E402
from app.infra.supabase.client import get_supabase_client  # noqa: E402
from app.infra.supabase.repositories import RepositoryFactory  # noqa: E402
from app.services.pomodoro import (  # noqa: E402
    LogNotifier,
    Notifier,
    PushNotifier,
    SessionRecorder,
    TimerRegistry,
)
from app.services.push_notification_service import PushNotificationService  # noqa: E402

logger = logging.getLogger(__name__)


def build_timer_registry(settings: Settings) -> TimerRegistry:
    """Wire timers to Supabase when configured; otherwise they run unrecorded"""
    recorder: Optional[SessionRecorder] = None
    notifier: Notifier = LogNotifier()
    try:
        repos = RepositoryFactory(get_supabase_client())
    except ValueError as e:
        logger.warning(f"Supabase unavailable, sessions will not be recorded: {e}")
    else:
        recorder = SessionRecorder(repos.sessions)
        if settings.notifier == "push":
            notifier = PushNotifier(PushNotificationService(repos.push_tokens))

    return TimerRegistry.from_state_dir(
        settings.timer_state_dir,
        recorder=recorder,
        notifier=notifier,
        daily_reset=settings.daily_reset,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.timer_registry = build_timer_registry(get_settings())
    yield
    await app.state.timer_registry.close_all()


app = FastAPI(
    title="TimeVault Backend API",
    description="Pomodoro timer, task list and focus analytics",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "TimeVault Backend API",
        "docs": "/docs",
        "version": "1.0.0"
    }
