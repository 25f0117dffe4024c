import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv(dotenv_path=".env")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Runtime settings read from the environment"""
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    timer_state_dir: Path = Path(".timevault")
    notifier: str = "log"  # "log" or "push"
    daily_reset: bool = True
    cors_origins: List[str] = ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process"""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL", ""),
        supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""),
        timer_state_dir=Path(os.getenv("TIMER_STATE_DIR", ".timevault")),
        notifier=os.getenv("POMODORO_NOTIFIER", "log").strip().lower(),
        daily_reset=_env_flag("POMODORO_DAILY_RESET", True),
        cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
    )
