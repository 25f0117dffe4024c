"""Timer state models"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .pomodoro import SessionType, nominal_duration


class TimerState(BaseModel):
    """Mutable timer state, persisted as a single JSON document per user"""
    model_config = ConfigDict(extra="ignore")

    remaining_seconds: int = Field(default_factory=lambda: nominal_duration(SessionType.FOCUS))
    running: bool = False
    phase: SessionType = SessionType.FOCUS
    completed_focus_count: int = Field(default=0, ge=0)
    count_date: Optional[date] = None  # local day completed_focus_count belongs to
    selected_task_id: Optional[str] = None
    active_session_id: Optional[str] = None

    @model_validator(mode="after")
    def _clamp_remaining(self) -> "TimerState":
        # Persisted data may drift out of the phase's range
        upper = nominal_duration(self.phase)
        self.remaining_seconds = max(0, min(upper, self.remaining_seconds))
        return self


class TimerSnapshot(BaseModel):
    """Immutable read-out of the timer exposed to API consumers"""
    model_config = ConfigDict(frozen=True)

    remaining_seconds: int
    running: bool
    phase: SessionType
    completed_focus_count: int
    selected_task_id: Optional[str] = None
    active_session_id: Optional[str] = None
    nominal_seconds: int
    progress_percent: float
    display_time: str
