"""Pomodoro timer endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_task_service, get_user_timer
from app.middleware.auth import get_current_user_id
from app.models.timer_state import TimerSnapshot
from app.services.pomodoro import PomodoroTimer
from app.services.task_service import TaskService

router = APIRouter(prefix="/api/timer", tags=["timer"])


class StartTimerRequest(BaseModel):
    task_id: Optional[str] = None


class SelectTaskRequest(BaseModel):
    task_id: Optional[str] = None


class TimerActionResponse(BaseModel):
    accepted: bool
    timer: TimerSnapshot


async def _require_own_task(task_id: Optional[str], user_id: str, task_service: TaskService) -> None:
    if not task_id:
        return
    try:
        await task_service.get_task(user_id, task_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=TimerSnapshot)
async def get_timer(timer: PomodoroTimer = Depends(get_user_timer)):
    """Current timer state for the authenticated user"""
    return timer.snapshot()


@router.post("/start", response_model=TimerActionResponse)
async def start_timer(
    request: Optional[StartTimerRequest] = None,
    user_id: str = Depends(get_current_user_id),
    timer: PomodoroTimer = Depends(get_user_timer),
    task_service: TaskService = Depends(get_task_service),
):
    """
    Start counting down the current phase.

    Starting an already running timer is accepted as a no-op and reported
    with ``accepted = false``.
    """
    task_id = request.task_id if request else None
    await _require_own_task(task_id, user_id, task_service)
    accepted = await timer.start(task_id)
    return {"accepted": accepted, "timer": timer.snapshot()}


@router.post("/pause", response_model=TimerActionResponse)
async def pause_timer(timer: PomodoroTimer = Depends(get_user_timer)):
    timer.pause()
    return {"accepted": True, "timer": timer.snapshot()}


@router.post("/reset", response_model=TimerActionResponse)
async def reset_timer(timer: PomodoroTimer = Depends(get_user_timer)):
    timer.reset()
    return {"accepted": True, "timer": timer.snapshot()}


@router.post("/skip", response_model=TimerActionResponse)
async def skip_timer(timer: PomodoroTimer = Depends(get_user_timer)):
    timer.skip()
    return {"accepted": True, "timer": timer.snapshot()}


@router.put("/task", response_model=TimerActionResponse)
async def select_task(
    request: SelectTaskRequest,
    user_id: str = Depends(get_current_user_id),
    timer: PomodoroTimer = Depends(get_user_timer),
    task_service: TaskService = Depends(get_task_service),
):
    """Select the task the next focus session counts towards"""
    if timer.running:
        raise HTTPException(status_code=409, detail="Pause the timer before changing its task")
    await _require_own_task(request.task_id, user_id, task_service)
    timer.set_current_task(request.task_id)
    return {"accepted": True, "timer": timer.snapshot()}
