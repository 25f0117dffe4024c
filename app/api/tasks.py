from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List, Optional

from app.api.deps import get_task_service
from app.middleware.auth import get_current_user_id
from app.models.task import Task, TaskUpdate, clamp_estimated_pomodoros
from app.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# Request/Response models for CRUD operations
class CreateTaskRequest(BaseModel):
    title: str
    description: Optional[str] = ""
    estimated_pomodoros: Optional[int] = 1


class UpdateTaskRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    estimated_pomodoros: Optional[int] = None
    completed: Optional[bool] = None


class TaskResponse(BaseModel):
    task: Task


class TaskListResponse(BaseModel):
    tasks: List[Task]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


# CRUD Endpoints
@router.get("", response_model=TaskListResponse)
async def list_tasks(
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """List the user's tasks, newest first"""
    tasks = await service.list_tasks(user_id)
    
    return {
        "tasks": tasks,
        "count": len(tasks)
    }


@router.post("", response_model=TaskResponse)
async def create_task(
    request: CreateTaskRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Create a new task"""
    title = request.title.strip()
    if not title:
        raise HTTPException(status_code=422, detail="Task title is required")
    
    task = await service.create_task(
        user_id=user_id,
        title=title,
        description=request.description or "",
        estimated_pomodoros=clamp_estimated_pomodoros(request.estimated_pomodoros),
    )
    
    return {"task": task}


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Update fields of an existing task"""
    updates = request.model_dump(exclude_unset=True)
    if "estimated_pomodoros" in updates:
        updates["estimated_pomodoros"] = clamp_estimated_pomodoros(updates["estimated_pomodoros"])
    
    try:
        task = await service.update_task(user_id, task_id, TaskUpdate(**updates))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    
    return {"task": task}


@router.post("/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Flip a task between open and completed"""
    try:
        task = await service.toggle_complete(user_id, task_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    
    return {"task": task}


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task"""
    try:
        success = await service.delete_task(user_id, task_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    
    if not success:
        raise HTTPException(status_code=500, detail="Failed to delete task")
    
    return {
        "success": True,
        "message": f"Task {task_id} deleted successfully"
    }
