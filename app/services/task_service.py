"""
Task Service

CRUD for the caller's task list. The timer only keeps a task id; everything
else about a task lives here.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from app.infra.supabase.repositories.tasks import TaskRepository
from app.models.task import Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    """Service for managing a user's tasks"""

    def __init__(self, task_repo: TaskRepository):
        self.task_repo = task_repo

    async def list_tasks(self, user_id: str) -> List[Task]:
        return await self.task_repo.find_by_user(user_id)

    async def get_task(self, user_id: str, task_id: str) -> Task:
        """
        Get a task owned by the user.

        Raises:
            ValueError: If the task does not exist or belongs to someone else
        """
        task = await self.task_repo.find_by_id(task_id)
        if task is None or task.user_id != user_id:
            raise ValueError(f"Task {task_id} not found")
        return task

    async def create_task(
        self,
        user_id: str,
        title: str,
        description: str = "",
        estimated_pomodoros: int = 1,
    ) -> Task:
        task = await self.task_repo.create(
            TaskCreate(
                user_id=user_id,
                title=title,
                description=description,
                estimated_pomodoros=estimated_pomodoros,
            )
        )
        logger.info(f"Created task {task.id} for user {user_id}")
        return task

    async def update_task(self, user_id: str, task_id: str, updates: TaskUpdate) -> Task:
        await self.get_task(user_id, task_id)

        if updates.model_fields_set:
            updates.updated_at = datetime.now(timezone.utc)

        task = await self.task_repo.update(task_id, updates)
        if task is None:
            raise ValueError(f"Task {task_id} not found")
        return task

    async def toggle_complete(self, user_id: str, task_id: str) -> Task:
        task = await self.get_task(user_id, task_id)
        return await self.update_task(user_id, task_id, TaskUpdate(completed=not task.completed))

    async def delete_task(self, user_id: str, task_id: str) -> bool:
        await self.get_task(user_id, task_id)
        deleted = await self.task_repo.delete(task_id)
        if deleted:
            logger.info(f"Deleted task {task_id} for user {user_id}")
        return deleted
