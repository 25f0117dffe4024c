"""Task repository"""
from typing import List

from supabase import Client  # type: ignore

from app.models.task import Task, TaskCreate, TaskUpdate

from .base import BaseRepository


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations"""
    
    def __init__(self, client: Client):
        super().__init__(client, "tasks", Task)
    
    async def find_by_user(self, user_id: str) -> List[Task]:
        """Find all tasks for a specific user, newest first"""
        query = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        response = await self._execute(query)
        return self._to_models(response.data)
    
    async def count_completed_by_user(self, user_id: str) -> int:
        """Number of tasks the user has marked completed"""
        return await self.count({"user_id": user_id, "completed": True})
