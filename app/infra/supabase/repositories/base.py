"""Base repository with common CRUD operations"""
import asyncio
from typing import Generic, TypeVar, Type, Optional, List, Dict, Any
from pydantic import BaseModel
from supabase import Client

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)
UpdateT = TypeVar('UpdateT', bound=BaseModel)


class BaseRepository(Generic[T, CreateT, UpdateT]):
    """
    Base repository providing common database operations.
    Hides Supabase implementation details from the rest of the application.

    The Supabase client is synchronous, so queries are executed on a worker
    thread to keep the event loop free for timer ticks.
    """
    
    def __init__(self, client: Client, table_name: str, model_class: Type[T]):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class
    
    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class(**data)
    
    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    def _table(self):
        return self._client.table(self._table_name)

    async def _execute(self, query):
        """Run a built query off the event loop"""
        return await asyncio.to_thread(query.execute)
    
    async def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by ID"""
        response = await self._execute(self._table().select("*").eq("id", id))
        
        if not response.data:
            return None
        
        return self._to_model(response.data[0])
    
    async def find_by_filters(self, filters: Dict[str, Any], limit: Optional[int] = None) -> List[T]:
        """Find records matching filters"""
        query = self._table().select("*")
        
        for key, value in filters.items():
            query = query.eq(key, value)
        
        if limit:
            query = query.limit(limit)
        
        response = await self._execute(query)
        return self._to_models(response.data)
    
    async def create(self, data: CreateT) -> T:
        """Create a new record"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        response = await self._execute(self._table().insert(data_dict))
        
        if not response.data:
            raise ValueError("Failed to create record")
        
        return self._to_model(response.data[0])
    
    async def update(self, id: str, data: UpdateT) -> Optional[T]:
        """Update a record by ID"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        
        if not data_dict:
            # No fields to update
            return await self.find_by_id(id)
        
        response = await self._execute(self._table().update(data_dict).eq("id", id))
        
        if not response.data:
            return None
        
        return self._to_model(response.data[0])
    
    async def delete(self, id: str) -> bool:
        """Delete a record by ID"""
        response = await self._execute(self._table().delete().eq("id", id))
        return len(response.data) > 0
    
    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records matching filters"""
        query = self._table().select("id", count="exact")
        
        if filters:
            for key, value in filters.items():
                query = query.eq(key, value)
        
        response = await self._execute(query)
        return response.count or 0
