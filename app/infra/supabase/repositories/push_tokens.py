"""Push token repository"""
from typing import List

from supabase import Client  # type: ignore

from app.models.push_notification import PushToken, PushTokenCreate

from .base import BaseRepository


class PushTokenRepository(BaseRepository[PushToken, PushTokenCreate, PushTokenCreate]):
    """Repository for Expo push tokens registered by a user's devices"""
    
    def __init__(self, client: Client):
        super().__init__(client, "push_tokens", PushToken)
    
    async def find_tokens_by_user(self, user_id: str) -> List[str]:
        response = await self._execute(
            self._table().select("expo_push_token").eq("user_id", user_id)
        )
        return [row["expo_push_token"] for row in response.data]
    
    async def delete_token(self, token: str) -> None:
        """Remove a token Expo reported as no longer registered"""
        await self._execute(self._table().delete().eq("expo_push_token", token))
