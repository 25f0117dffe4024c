"""
Push Notification Service

Sends phase-change notifications to a user's devices via Expo Push API
"""

import httpx
import logging
from typing import List, Dict, Any

from app.infra.supabase.repositories.push_tokens import PushTokenRepository
from app.models.push_notification import ExpoPushMessage, ExpoPushTicket

logger = logging.getLogger(__name__)

EXPO_PUSH_URL = "https://exp.host/--/api/v2/push/send"


class PushNotificationService:
    """Service for sending push notifications via Expo"""

    def __init__(self, token_repo: PushTokenRepository, http_client: httpx.AsyncClient | None = None):
        self.token_repo = token_repo
        self._http_client = http_client

    async def send_to_user(self, user_id: str, title: str, body: str, data: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """
        Send a push notification to every device registered by a user

        Args:
            user_id: Recipient user ID
            title: Notification title
            body: Notification body

        Returns:
            Dictionary with send results
        """
        tokens = await self.token_repo.find_tokens_by_user(user_id)

        if not tokens:
            # Nothing registered - the user never granted notification permission
            return {"success": False, "sent": 0, "failed": 0, "tickets": []}

        messages = [
            ExpoPushMessage(to=token, title=title, body=body, data=data or {}).model_dump()
            for token in tokens
        ]

        expo_response = await self._post(messages)

        if expo_response.status_code != 200:
            raise Exception(f"Failed to send push notification: {expo_response.text}")

        tickets = [ExpoPushTicket(**t) for t in expo_response.json().get("data", [])]
        errors = [(i, t) for i, t in enumerate(tickets) if t.status == "error"]

        await self._remove_unregistered_tokens(tokens, errors)

        return {
            "success": len(errors) < len(tickets),
            "sent": len(tickets) - len(errors),
            "failed": len(errors),
            "tickets": [t.model_dump() for t in tickets],
        }

    async def _post(self, messages: List[Dict[str, Any]]) -> httpx.Response:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
        }
        if self._http_client is not None:
            return await self._http_client.post(EXPO_PUSH_URL, json=messages, headers=headers, timeout=10.0)

        async with httpx.AsyncClient() as client:
            return await client.post(EXPO_PUSH_URL, json=messages, headers=headers, timeout=10.0)

    async def _remove_unregistered_tokens(self, tokens: List[str], errors) -> None:
        for index, ticket in errors:
            error_type = (ticket.details or {}).get("error")
            if error_type == "DeviceNotRegistered" or "not registered" in (ticket.message or ""):
                if index < len(tokens):
                    await self.token_repo.delete_token(tokens[index])
                    logger.info(f"Removed invalid token: {tokens[index]}")
