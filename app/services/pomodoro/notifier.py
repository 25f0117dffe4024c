"""Phase-change notifiers. All of them are best-effort and never raise."""
import logging
from typing import Optional, Protocol

from app.services.push_notification_service import PushNotificationService

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "TimeVault"
FOCUS_DONE_BODY = "Focus session completed! Time for a break."
BREAK_DONE_BODY = "Break time over! Ready for another focus session?"


class Notifier(Protocol):
    async def notify(self, user_id: Optional[str], title: str, body: str) -> None:
        ...


class LogNotifier:
    """Writes notifications to the application log"""

    async def notify(self, user_id: Optional[str], title: str, body: str) -> None:
        logger.info(f"[{title}] {body} (user={user_id})")


class PushNotifier:
    """Delivers notifications to the user's registered devices"""

    def __init__(self, push_service: PushNotificationService):
        self.push_service = push_service

    async def notify(self, user_id: Optional[str], title: str, body: str) -> None:
        if not user_id:
            return
        try:
            result = await self.push_service.send_to_user(user_id, title, body, data={"type": "pomodoro"})
        except Exception as e:
            logger.error(f"Push notification for user {user_id} failed: {e}")
            return
        logger.debug(f"Push notification result for user {user_id}: {result}")
