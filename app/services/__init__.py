"""Services module"""

from app.services.task_service import TaskService
from app.services.analytics_service import AnalyticsService
from app.services.feedback_service import FeedbackService
from app.services.push_notification_service import PushNotificationService

__all__ = [
    "TaskService",
    "AnalyticsService",
    "FeedbackService",
    "PushNotificationService",
]
