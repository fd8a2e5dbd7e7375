from __future__ import annotations

import logging

from reconciler.ports.notification_port import NotificationPort
from reconciler.ports.user_notification_port import UserNotificationPort

logger = logging.getLogger(__name__)


class LoggingNotificationAdapter(NotificationPort, UserNotificationPort):
    def send_push(self, payload: dict) -> None:
        logger.info("Push notification (not delivered): %s", payload)

    def send_email(self, payload: dict) -> None:
        logger.info("Completion email (not delivered): %s", payload)

    def insert_user_notification(self, user_id: str, title: str, message: str) -> None:
        logger.info("In-app notification for %s (not stored): %s: %s", user_id, title, message)
