from __future__ import annotations

from typing import Protocol


class UserNotificationPort(Protocol):
    def insert_user_notification(self, user_id: str, title: str, message: str) -> None:
        """Record an in-app notification shown to the user on next visit."""
