from __future__ import annotations

from typing import Protocol


class NotificationPort(Protocol):
    def send_push(self, payload: dict) -> None:
        """Dispatch a push notification of shape {userId, title, body, documentId}."""

    def send_email(self, payload: dict) -> None:
        """Dispatch a completion email of shape {userId, title, body, documentId}."""
