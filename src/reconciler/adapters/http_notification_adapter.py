from __future__ import annotations

import requests

from reconciler.ports.notification_port import NotificationPort


class HttpNotificationAdapter(NotificationPort):
    _PUSH_PATH = "/functions/v1/send-push-notification"
    _EMAIL_PATH = "/functions/v1/send-completion-email"

    def __init__(self, base_url: str, service_key: str, timeout: float = 20) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._timeout = timeout

    def send_push(self, payload: dict) -> None:
        self._post(self._PUSH_PATH, {**payload, "eventType": "document_completed"})

    def send_email(self, payload: dict) -> None:
        self._post(self._EMAIL_PATH, payload)

    def _post(self, path: str, payload: dict) -> None:
        try:
            response = requests.post(
                f"{self._base_url}{path}",
                headers={
                    "Authorization": f"Bearer {self._service_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise RuntimeError(f"Notification request to {path} failed") from exc
        if response.status_code >= 400:
            raise RuntimeError(
                f"Notification API error {response.status_code} for {path}."
            )
