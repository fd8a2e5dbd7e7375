from unittest.mock import Mock

import pytest
import requests

from reconciler.adapters import http_notification_adapter, http_report_storage
from reconciler.adapters.http_notification_adapter import HttpNotificationAdapter
from reconciler.adapters.http_report_storage import HttpReportStorage


def _response(status_code: int, content: bytes = b"") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.content = content
    return response


def test_download_report_builds_object_url(monkeypatch) -> None:
    get = Mock(return_value=_response(200, b"%PDF-1.4"))
    monkeypatch.setattr(http_report_storage.requests, "get", get)
    storage = HttpReportStorage("https://store.example/", "reports", "secret", timeout=5)

    assert storage.download_report("batch/Essay 1.pdf") == b"%PDF-1.4"
    get.assert_called_once_with(
        "https://store.example/storage/v1/object/reports/batch/Essay%201.pdf",
        headers={"Authorization": "Bearer secret"},
        timeout=5,
    )


@pytest.mark.parametrize(
    ("status_code", "message"),
    [(403, "Auth failed"), (404, "Report not found"), (500, "Storage API error 500")],
)
def test_download_report_maps_http_errors(monkeypatch, status_code, message) -> None:
    monkeypatch.setattr(
        http_report_storage.requests, "get", Mock(return_value=_response(status_code))
    )
    storage = HttpReportStorage("https://store.example", "reports", "secret")

    with pytest.raises(RuntimeError, match=message):
        storage.download_report("batch/a.pdf")


def test_download_report_wraps_connection_errors(monkeypatch) -> None:
    monkeypatch.setattr(
        http_report_storage.requests,
        "get",
        Mock(side_effect=requests.ConnectionError("refused")),
    )
    storage = HttpReportStorage("https://store.example", "reports", "secret")

    with pytest.raises(RuntimeError, match="Storage request failed"):
        storage.download_report("batch/a.pdf")


def test_notifications_post_to_function_endpoints(monkeypatch) -> None:
    post = Mock(return_value=_response(200))
    monkeypatch.setattr(http_notification_adapter.requests, "post", post)
    notifier = HttpNotificationAdapter("https://api.example", "secret", timeout=3)
    payload = {"userId": "u", "title": "Document Ready", "body": "b", "documentId": "d"}

    notifier.send_push(payload)
    notifier.send_email(payload)

    push_call, email_call = post.call_args_list
    assert push_call.args[0] == "https://api.example/functions/v1/send-push-notification"
    assert push_call.kwargs["json"] == {**payload, "eventType": "document_completed"}
    assert email_call.args[0] == "https://api.example/functions/v1/send-completion-email"
    assert email_call.kwargs["json"] == payload
    assert email_call.kwargs["timeout"] == 3


def test_notification_error_status_raises(monkeypatch) -> None:
    monkeypatch.setattr(
        http_notification_adapter.requests, "post", Mock(return_value=_response(502))
    )
    notifier = HttpNotificationAdapter("https://api.example", "secret")

    with pytest.raises(RuntimeError, match="Notification API error 502"):
        notifier.send_email({"userId": "u"})
