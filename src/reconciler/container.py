from __future__ import annotations

from typing import Any

from reconciler.adapters.filesystem_report_storage import FilesystemReportStorage
from reconciler.adapters.http_notification_adapter import HttpNotificationAdapter
from reconciler.adapters.http_report_storage import HttpReportStorage
from reconciler.adapters.notifications_logging import LoggingNotificationAdapter
from reconciler.adapters.pdfminer_text_adapter import PdfMinerTextAdapter
from reconciler.adapters.sqlite_storage import SQLiteStorage
from reconciler.settings import (
    EXTRACTION_TIMEOUT_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    NOTIFY_BASE_URL,
    NOTIFY_SERVICE_KEY,
    REPORTS_DIR,
    SCANNER_VENDOR_NAME,
    STORAGE_BASE_URL,
    STORAGE_BUCKET,
    STORAGE_SERVICE_KEY,
)
from reconciler.services.reconciliation_facade import ReconciliationFacade
from reconciler.services.reconciliation_service import ReconciliationService


def build_services(sqlite_path: str, reports_dir: str | None = None) -> dict[str, Any]:
    storage = SQLiteStorage(sqlite_path)
    report_storage = FilesystemReportStorage(reports_dir or REPORTS_DIR)
    if STORAGE_BASE_URL:
        report_storage = HttpReportStorage(
            base_url=STORAGE_BASE_URL,
            bucket=STORAGE_BUCKET,
            service_key=STORAGE_SERVICE_KEY,
            timeout=HTTP_TIMEOUT_SECONDS,
        )
    notifier = LoggingNotificationAdapter()
    if NOTIFY_BASE_URL:
        notifier = HttpNotificationAdapter(
            base_url=NOTIFY_BASE_URL,
            service_key=NOTIFY_SERVICE_KEY,
            timeout=HTTP_TIMEOUT_SECONDS,
        )
    pdf_text = PdfMinerTextAdapter()
    reconciliation_service = ReconciliationService(
        auth=storage,
        report_storage=report_storage,
        pdf_text=pdf_text,
        work_items=storage,
        review_queue=storage,
        notifier=notifier,
        user_notifications=storage,
        vendor_name=SCANNER_VENDOR_NAME,
        extraction_timeout=EXTRACTION_TIMEOUT_SECONDS,
    )
    return {
        "reconciliation_service": reconciliation_service,
        "reconciliation_facade": ReconciliationFacade(reconciliation_service),
        "notifier": notifier,
        "pdf_text": pdf_text,
        "report_storage": report_storage,
        "storage": storage,
    }
