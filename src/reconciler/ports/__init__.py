from .auth_port import AuthPort
from .notification_port import NotificationPort
from .pdf_text_port import PdfTextPort
from .report_storage_port import ReportStoragePort
from .review_queue_port import ReviewQueuePort
from .user_notification_port import UserNotificationPort
from .work_item_store_port import WorkItemStorePort

__all__ = [
    "AuthPort",
    "NotificationPort",
    "PdfTextPort",
    "ReportStoragePort",
    "ReviewQueuePort",
    "UserNotificationPort",
    "WorkItemStorePort",
]
