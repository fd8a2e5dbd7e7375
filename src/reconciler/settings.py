from __future__ import annotations

import os

SQLITE_PATH = os.getenv("SQLITE_PATH", "./reconciler.db")
REPORTS_DIR = os.getenv("REPORTS_DIR", "./reports")
STORAGE_BASE_URL = os.getenv("STORAGE_BASE_URL", "")
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "reports")
STORAGE_SERVICE_KEY = os.getenv("STORAGE_SERVICE_KEY", "")
NOTIFY_BASE_URL = os.getenv("NOTIFY_BASE_URL", "")
NOTIFY_SERVICE_KEY = os.getenv("NOTIFY_SERVICE_KEY", "")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "20"))
EXTRACTION_TIMEOUT_SECONDS = float(os.getenv("EXTRACTION_TIMEOUT_SECONDS", "30"))
SCANNER_VENDOR_NAME = os.getenv("SCANNER_VENDOR_NAME", "turnitin")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
