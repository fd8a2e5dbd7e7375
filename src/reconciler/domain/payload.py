from __future__ import annotations

from .errors import InvalidPayloadError
from .models import ReportFile


def parse_report_files(raw: object) -> list[ReportFile]:
    """
    Validate a reports payload and return ReportFile values in input order.

    Accepts ReportFile instances or mappings carrying ``fileName`` and either
    ``storagePath`` or ``filePath``.
    """
    if not isinstance(raw, (list, tuple)) or not raw:
        raise InvalidPayloadError("No reports provided")
    reports: list[ReportFile] = []
    for index, item in enumerate(raw):
        if isinstance(item, ReportFile):
            reports.append(item)
            continue
        if not isinstance(item, dict):
            raise InvalidPayloadError(f"Report #{index} is not an object")
        file_name = item.get("fileName")
        storage_path = item.get("storagePath", item.get("filePath"))
        if not isinstance(file_name, str) or not file_name.strip():
            raise InvalidPayloadError(f"Report #{index} is missing fileName")
        if not isinstance(storage_path, str) or not storage_path.strip():
            raise InvalidPayloadError(f"Report #{index} is missing storagePath")
        reports.append(ReportFile(file_name=file_name, storage_path=storage_path))
    return reports
