from __future__ import annotations

from pathlib import Path

from reconciler.ports.report_storage_port import ReportStoragePort


class FilesystemReportStorage(ReportStoragePort):
    def __init__(self, root_dir: str) -> None:
        self._root = Path(root_dir).resolve()

    def download_report(self, storage_path: str) -> bytes:
        target = (self._root / storage_path.lstrip("/")).resolve()
        if target != self._root and self._root not in target.parents:
            raise RuntimeError(f"Report path escapes storage root: {storage_path}")
        if not target.is_file():
            raise RuntimeError(f"Report not found: {storage_path}")
        try:
            return target.read_bytes()
        except OSError as exc:
            raise RuntimeError(f"Failed to read report: {storage_path}") from exc
