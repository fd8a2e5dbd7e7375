from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReportStoragePort(Protocol):
    def download_report(self, storage_path: str) -> bytes:
        """Return the raw bytes of a stored report; raise RuntimeError on failure."""
