from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PdfTextPort(Protocol):
    def extract_page_text(self, pdf_bytes: bytes, page_number: int) -> str:
        """Return the text of one 1-based page, or an empty string."""
