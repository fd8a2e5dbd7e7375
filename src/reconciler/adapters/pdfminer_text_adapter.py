from __future__ import annotations

import io
import logging

from pdfminer.high_level import extract_text

from reconciler.ports.pdf_text_port import PdfTextPort

logger = logging.getLogger(__name__)


class PdfMinerTextAdapter(PdfTextPort):
    def extract_page_text(self, pdf_bytes: bytes, page_number: int) -> str:
        if page_number < 1 or not pdf_bytes:
            return ""
        if not self._is_pdf_bytes(pdf_bytes):
            logger.warning("Buffer is not a PDF; no text for page %d", page_number)
            return ""
        try:
            # pdfminer only lays out the pages listed; maxpages stops the page walk early.
            text = extract_text(
                io.BytesIO(pdf_bytes),
                page_numbers=[page_number - 1],
                maxpages=page_number,
            )
        except Exception as exc:
            logger.warning("Failed to extract text from page %d: %s", page_number, exc)
            return ""
        return (text or "").replace("\x0c", "").strip()

    @staticmethod
    def _is_pdf_bytes(pdf_bytes: bytes) -> bool:
        return pdf_bytes.lstrip().startswith(b"%PDF")
