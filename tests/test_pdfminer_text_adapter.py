from conftest import make_pdf

from reconciler.adapters.pdfminer_text_adapter import PdfMinerTextAdapter


def test_extract_page_text_reads_requested_page() -> None:
    pdf_bytes = make_pdf(
        [
            ["Turnitin Page 1 of 2", "Essay1 (1)"],
            ["Integrity Overview", "12% Overall Similarity"],
        ]
    )
    adapter = PdfMinerTextAdapter()

    first = adapter.extract_page_text(pdf_bytes, 1)
    second = adapter.extract_page_text(pdf_bytes, 2)

    assert "Essay1 (1)" in first
    assert "Similarity" not in first
    assert "12% Overall Similarity" in second


def test_extract_page_text_beyond_last_page_is_empty() -> None:
    pdf_bytes = make_pdf([["Only page"]])

    assert PdfMinerTextAdapter().extract_page_text(pdf_bytes, 2) == ""


def test_extract_page_text_handles_bad_input() -> None:
    adapter = PdfMinerTextAdapter()

    assert adapter.extract_page_text(b"not a pdf at all", 1) == ""
    assert adapter.extract_page_text(b"", 1) == ""
    assert adapter.extract_page_text(make_pdf([["Text"]]), 0) == ""
    assert adapter.extract_page_text(b"%PDF-1.4\ngarbage", 1) == ""
