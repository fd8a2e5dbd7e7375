from __future__ import annotations

from dataclasses import dataclass

from .models import ReportKind
from .name_normalize import EXTENSION_PATTERN


@dataclass(frozen=True)
class ExpectedNames:
    similarity: str
    ai: str

    def for_kind(self, kind: ReportKind) -> str | None:
        if kind == ReportKind.SIMILARITY:
            return self.similarity
        if kind == ReportKind.AI:
            return self.ai
        return None


def base_name(declared_file_name: str) -> str:
    """
    Drop the extension of a declared file name, keeping any index suffix.

    Examples:
        >>> base_name("Essay1 (2).docx")
        'Essay1 (2)'
        >>> base_name("notes")
        'notes'
    """
    return EXTENSION_PATTERN.sub("", declared_file_name.strip()).strip()


def expected_names(declared_file_name: str, original_is_pdf: bool) -> ExpectedNames:
    """
    Predict the names the scanner gives the two reports of a work item.

    A PDF original is scanned as-is and both outputs get an index suffix; any
    other original is converted first, which shifts the suffixes down by one.
    """
    base = base_name(declared_file_name)
    if original_is_pdf:
        return ExpectedNames(similarity=f"{base} (1)", ai=f"{base} (2)")
    return ExpectedNames(similarity=base, ai=f"{base} (1)")
