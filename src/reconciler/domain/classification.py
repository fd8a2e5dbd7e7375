from __future__ import annotations

import re
from dataclasses import dataclass

from .models import ReportKind

AI_PHRASE = "detected as ai"
SIMILARITY_PHRASE = "overall similarity"

_AI_SCORE = re.compile(r"(?<!\d)(\d{1,3})%\s*detected\s*as\s*ai")
_SIMILARITY_SCORE = re.compile(r"(?<!\d)(\d{1,3})%\s*overall\s*similarity")
# The AI scanner prints "*%" when a submission is too short to score.
_AI_PLACEHOLDER = re.compile(r"\*\s*%\s*detected\s*as\s*ai")


@dataclass(frozen=True)
class ReportClassification:
    kind: ReportKind
    score: int | None


UNKNOWN = ReportClassification(kind=ReportKind.UNKNOWN, score=None)


def parse_percentage(pattern: re.Pattern[str], text: str) -> int | None:
    """Return the first captured percentage, or None when absent or outside 0..100."""

    match = pattern.search(text)
    if match is None:
        return None
    value = int(match.group(1))
    if value < 0 or value > 100:
        return None
    return value


def classify_report(page2_text: str) -> ReportClassification:
    """
    Decide the report kind from second-page text and read its score.

    The AI phrase is checked before the similarity phrase; the first hit
    decides the kind.

    Examples:
        >>> classify_report("12% overall similarity")
        ReportClassification(kind=<ReportKind.SIMILARITY: 'similarity'>, score=12)
        >>> classify_report("")
        ReportClassification(kind=<ReportKind.UNKNOWN: 'unknown'>, score=None)
    """
    if not page2_text or not page2_text.strip():
        return UNKNOWN
    text = " ".join(page2_text.lower().split())
    if AI_PHRASE in text:
        if _AI_PLACEHOLDER.search(text):
            return ReportClassification(kind=ReportKind.AI, score=None)
        return ReportClassification(kind=ReportKind.AI, score=parse_percentage(_AI_SCORE, text))
    if SIMILARITY_PHRASE in text:
        return ReportClassification(
            kind=ReportKind.SIMILARITY,
            score=parse_percentage(_SIMILARITY_SCORE, text),
        )
    return UNKNOWN
