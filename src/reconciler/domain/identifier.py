from __future__ import annotations

import re
from collections.abc import Callable

from .name_normalize import normalize

DEFAULT_VENDOR_NAME = "turnitin"
BASE_STOP_WORDS = (
    "page",
    "similarity",
    "ai",
    "detection",
    "report",
    "overall",
    "detected",
)
MIN_IDENTIFIER_LENGTH = 3
MAX_IDENTIFIER_LENGTH = 100

_LABELED_FIELD = re.compile(r"(document|file|name|title)\s*:\s*(.+)", re.IGNORECASE)
_FILENAME_TOKEN = re.compile(r"[A-Za-z0-9_\- ]+(?:\s*\(\d+\))?(?:\.[A-Za-z0-9]+)?")
_LEADING_PERCENTAGE = re.compile(r"^\*?\d{0,3}\s*%")


def stop_words_for(vendor_name: str | None = DEFAULT_VENDOR_NAME) -> tuple[str, ...]:
    vendor = (vendor_name or "").strip().lower()
    if not vendor:
        return BASE_STOP_WORDS
    return BASE_STOP_WORDS + (vendor,)


def _starts_with_stop_word(candidate: str, stop_words: tuple[str, ...]) -> bool:
    lowered = candidate.strip().lower()
    for word in stop_words:
        if lowered == word:
            return True
        if lowered.startswith(word) and not lowered[len(word)].isalnum():
            return True
    return False


def _within_length(candidate: str) -> bool:
    return MIN_IDENTIFIER_LENGTH <= len(candidate) <= MAX_IDENTIFIER_LENGTH


def labeled_field(text: str, stop_words: tuple[str, ...]) -> str | None:
    for line in text.splitlines():
        match = _LABELED_FIELD.search(line)
        if match is None:
            continue
        value = match.group(2).strip()
        if value:
            return value
    return None


def filename_token(text: str, stop_words: tuple[str, ...]) -> str | None:
    for match in _FILENAME_TOKEN.finditer(text):
        candidate = match.group(0).strip()
        if not _within_length(candidate):
            continue
        if _starts_with_stop_word(candidate, stop_words):
            continue
        return candidate
    return None


def first_substantial_line(text: str, stop_words: tuple[str, ...]) -> str | None:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    for line in lines:
        if _LEADING_PERCENTAGE.match(line):
            continue
        if _starts_with_stop_word(line, stop_words):
            continue
        return line if _within_length(line) else None
    return None


# Most precise first; the line scan is a last resort.
IDENTIFIER_RULES: tuple[tuple[str, Callable[[str, tuple[str, ...]], str | None]], ...] = (
    ("labeled_field", labeled_field),
    ("filename_token", filename_token),
    ("first_substantial_line", first_substantial_line),
)


def extract_identifier(
    page1_text: str, vendor_name: str | None = DEFAULT_VENDOR_NAME
) -> str | None:
    """
    Return the normalized work-item identifier found on a report's first page.

    Rules are tried in order and the first one producing a non-empty
    normalized candidate wins. Returns None when no rule applies.
    """
    if not page1_text or not page1_text.strip():
        return None
    stop_words = stop_words_for(vendor_name)
    for _, rule in IDENTIFIER_RULES:
        candidate = rule(page1_text, stop_words)
        if candidate is None:
            continue
        normalized = normalize(candidate)
        if normalized:
            return normalized
    return None
