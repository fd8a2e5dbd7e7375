from __future__ import annotations

import re

EXTENSION_PATTERN = re.compile(r"\.[A-Za-z0-9]+$")


def normalize(name: str) -> str:
    """
    Canonicalize a free-text identifier for comparison.

    Lowercases, drops one trailing dot-extension, collapses whitespace runs
    and trims the ends.

    Examples:
        >>> normalize("  Essay1  (1).PDF ")
        'essay1 (1)'
        >>> normalize("Final   Draft.v2.docx")
        'final draft.v2'
        >>> normalize("notes (3)")
        'notes (3)'
    """
    lowered = name.strip().lower()
    stripped = EXTENSION_PATTERN.sub("", lowered)
    return " ".join(stripped.split())


def names_match(a: str, b: str) -> bool:
    """
    Return True when two identifiers refer to the same name.

    Equal normalized forms match, and so does one normalized form appearing
    inside the other, since scanners append suffixes or truncate names.
    """
    left = normalize(a)
    right = normalize(b)
    if not left or not right:
        return False
    return left == right or left in right or right in left
