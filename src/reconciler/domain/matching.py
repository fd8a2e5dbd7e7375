from __future__ import annotations

from typing import Iterable

from .expected_names import expected_names
from .models import ReportKind, WorkItem
from .name_normalize import names_match


def match_work_item(
    identifier: str | None, kind: ReportKind, work_items: Iterable[WorkItem]
) -> str | None:
    """
    Return the id of the first work item the identifier belongs to.

    Items are scanned in iteration order. An item matches when the identifier
    matches its expected name for the report kind, or its declared file name.
    There is no ranking between several matching items.
    """
    if not identifier or kind == ReportKind.UNKNOWN:
        return None
    for item in work_items:
        expected = expected_names(item.declared_file_name, item.original_is_pdf).for_kind(kind)
        if expected is not None and names_match(identifier, expected):
            return item.item_id
        if names_match(identifier, item.declared_file_name):
            return item.item_id
    return None
