from datetime import datetime, timezone

import pytest

from reconciler.adapters.sqlite_storage import SQLiteStorage
from reconciler.domain.models import (
    Caller,
    ReportKind,
    ReviewEntry,
    UnmatchedReason,
    WorkItemStatus,
)


def test_list_open_work_items_keeps_insertion_order(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "test.db"))
    storage.create_work_item("Zeta.docx", False, item_id="z")
    storage.create_work_item("Alpha.pdf", True, owner_id="user-1", item_id="a")
    storage.create_work_item("Done.docx", False, item_id="d")
    storage.update_work_item("d", {"status": WorkItemStatus.RESOLVED})

    items = storage.list_open_work_items()

    assert [item.item_id for item in items] == ["z", "a"]
    assert items[1].original_is_pdf is True
    assert items[1].owner_id == "user-1"
    assert items[0].status == WorkItemStatus.OPEN


def test_update_work_item_writes_slot_fields(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "test.db"))
    storage.create_work_item("Essay1.docx", False, item_id="doc-1")

    storage.update_work_item(
        "doc-1",
        {
            "ai_report_path": "batch/ai.pdf",
            "ai_percentage": 7,
            "status": "resolved",
            "resolved_at": "2026-01-02T03:04:05+00:00",
        },
    )

    item = storage.get_work_item("doc-1")
    assert item is not None
    assert item.ai_report_path == "batch/ai.pdf"
    assert item.ai_percentage == 7
    assert item.similarity_report_path is None
    assert item.status == WorkItemStatus.RESOLVED
    assert item.resolved_at == "2026-01-02T03:04:05+00:00"


def test_update_work_item_rejects_unknown_fields(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "test.db"))
    storage.create_work_item("Essay1.docx", False, item_id="doc-1")

    with pytest.raises(RuntimeError, match="Unsupported work item fields"):
        storage.update_work_item("doc-1", {"declared_file_name": "Other.docx"})


def test_update_missing_work_item_raises(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "test.db"))

    with pytest.raises(RuntimeError, match="Work item not found"):
        storage.update_work_item("missing", {"ai_percentage": 3})


def test_review_entries_round_trip(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "test.db"))
    created_at = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    entry = ReviewEntry(
        file_name="x.pdf",
        best_guess_identifier="essay1",
        storage_path="batch/x.pdf",
        kind=ReportKind.AI,
        reason=UnmatchedReason.UPDATE_FAILED,
        matched_work_item_id="doc-1",
        uploaded_by="staff-1",
        created_at=created_at,
    )
    resolved = ReviewEntry(
        file_name="y.pdf",
        best_guess_identifier=None,
        storage_path="batch/y.pdf",
        kind=ReportKind.UNKNOWN,
        reason=UnmatchedReason.DOWNLOAD_FAILED,
        resolved=True,
        created_at=created_at,
    )

    storage.insert_review_entry(entry)
    storage.insert_review_entry(resolved)

    assert storage.list_review_entries() == [entry]
    assert len(storage.list_review_entries(include_resolved=True)) == 2


def test_resolve_caller(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "test.db"))
    token = storage.issue_token("staff-1")
    storage.grant_role("staff-1", "customer")
    storage.grant_role("staff-1", "admin")
    bare = storage.issue_token("nobody", token="fixed-token")

    assert bare == "fixed-token"
    assert storage.resolve_caller(token) == Caller(user_id="staff-1", role="admin")
    assert storage.resolve_caller(bare) == Caller(user_id="nobody", role="")
    assert storage.resolve_caller("unknown") is None


def test_user_notifications_are_stored_per_user(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "test.db"))
    storage.insert_user_notification("user-9", "Document Ready", "first")
    storage.insert_user_notification("user-7", "Document Ready", "other")
    storage.insert_user_notification("user-9", "Document Ready", "second")

    assert storage.list_user_notifications("user-9") == [
        ("Document Ready", "first"),
        ("Document Ready", "second"),
    ]
    assert storage.list_user_notifications("nobody") == []
