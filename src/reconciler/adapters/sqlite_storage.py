from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from uuid import uuid4

from reconciler.domain.models import (
    Caller,
    ReportKind,
    ReviewEntry,
    UnmatchedReason,
    WorkItem,
    WorkItemStatus,
)
from reconciler.ports.auth_port import AuthPort
from reconciler.ports.review_queue_port import ReviewQueuePort
from reconciler.ports.user_notification_port import UserNotificationPort
from reconciler.ports.work_item_store_port import WorkItemStorePort

UPDATABLE_WORK_ITEM_FIELDS = frozenset(
    {
        "similarity_report_path",
        "similarity_percentage",
        "ai_report_path",
        "ai_percentage",
        "status",
        "resolved_at",
    }
)

_WORK_ITEM_COLUMNS = """
    item_id, declared_file_name, original_is_pdf, owner_id,
    similarity_report_path, ai_report_path, similarity_percentage,
    ai_percentage, status, resolved_at
"""


class SQLiteStorage(AuthPort, WorkItemStorePort, ReviewQueuePort, UserNotificationPort):
    def __init__(self, sqlite_path: str) -> None:
        self._sqlite_path = sqlite_path
        self._ensure_schema()

    def resolve_caller(self, token: str) -> Caller | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    """
                    SELECT api_tokens.user_id, user_roles.role
                    FROM api_tokens
                    LEFT JOIN user_roles ON user_roles.user_id = api_tokens.user_id
                    WHERE api_tokens.token = ?
                    """,
                    (token,),
                ).fetchone()
            if row is None:
                return None
            return Caller(user_id=row[0], role=row[1] or "")
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to resolve caller") from exc

    def grant_role(self, user_id: str, role: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO user_roles(user_id, role)
                    VALUES (?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET role = excluded.role
                    """,
                    (user_id, role),
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to grant role") from exc

    def issue_token(self, user_id: str, token: str | None = None) -> str:
        value = token or uuid4().hex
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO api_tokens(token, user_id, created_at) VALUES (?, ?, ?)",
                    (value, user_id, _utc_now_iso()),
                )
            return value
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to issue token") from exc

    def create_work_item(
        self,
        declared_file_name: str,
        original_is_pdf: bool,
        owner_id: str | None = None,
        item_id: str | None = None,
    ) -> WorkItem:
        item = WorkItem(
            item_id=item_id or str(uuid4()),
            declared_file_name=declared_file_name,
            original_is_pdf=original_is_pdf,
            owner_id=owner_id,
        )
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO work_items(
                        item_id, declared_file_name, original_is_pdf, owner_id,
                        status, created_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item.item_id,
                        item.declared_file_name,
                        int(item.original_is_pdf),
                        item.owner_id,
                        item.status.value,
                        _utc_now_iso(),
                    ),
                )
            return item
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to create work item") from exc

    def get_work_item(self, item_id: str) -> WorkItem | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT {_WORK_ITEM_COLUMNS} FROM work_items WHERE item_id = ?",
                    (item_id,),
                ).fetchone()
            return _row_to_work_item(row) if row is not None else None
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to fetch work item") from exc

    def list_open_work_items(self) -> list[WorkItem]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    f"""
                    SELECT {_WORK_ITEM_COLUMNS}
                    FROM work_items
                    WHERE status = ?
                    ORDER BY rowid ASC
                    """,
                    (WorkItemStatus.OPEN.value,),
                ).fetchall()
            return [_row_to_work_item(row) for row in rows]
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to fetch open work items") from exc

    def update_work_item(self, item_id: str, fields: dict) -> None:
        unknown = set(fields) - UPDATABLE_WORK_ITEM_FIELDS
        if unknown:
            raise RuntimeError(f"Unsupported work item fields: {sorted(unknown)}")
        if not fields:
            return
        columns = sorted(fields)
        assignments = ", ".join(f"{column} = ?" for column in columns)
        values = [_to_column_value(fields[column]) for column in columns]
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    f"UPDATE work_items SET {assignments} WHERE item_id = ?",
                    (*values, item_id),
                )
            if cursor.rowcount == 0:
                raise RuntimeError(f"Work item not found: {item_id}")
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to update work item") from exc

    def insert_review_entry(self, entry: ReviewEntry) -> None:
        created_at = entry.created_at or datetime.now(timezone.utc)
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO review_entries(
                        entry_id, file_name, best_guess_identifier, storage_path,
                        kind, reason, resolved, matched_work_item_id, uploaded_by,
                        created_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        str(uuid4()),
                        entry.file_name,
                        entry.best_guess_identifier,
                        entry.storage_path,
                        entry.kind.value,
                        entry.reason.value,
                        int(entry.resolved),
                        entry.matched_work_item_id,
                        entry.uploaded_by,
                        created_at.isoformat(),
                    ),
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to insert review entry") from exc

    def list_review_entries(self, include_resolved: bool = False) -> list[ReviewEntry]:
        query = """
            SELECT file_name, best_guess_identifier, storage_path, kind, reason,
                   resolved, matched_work_item_id, uploaded_by, created_at
            FROM review_entries
        """
        if not include_resolved:
            query += " WHERE resolved = 0"
        query += " ORDER BY created_at ASC, rowid ASC"
        try:
            with self._connect() as conn:
                rows = conn.execute(query).fetchall()
            return [
                ReviewEntry(
                    file_name=row[0],
                    best_guess_identifier=row[1],
                    storage_path=row[2],
                    kind=ReportKind(row[3]),
                    reason=UnmatchedReason(row[4]),
                    resolved=bool(row[5]),
                    matched_work_item_id=row[6],
                    uploaded_by=row[7],
                    created_at=datetime.fromisoformat(row[8]),
                )
                for row in rows
            ]
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to fetch review entries") from exc

    def insert_user_notification(self, user_id: str, title: str, message: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO user_notifications(
                        notification_id, user_id, title, message, is_read, created_at
                    )
                    VALUES (?, ?, ?, ?, 0, ?)
                    """,
                    (str(uuid4()), user_id, title, message, _utc_now_iso()),
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to insert user notification") from exc

    def list_user_notifications(self, user_id: str) -> list[tuple[str, str]]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    """
                    SELECT title, message
                    FROM user_notifications
                    WHERE user_id = ?
                    ORDER BY rowid ASC
                    """,
                    (user_id,),
                ).fetchall()
            return [(row[0], row[1]) for row in rows]
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to fetch user notifications") from exc

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS work_items(
                        item_id TEXT PRIMARY KEY,
                        declared_file_name TEXT NOT NULL,
                        original_is_pdf INTEGER NOT NULL,
                        owner_id TEXT,
                        similarity_report_path TEXT,
                        ai_report_path TEXT,
                        similarity_percentage INTEGER,
                        ai_percentage INTEGER,
                        status TEXT NOT NULL,
                        resolved_at TEXT,
                        created_at TEXT
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS review_entries(
                        entry_id TEXT PRIMARY KEY,
                        file_name TEXT,
                        best_guess_identifier TEXT,
                        storage_path TEXT,
                        kind TEXT,
                        reason TEXT,
                        resolved INTEGER,
                        matched_work_item_id TEXT,
                        uploaded_by TEXT,
                        created_at TEXT
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS user_roles(
                        user_id TEXT PRIMARY KEY,
                        role TEXT
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS api_tokens(
                        token TEXT PRIMARY KEY,
                        user_id TEXT,
                        created_at TEXT
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS user_notifications(
                        notification_id TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        title TEXT,
                        message TEXT,
                        is_read INTEGER NOT NULL DEFAULT 0,
                        created_at TEXT
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_work_items_status
                    ON work_items(status)
                    """
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to initialize storage schema") from exc

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._sqlite_path)


def _row_to_work_item(row: tuple) -> WorkItem:
    return WorkItem(
        item_id=row[0],
        declared_file_name=row[1],
        original_is_pdf=bool(row[2]),
        owner_id=row[3],
        similarity_report_path=row[4],
        ai_report_path=row[5],
        similarity_percentage=row[6],
        ai_percentage=row[7],
        status=WorkItemStatus(row[8]),
        resolved_at=row[9],
    )


def _to_column_value(value: object) -> object:
    if isinstance(value, WorkItemStatus):
        return value.value
    return value


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
