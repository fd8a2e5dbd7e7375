from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)


def main() -> None:
    db_path = os.getenv("SQLITE_PATH", "reconciler.db")
    conn = sqlite3.connect(db_path)
    try:
        print("DB:", db_path)
        print("\nOpen work items:")
        for row in conn.execute(
            """
            SELECT item_id, declared_file_name, original_is_pdf,
                   similarity_report_path, ai_report_path
            FROM work_items
            WHERE status = 'open'
            ORDER BY rowid
            LIMIT 20
            """
        ):
            print(row)

        print("\nUnresolved review entries:")
        for row in conn.execute(
            """
            SELECT file_name, reason, best_guess_identifier, storage_path
            FROM review_entries
            WHERE resolved = 0
            ORDER BY created_at
            LIMIT 20
            """
        ):
            print(row)

        row = conn.execute(
            "SELECT COUNT(*) FROM work_items WHERE status = 'resolved'"
        ).fetchone()
        print("\nResolved work items:", row[0] if row else 0)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
