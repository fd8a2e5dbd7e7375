from __future__ import annotations

import argparse
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from reconciler.adapters.sqlite_storage import SQLiteStorage
from reconciler.settings import SQLITE_PATH


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed work items and staff access.")
    parser.add_argument("--sqlite", default=SQLITE_PATH, help="SQLite DB path.")
    commands = parser.add_subparsers(dest="command", required=True)

    item = commands.add_parser("item", help="Create an open work item.")
    item.add_argument("declared_file_name")
    item.add_argument("--pdf", action="store_true", help="Original upload was a PDF.")
    item.add_argument("--owner", default=None, help="User id to notify on completion.")

    staff = commands.add_parser("staff", help="Grant a role and issue a token.")
    staff.add_argument("user_id")
    staff.add_argument("--role", default="staff", choices=["staff", "admin", "customer"])

    args = parser.parse_args()
    storage = SQLiteStorage(args.sqlite)
    if args.command == "item":
        created = storage.create_work_item(
            args.declared_file_name, original_is_pdf=args.pdf, owner_id=args.owner
        )
        print("work item:", created.item_id)
        return
    storage.grant_role(args.user_id, args.role)
    print("token:", storage.issue_token(args.user_id))


if __name__ == "__main__":
    main()
