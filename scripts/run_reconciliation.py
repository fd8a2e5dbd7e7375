from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)


def _parse_report_arg(value: str) -> dict[str, str]:
    name, sep, path = value.partition("=")
    if not sep:
        path = value
        name = Path(value).name
    if not name or not path:
        raise argparse.ArgumentTypeError(f"Expected NAME=PATH, got: {value}")
    return {"fileName": name, "storagePath": path}


def main() -> None:
    from reconciler.container import build_services
    from reconciler.settings import LOG_LEVEL, REPORTS_DIR, SQLITE_PATH

    parser = argparse.ArgumentParser(description="Reconcile uploaded scanner reports.")
    parser.add_argument("--token", required=True, help="Caller API token.")
    parser.add_argument(
        "--report",
        action="append",
        type=_parse_report_arg,
        required=True,
        help="Report as NAME=STORAGE_PATH (repeatable).",
    )
    parser.add_argument("--sqlite", default=SQLITE_PATH, help="SQLite DB path.")
    parser.add_argument("--reports-dir", default=REPORTS_DIR, help="Local report root.")
    args = parser.parse_args()

    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    services = build_services(args.sqlite, reports_dir=args.reports_dir)
    status, body = services["reconciliation_facade"].handle(
        f"Bearer {args.token}", {"reports": args.report}
    )
    print(json.dumps(body, indent=2, sort_keys=True))
    if status != 200:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
