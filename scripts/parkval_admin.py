#!/usr/bin/env python3
"""Operator tool for the parking-validation store.

Usage
-----
Set environment variables and run::

    export PARKVAL_DATABASE_URL="https://<project>-default-rtdb.firebaseio.com"
    export PARKVAL_DATABASE_SECRET="..."
    python scripts/parkval_admin.py scan

Commands::

    test-connection      Check that the database root is readable
    sync FILE            Replace the store with a CSV export of the sheet tab
    scan                 List plates with duplicate or conflicting records
    cleanup [--yes]      Scan, then keep one record per plate
    preview FILE         Run scan + cleanup on a CSV export without touching the store
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from parkval import (  # noqa: E402
    IssueType,
    ParkvalClient,
    ParkvalConfig,
    ParkvalError,
    ParkvalPermissionDeniedError,
    PlateIssue,
    StatusVocabulary,
    clean,
    find_issues,
    is_valid_status,
)
from parkval._constants import INVALID_MARKER  # noqa: E402
from parkval.ingestion import read_sheet_csv, records_from_rows  # noqa: E402

_ISSUE_LABELS = {
    IssueType.CONFLICT: "상태 충돌",
    IssueType.DUPLICATE: "중복 레코드",
}


def _format_issues(issues: Sequence[PlateIssue], vocabulary: StatusVocabulary) -> str:
    if not issues:
        return "Integrity check passed: no issues found."
    lines = [f"Found issues on {len(issues)} plates."]
    for issue in issues:
        lines.append(f"\n{issue.plate}  [{issue.type} / {_ISSUE_LABELS[issue.type]}]")
        for record in issue.records:
            marker = "+" if is_valid_status(record.status, vocabulary) else "-"
            row = f" row={record.row_index}" if record.row_index is not None else ""
            lines.append(f"  {marker} {record.status or INVALID_MARKER}{row} updated={record.last_updated or '?'}")
    return "\n".join(lines)


def _confirm(count: int) -> bool:
    answer = input(f"Resolve {count} issues and rewrite the store? This cannot be undone. [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


async def _run(args: argparse.Namespace) -> int:
    if args.command == "preview":
        vocabulary = StatusVocabulary.from_env()
        records = records_from_rows(read_sheet_csv(args.file))
        issues = find_issues(records, vocabulary=vocabulary)
        print(_format_issues(issues, vocabulary))
        kept = clean(records, vocabulary=vocabulary)
        print(f"\nCleanup would keep {len(kept)} of {len(records)} records.")
        return 0

    config = ParkvalConfig.from_env()
    async with ParkvalClient(config) as client:
        if args.command == "test-connection":
            ok = await client.test_connection()
            print("Connection successful" if ok else "Connection failed")
            return 0 if ok else 1

        if args.command == "sync":
            metadata = await client.sync_from_csv(args.file)
            if metadata is None:
                print("No data to sync (only header row exists)")
            else:
                print(json.dumps(metadata.to_payload(), ensure_ascii=False))
            return 0

        scan = await client.scan()
        print(_format_issues(scan.issues, client.vocabulary))
        if args.command == "scan" or not scan.cleanup_allowed:
            return 0

        if not args.yes and not _confirm(len(scan.issues)):
            print("Aborted.")
            return 1
        result = await client.cleanup(scan)
        print(f"Cleanup complete: removed {result.removed} records, kept {len(result.kept)}.")
        return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Sync and clean parking-validation records.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("test-connection", help="Check store connectivity")
    sync = sub.add_parser("sync", help="Replace the store with a CSV export of the sheet")
    sync.add_argument("file", help="CSV export of the validations tab")
    sub.add_parser("scan", help="Report duplicate and conflicting plates")
    cleanup = sub.add_parser("cleanup", help="Keep one record per plate")
    cleanup.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    preview = sub.add_parser("preview", help="Scan a CSV export offline")
    preview.add_argument("file", help="CSV export of the validations tab")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        code = asyncio.run(_run(args))
    except ParkvalPermissionDeniedError:
        print("Access denied: sign in with an administrator secret.", file=sys.stderr)
        code = 2
    except ParkvalError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
