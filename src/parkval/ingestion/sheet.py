"""Spreadsheet ingestion.

Turns a header-plus-rows table (as returned by a sheet range read, or a
CSV export of the tab) into :class:`ValidationRecord` objects.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from parkval._constants import COLUMN_LICENSE_PLATE, COLUMN_STATUS, COLUMN_USER_ID, REQUIRED_COLUMNS
from parkval.exceptions import MissingColumnsError, SheetNotFoundError
from parkval.ingestion.normalize import cell_text
from parkval.models.record import ValidationRecord
from parkval.models.snapshot import utc_iso

_logger = logging.getLogger(__name__)


def _column_index(header: Sequence[Any], name: str) -> int | None:
    for index, cell in enumerate(header):
        if cell_text(cell) == name:
            return index
    return None


def _cell(row: Sequence[Any], index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return cell_text(row[index])


def records_from_rows(
    rows: Sequence[Sequence[Any]],
    *,
    stamped_at: datetime | None = None,
) -> list[ValidationRecord]:
    """Parse sheet rows; ``rows[0]`` is the header.

    Every record gets the same read-time ``lastUpdated`` stamp and its
    1-based sheet row number (the header is row 1). Rows without a plate
    are skipped.

    Raises
    ------
    MissingColumnsError
        If ``LicensePlate`` or ``Status`` is absent from the header.
    """
    if len(rows) <= 1:
        _logger.info("No data to sync (only header row exists)")
        return []

    header = rows[0]
    plate_col = _column_index(header, COLUMN_LICENSE_PLATE)
    status_col = _column_index(header, COLUMN_STATUS)
    user_col = _column_index(header, COLUMN_USER_ID)

    missing = [
        name for name, index in zip(REQUIRED_COLUMNS, (plate_col, status_col), strict=True) if index is None
    ]
    if missing:
        raise MissingColumnsError(missing)

    stamp = utc_iso(stamped_at or datetime.now(UTC))
    records: list[ValidationRecord] = []
    for offset, row in enumerate(rows[1:], start=2):
        plate = _cell(row, plate_col)
        if not plate:
            continue
        user_id = _cell(row, user_col) or None
        records.append(
            ValidationRecord(
                license_plate=plate,
                status=_cell(row, status_col),
                user_id=user_id,
                row_index=offset,
                last_updated=stamp,
            )
        )

    _logger.info("Processed %d validation records", len(records))
    return records


def read_sheet_csv(path: str | Path, *, encoding: str = "utf-8-sig") -> list[list[str]]:
    """Read a CSV export of the validations tab into a list of rows.

    Raises
    ------
    SheetNotFoundError
        If *path* does not exist.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise SheetNotFoundError(f'Sheet "{csv_path}" not found!', sheet=str(csv_path))
    with csv_path.open(newline="", encoding=encoding) as handle:
        return list(csv.reader(handle))
