from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from parkval.exceptions import MissingColumnsError, SheetNotFoundError
from parkval.ingestion import read_sheet_csv, records_from_payload, records_from_rows
from parkval.ingestion.normalize import cell_text

_STAMP = datetime(2026, 1, 1, 9, 30, tzinfo=UTC)


def test_rows_map_columns_and_stamp_each_record() -> None:
    rows = [
        ["Timestamp", "LicensePlate", "Status", "UserID"],
        ["t", " 12가3456 ", " 유효 ", "u-1"],
        ["t", "34나5678", "직원차량", ""],
    ]

    records = records_from_rows(rows, stamped_at=_STAMP)

    assert [r.license_plate for r in records] == ["12가3456", "34나5678"]
    assert records[0].status == "유효"
    assert records[0].user_id == "u-1"
    assert records[1].user_id is None
    assert [r.row_index for r in records] == [2, 3]
    assert {r.last_updated for r in records} == {"2026-01-01T09:30:00.000Z"}


def test_rows_without_plate_are_skipped_but_row_numbers_kept() -> None:
    rows = [
        ["LicensePlate", "Status"],
        ["", "유효"],
        [None, "무효"],
        ["AB12", ""],
    ]

    records = records_from_rows(rows, stamped_at=_STAMP)

    assert len(records) == 1
    assert records[0].row_index == 4
    assert records[0].status == ""


def test_user_id_column_is_optional() -> None:
    records = records_from_rows([["Status", "LicensePlate"], ["유효", "X"]], stamped_at=_STAMP)

    assert records[0].license_plate == "X"
    assert records[0].user_id is None


def test_short_rows_read_as_blank_cells() -> None:
    records = records_from_rows([["LicensePlate", "Status"], ["X"]], stamped_at=_STAMP)

    assert records[0].status == ""


def test_missing_required_columns_raise() -> None:
    with pytest.raises(MissingColumnsError) as excinfo:
        records_from_rows([["Plate", "Status"], ["X", "유효"]])

    assert excinfo.value.missing == ("LicensePlate",)


def test_header_only_sheet_yields_nothing() -> None:
    assert records_from_rows([["LicensePlate", "Status"]]) == []
    assert records_from_rows([]) == []


def test_numeric_cells_render_as_text() -> None:
    assert cell_text(1234.0) == "1234"
    assert cell_text(float("nan")) == ""
    assert cell_text(None) == ""
    assert cell_text("  x ") == "x"


def test_read_sheet_csv(tmp_path: Path) -> None:
    path = tmp_path / "ValidationsTab.csv"
    path.write_text("LicensePlate,Status\n12가3456,유효\n", encoding="utf-8-sig")

    rows = read_sheet_csv(path)

    assert rows == [["LicensePlate", "Status"], ["12가3456", "유효"]]


def test_read_sheet_csv_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SheetNotFoundError):
        read_sheet_csv(tmp_path / "nope.csv")


def test_payload_list_with_holes() -> None:
    payload = [
        {"licensePlate": "A", "status": "유효", "rowIndex": 2, "lastUpdated": "2024-01-01T00:00:00Z"},
        None,
        {"licensePlate": "B", "status": None, "userId": "u-9"},
    ]

    records = records_from_payload(payload)

    assert [r.license_plate for r in records] == ["A", "B"]
    assert records[0].row_index == 2
    assert records[1].status == ""
    assert records[1].user_id == "u-9"


def test_payload_object_keyed_by_index() -> None:
    payload = {"0": {"licensePlate": "A", "status": "유효"}, "3": {"licensePlate": "B", "status": "무효"}}

    records = records_from_payload(payload)

    assert [r.license_plate for r in records] == ["A", "B"]


def test_payload_null_and_junk() -> None:
    assert records_from_payload(None) == []
    assert records_from_payload("oops") == []
    assert records_from_payload([1, "x", {"licensePlate": 1234, "status": "유효"}])[0].license_plate == "1234"


def test_malformed_entry_is_skipped() -> None:
    records = records_from_payload([{"licensePlate": "A", "rowIndex": "second"}, {"licensePlate": "B"}])

    assert [r.license_plate for r in records] == ["B"]
