"""Ingestion layer.

This package contains adapters that turn spreadsheet rows and store
payloads into :class:`~parkval.models.ValidationRecord` objects.
"""

from parkval.ingestion.remote import records_from_payload
from parkval.ingestion.sheet import read_sheet_csv, records_from_rows

__all__ = ["read_sheet_csv", "records_from_payload", "records_from_rows"]
