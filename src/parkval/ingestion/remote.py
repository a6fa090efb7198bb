"""Store payload ingestion + parsing."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from parkval.ingestion.normalize import payload_entries
from parkval.models.record import ValidationRecord

_logger = logging.getLogger(__name__)


def records_from_payload(payload: Any) -> list[ValidationRecord]:
    """Parse the ``validations`` node into records.

    Entries that cannot be parsed are skipped and logged.
    """
    records: list[ValidationRecord] = []
    for entry in payload_entries(payload):
        try:
            records.append(ValidationRecord.model_validate(entry))
        except ValidationError as exc:
            _logger.warning("Skipping malformed validation entry: %s", exc.errors(include_url=False))
    return records
