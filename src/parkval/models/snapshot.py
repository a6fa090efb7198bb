"""Store document envelope: the validations list plus sync metadata."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import Field

from parkval.models._base import ParkvalBaseModel
from parkval.models.record import ValidationRecord


def utc_iso(moment: datetime) -> str:
    """Format *moment* the way the sheet sync stamps it (``...123Z``)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return int(moment.timestamp() * 1000)


class SyncMetadata(ParkvalBaseModel):
    total_records: int
    last_sync: str
    """ISO-8601 time of the write."""
    last_modified: int
    """Epoch milliseconds; clients poll this to detect changes."""
    source: str

    @classmethod
    def stamp(cls, *, total_records: int, source: str, now: datetime) -> SyncMetadata:
        return cls(
            total_records=total_records,
            last_sync=utc_iso(now),
            last_modified=epoch_millis(now),
            source=source,
        )


class ValidationSnapshot(ParkvalBaseModel):
    """The full document stored under the root path."""

    validations: tuple[ValidationRecord, ...] = Field(default_factory=tuple)
    metadata: SyncMetadata

    def to_payload(self) -> dict[str, Any]:
        return {
            "validations": [record.to_payload() for record in self.validations],
            "metadata": self.metadata.to_payload(),
        }
