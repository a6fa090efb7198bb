"""Issue report models produced by the duplicate scan."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from parkval.models._base import ParkvalBaseModel
from parkval.models.record import ValidationRecord


class IssueType(StrEnum):
    CONFLICT = "Conflict"
    """The plate has both valid and invalid records."""
    DUPLICATE = "Duplicate"
    """The plate has several records of the same validity class."""


class PlateIssue(ParkvalBaseModel):
    """All records sharing one plate, in source order."""

    plate: str
    records: tuple[ValidationRecord, ...] = Field(default_factory=tuple)
    type: IssueType

    @property
    def is_conflict(self) -> bool:
        return self.type == IssueType.CONFLICT
