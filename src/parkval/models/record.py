"""Validation record model."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict

from parkval.models._base import ParkvalBaseModel, Text


class ValidationRecord(ParkvalBaseModel):
    """One submitted claim that a license plate is parked validly.

    ``license_plate`` is the deduplication key. It is trimmed but kept
    case-sensitive as submitted; an empty plate is allowed here and
    excluded later by the cleaning and issue passes.

    Keys the model does not declare (notes, submitter e-mail, ...) are
    kept as extras and written back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    license_plate: Text = ""
    status: Text = ""
    user_id: Text | None = None
    row_index: int | None = None
    """1-based sheet row; provenance only."""
    last_updated: Text = ""
    """ISO-8601 timestamp, used only as a tiebreak."""

    @property
    def has_plate(self) -> bool:
        return bool(self.license_plate)

    def to_payload(self) -> dict[str, Any]:
        extras = {key: value for key, value in (self.model_extra or {}).items() if value is not None}
        return {**extras, **super().to_payload()}
