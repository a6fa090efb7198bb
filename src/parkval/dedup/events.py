"""Decision events emitted while cleaning.

The cleaner reports every per-plate decision through an optional hook
so callers can trace why a record survived without the core doing any
output of its own.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from parkval.models.record import ValidationRecord


class DedupRule(StrEnum):
    FIRST_SEEN = "first_seen"
    PERMANENT_OVER_TEMPORARY = "permanent_over_temporary"
    VALID_OVER_INVALID = "valid_over_invalid"
    NEWER_PERMANENT = "newer_permanent"
    NEWER_TEMPORARY = "newer_temporary"
    KEEP_EXISTING = "keep_existing"


class DedupDecision(BaseModel):
    """The outcome of folding one incoming record into the kept set."""

    model_config = ConfigDict(frozen=True)

    plate: str
    rule: DedupRule
    replaced: bool
    kept: ValidationRecord
    """The record kept for the plate *after* this decision."""
    incoming: ValidationRecord
    previous: ValidationRecord | None = None
    """The record kept *before* this decision (``None`` on first sight)."""
