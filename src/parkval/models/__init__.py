"""Typed models for parkval documents."""

from parkval.models._base import ParkvalBaseModel
from parkval.models.issue import IssueType, PlateIssue
from parkval.models.record import ValidationRecord
from parkval.models.snapshot import SyncMetadata, ValidationSnapshot, epoch_millis, utc_iso

__all__ = [
    "IssueType",
    "ParkvalBaseModel",
    "PlateIssue",
    "SyncMetadata",
    "ValidationRecord",
    "ValidationSnapshot",
    "epoch_millis",
    "utc_iso",
]
