"""parkval - Parking-validation sheet sync and plate deduplication."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("parkval")
except PackageNotFoundError:
    __version__ = "0+local"
from parkval.client import CleanupResult, ParkvalClient, ScanResult
from parkval.config import ParkvalConfig
from parkval.dedup import (
    DedupDecision,
    DedupRule,
    StatusClass,
    StatusVocabulary,
    classify_status,
    clean,
    find_issues,
    is_valid_status,
)
from parkval.exceptions import (
    MissingColumnsError,
    ParkvalCleanupRefusedError,
    ParkvalConfigError,
    ParkvalError,
    ParkvalPermissionDeniedError,
    ParkvalSourceError,
    ParkvalStoreError,
    SheetNotFoundError,
)
from parkval.models import IssueType, PlateIssue, SyncMetadata, ValidationRecord, ValidationSnapshot

__all__ = [
    "__version__",
    "CleanupResult",
    "DedupDecision",
    "DedupRule",
    "IssueType",
    "MissingColumnsError",
    "ParkvalCleanupRefusedError",
    "ParkvalClient",
    "ParkvalConfig",
    "ParkvalConfigError",
    "ParkvalError",
    "ParkvalPermissionDeniedError",
    "ParkvalSourceError",
    "ParkvalStoreError",
    "PlateIssue",
    "ScanResult",
    "SheetNotFoundError",
    "StatusClass",
    "StatusVocabulary",
    "SyncMetadata",
    "ValidationRecord",
    "ValidationSnapshot",
    "classify_status",
    "clean",
    "find_issues",
    "is_valid_status",
]
