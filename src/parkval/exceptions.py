"""Custom exception hierarchy for parkval."""

from __future__ import annotations

from collections.abc import Sequence


class ParkvalError(Exception):
    """Base exception for all parkval errors."""


class ParkvalConfigError(ParkvalError):
    """Invalid or missing configuration."""


class ParkvalSourceError(ParkvalError):
    """The spreadsheet source could not be read."""


class SheetNotFoundError(ParkvalSourceError):
    """The configured sheet (or its CSV export) does not exist."""

    def __init__(self, message: str, *, sheet: str = "") -> None:
        self.sheet = sheet
        super().__init__(message)


class MissingColumnsError(ParkvalSourceError):
    """The sheet header lacks one or more required columns."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        names = ", ".join(f'"{name}"' for name in self.missing)
        super().__init__(f"Required columns {names} not found!")


class ParkvalStoreError(ParkvalError):
    """Remote store failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(message)


class ParkvalPermissionDeniedError(ParkvalStoreError):
    """The store rejected the credentials (HTTP 401/403, ``PERMISSION_DENIED``).

    The admin workflow treats this as "not an administrator": the
    operation is aborted and nothing is written.
    """


class ParkvalCleanupRefusedError(ParkvalError):
    """Cleanup was requested without a scan that found issues."""
