"""Client configuration for parkval."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from parkval._constants import (
    DEFAULT_PERMANENT_MARKERS,
    DEFAULT_ROOT_PATH,
    DEFAULT_SHEET_NAME,
    DEFAULT_SOURCE_TAG,
    DEFAULT_VALID_MARKERS,
)
from parkval.exceptions import ParkvalConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def env_markers(value: str | None) -> frozenset[str] | None:
    if value is None:
        return None
    markers = frozenset(part.strip() for part in value.split(",") if part.strip())
    return markers or None


@dataclasses.dataclass(frozen=True)
class ParkvalConfig:
    """Client configuration.

    Parameters
    ----------
    database_url : str
        Base URL of the Realtime Database, e.g.
        ``"https://<project>-default-rtdb.firebaseio.com"``.
    database_secret : str or None
        Legacy database secret passed as the ``auth`` query parameter.
        ``None`` sends unauthenticated requests (rules permitting).
    root_path : str
        Node under which the validations document lives.
    sheet_name : str
        Name of the spreadsheet tab holding validation rows.
    source_tag : str
        Value written to ``metadata.source`` on sheet syncs.
    permanent_markers : frozenset of str
        Status labels meaning "permanent" (e.g. staff vehicles).
    valid_markers : frozenset of str
        Status labels meaning "valid for now".
    request_timeout : float
        Total timeout in seconds for a single store request.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    database_url: str
    database_secret: str | None = None
    root_path: str = DEFAULT_ROOT_PATH
    sheet_name: str = DEFAULT_SHEET_NAME
    source_tag: str = DEFAULT_SOURCE_TAG
    permanent_markers: frozenset[str] = DEFAULT_PERMANENT_MARKERS
    valid_markers: frozenset[str] = DEFAULT_VALID_MARKERS
    request_timeout: float = 30.0
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.database_url or not self.database_url.strip():
            raise ParkvalConfigError("database_url must be non-empty")
        object.__setattr__(self, "database_url", self.database_url.strip().rstrip("/"))
        object.__setattr__(self, "root_path", self.root_path.strip("/"))
        object.__setattr__(self, "permanent_markers", frozenset(self.permanent_markers))
        object.__setattr__(self, "valid_markers", frozenset(self.valid_markers))

    @classmethod
    def from_env(cls, **overrides: Any) -> ParkvalConfig:
        """Create configuration from environment variables.

        Reads ``PARKVAL_DATABASE_URL`` and optional ``PARKVAL_*``
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ParkvalConfig
            Populated configuration.

        Raises
        ------
        ParkvalConfigError
            If no database URL is available.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "PARKVAL_DATABASE_URL": "database_url",
            "PARKVAL_DATABASE_SECRET": "database_secret",
            "PARKVAL_ROOT_PATH": "root_path",
            "PARKVAL_SHEET_NAME": "sheet_name",
            "PARKVAL_SOURCE_TAG": "source_tag",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        permanent = env_markers(env.get("PARKVAL_PERMANENT_MARKERS"))
        if permanent is not None:
            config_kwargs["permanent_markers"] = permanent
        valid = env_markers(env.get("PARKVAL_VALID_MARKERS"))
        if valid is not None:
            config_kwargs["valid_markers"] = valid

        timeout_env = env.get("PARKVAL_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise ParkvalConfigError(f"PARKVAL_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("PARKVAL_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        if not config_kwargs.get("database_url"):
            raise ParkvalConfigError("PARKVAL_DATABASE_URL is not set")

        return cls(**config_kwargs)
