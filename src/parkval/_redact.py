"""Helpers for safe debug logging.

Store requests carry the database secret as the ``auth`` query parameter,
and validation documents carry submitter identities and can hold
thousands of records. This module redacts and shortens both before they
reach a DEBUG log.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel

_REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "auth",
        "secret",
        "databasesecret",
        "accesstoken",
        "token",
        "authorization",
        "userid",
        "useremail",
    }
)

#: Record lists longer than this are logged as a head sample plus a count.
MAX_LOGGED_RECORDS = 5


def _is_sensitive(key: str) -> bool:
    return key.replace("_", "").lower() in _SENSITIVE_KEYS


def redact_params(params: Mapping[str, str]) -> dict[str, str]:
    """Return *params* with secret values replaced."""
    return {key: _REDACTED if _is_sensitive(key) else value for key, value in params.items()}


def redact_url(url: str, params: Mapping[str, str] | None = None) -> str:
    """Return *url* (plus any request *params*) with secrets replaced."""
    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update(params or {})
    if not query:
        return url
    return urlunsplit(parts._replace(query=urlencode(redact_params(query), safe="<>")))


def redact_for_log(value: Any, *, max_records: int = MAX_LOGGED_RECORDS) -> Any:
    """Return a copy of a store payload suitable for debug logs.

    Models are dumped as their store payload, sensitive keys are masked,
    and long record lists keep only the first *max_records* entries.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude_none=True)

    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED if _is_sensitive(str(key)) else redact_for_log(item, max_records=max_records)
            for key, item in value.items()
        }

    if isinstance(value, (list, tuple)):
        head = [redact_for_log(item, max_records=max_records) for item in value[:max_records]]
        hidden = len(value) - len(head)
        if hidden > 0:
            head.append(f"<{hidden} more>")
        return head

    return value
