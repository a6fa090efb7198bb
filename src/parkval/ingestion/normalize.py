"""Normalization helpers.

Centralizes defensive parsing of spreadsheet cells and store payloads.
"""

from __future__ import annotations

import math
from typing import Any


def cell_text(value: Any) -> str:
    """Render a sheet cell as trimmed text; blanks and NaN become ``""``."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def payload_entries(payload: Any) -> list[dict[str, Any]]:
    """Flatten a store list node into its dict entries.

    The Realtime Database returns arrays as JSON lists (with ``null``
    holes after deletes) but switches to an object keyed by index once
    the keys become sparse. ``null`` means the node does not exist.
    """
    if payload is None:
        return []
    if isinstance(payload, dict):
        values: list[Any] = list(payload.values())
    elif isinstance(payload, list):
        values = payload
    else:
        return []
    return [entry for entry in values if isinstance(entry, dict)]
