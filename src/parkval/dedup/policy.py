"""Deterministic survivor policy.

This module contains *no* grouping or iteration; it only decides, for one
``existing``/``incoming`` pair sharing a plate, whether the incoming
record replaces the kept one.
"""

from __future__ import annotations

from datetime import UTC, datetime

from parkval.dedup.classify import StatusClass
from parkval.dedup.events import DedupRule

# Unparseable timestamps sort before every real one.
_EARLIEST = datetime.min.replace(tzinfo=UTC)


def parse_timestamp(value: str | None) -> datetime:
    """Parse an ISO-8601 timestamp, returning the earliest instant on failure.

    A trailing ``Z`` is accepted and naive values are taken as UTC.
    """
    if not value:
        return _EARLIEST
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return _EARLIEST
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def is_strictly_later(incoming: str | None, existing: str | None) -> bool:
    return parse_timestamp(incoming) > parse_timestamp(existing)


def decide(
    *,
    existing_class: StatusClass,
    incoming_class: StatusClass,
    existing_updated: str | None,
    incoming_updated: str | None,
) -> tuple[DedupRule, bool]:
    """Return ``(rule, replace)`` for an incoming record.

    Policy, first match wins:
    - permanent incoming beats a valid-temporary kept record.
    - any valid incoming beats an invalid kept record.
    - equal valid classes: the strictly newer ``lastUpdated`` wins.
    - otherwise the kept record stays.
    """
    if incoming_class is StatusClass.PERMANENT and existing_class is StatusClass.VALID_TEMPORARY:
        return DedupRule.PERMANENT_OVER_TEMPORARY, True

    if incoming_class.is_valid and existing_class is StatusClass.INVALID:
        return DedupRule.VALID_OVER_INVALID, True

    if incoming_class is StatusClass.PERMANENT and existing_class is StatusClass.PERMANENT:
        return DedupRule.NEWER_PERMANENT, is_strictly_later(incoming_updated, existing_updated)

    if incoming_class is StatusClass.VALID_TEMPORARY and existing_class is StatusClass.VALID_TEMPORARY:
        return DedupRule.NEWER_TEMPORARY, is_strictly_later(incoming_updated, existing_updated)

    return DedupRule.KEEP_EXISTING, False
