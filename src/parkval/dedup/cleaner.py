"""Plate-keyed cleaning and issue detection.

Both functions are pure: they read a materialized sequence of records and
return new lists without touching the input or any shared state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from parkval.dedup.classify import DEFAULT_VOCABULARY, StatusVocabulary, classify_status, is_valid_status
from parkval.dedup.events import DedupDecision, DedupRule
from parkval.dedup.policy import decide
from parkval.models.issue import IssueType, PlateIssue
from parkval.models.record import ValidationRecord

_logger = logging.getLogger(__name__)

DecisionHook = Callable[[DedupDecision], None]


def _emit(on_decision: DecisionHook | None, decision: DedupDecision) -> None:
    _logger.debug(
        "plate=%s rule=%s replaced=%s kept_status=%r incoming_status=%r",
        decision.plate,
        decision.rule,
        decision.replaced,
        decision.kept.status,
        decision.incoming.status,
    )
    if on_decision is not None:
        on_decision(decision)


def clean(
    records: Iterable[ValidationRecord],
    *,
    vocabulary: StatusVocabulary = DEFAULT_VOCABULARY,
    on_decision: DecisionHook | None = None,
) -> list[ValidationRecord]:
    """Return exactly one surviving record per non-empty plate.

    Records are folded left to right into a plate -> kept-record map; see
    :func:`parkval.dedup.policy.decide` for the replacement rules. The
    result keeps the order in which each plate first appeared. Records
    without a plate are dropped.
    """
    kept: dict[str, ValidationRecord] = {}

    for record in records:
        plate = record.license_plate
        if not plate:
            continue

        existing = kept.get(plate)
        if existing is None:
            kept[plate] = record
            _emit(
                on_decision,
                DedupDecision(plate=plate, rule=DedupRule.FIRST_SEEN, replaced=True, kept=record, incoming=record),
            )
            continue

        rule, replace = decide(
            existing_class=classify_status(existing.status, vocabulary),
            incoming_class=classify_status(record.status, vocabulary),
            existing_updated=existing.last_updated,
            incoming_updated=record.last_updated,
        )
        if replace:
            # Reassigning an existing key keeps its first-seen position.
            kept[plate] = record
        _emit(
            on_decision,
            DedupDecision(
                plate=plate,
                rule=rule,
                replaced=replace,
                kept=kept[plate],
                incoming=record,
                previous=existing,
            ),
        )

    return list(kept.values())


def group_by_plate(records: Iterable[ValidationRecord]) -> dict[str, list[ValidationRecord]]:
    """Group records with a non-empty plate, preserving first-seen order."""
    groups: dict[str, list[ValidationRecord]] = {}
    for record in records:
        if not record.license_plate:
            continue
        groups.setdefault(record.license_plate, []).append(record)
    return groups


def find_issues(
    records: Iterable[ValidationRecord],
    *,
    vocabulary: StatusVocabulary = DEFAULT_VOCABULARY,
) -> list[PlateIssue]:
    """Report every plate that has more than one record.

    A plate is a ``Conflict`` when it mixes valid (permanent or
    valid-temporary) and invalid records, otherwise a ``Duplicate``.
    """
    issues: list[PlateIssue] = []
    for plate, group in group_by_plate(records).items():
        if len(group) < 2:
            continue
        validity = {is_valid_status(record.status, vocabulary) for record in group}
        issue_type = IssueType.CONFLICT if len(validity) == 2 else IssueType.DUPLICATE
        issues.append(PlateIssue(plate=plate, records=tuple(group), type=issue_type))
    return issues
