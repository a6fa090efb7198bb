"""Deduplication layer.

This package is the single place that decides which validation record
survives for a plate, and which plates need an operator's attention.
"""

from parkval.dedup.classify import (
    DEFAULT_VOCABULARY,
    StatusClass,
    StatusVocabulary,
    classify_status,
    is_valid_status,
)
from parkval.dedup.cleaner import DecisionHook, clean, find_issues, group_by_plate
from parkval.dedup.events import DedupDecision, DedupRule
from parkval.dedup.policy import decide, parse_timestamp

__all__ = [
    "DEFAULT_VOCABULARY",
    "DecisionHook",
    "DedupDecision",
    "DedupRule",
    "StatusClass",
    "StatusVocabulary",
    "classify_status",
    "clean",
    "decide",
    "find_issues",
    "group_by_plate",
    "is_valid_status",
    "parse_timestamp",
]
