"""Status classification.

Maps a record's free-text ``status`` onto one of three classes. The
marker strings are data, not code: sheet versions have used different
labels for the same meaning, so callers pass a :class:`StatusVocabulary`
built from configuration.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from enum import IntEnum

from parkval._constants import DEFAULT_PERMANENT_MARKERS, DEFAULT_VALID_MARKERS
from parkval.config import ParkvalConfig, env_markers


class StatusClass(IntEnum):
    """Status classes ordered by priority (higher wins)."""

    INVALID = 0
    VALID_TEMPORARY = 1
    PERMANENT = 2

    @property
    def is_valid(self) -> bool:
        return self is not StatusClass.INVALID


@dataclasses.dataclass(frozen=True)
class StatusVocabulary:
    """Marker strings recognised for each non-invalid class."""

    permanent_markers: frozenset[str] = DEFAULT_PERMANENT_MARKERS
    valid_markers: frozenset[str] = DEFAULT_VALID_MARKERS

    @classmethod
    def of(cls, *, permanent: Iterable[str], valid: Iterable[str]) -> StatusVocabulary:
        return cls(permanent_markers=frozenset(permanent), valid_markers=frozenset(valid))

    @classmethod
    def from_config(cls, config: ParkvalConfig) -> StatusVocabulary:
        return cls(permanent_markers=config.permanent_markers, valid_markers=config.valid_markers)

    @classmethod
    def from_env(cls) -> StatusVocabulary:
        """Read ``PARKVAL_PERMANENT_MARKERS`` / ``PARKVAL_VALID_MARKERS``.

        Unlike :meth:`ParkvalConfig.from_env` this needs no database URL,
        so offline tools classify statuses exactly like the client does.
        """
        env = os.environ
        return cls(
            permanent_markers=env_markers(env.get("PARKVAL_PERMANENT_MARKERS")) or DEFAULT_PERMANENT_MARKERS,
            valid_markers=env_markers(env.get("PARKVAL_VALID_MARKERS")) or DEFAULT_VALID_MARKERS,
        )


DEFAULT_VOCABULARY = StatusVocabulary()


def classify_status(status: str | None, vocabulary: StatusVocabulary = DEFAULT_VOCABULARY) -> StatusClass:
    """Classify *status*; anything unrecognised (including ``""``) is invalid."""
    if not status:
        return StatusClass.INVALID
    if status in vocabulary.permanent_markers:
        return StatusClass.PERMANENT
    if status in vocabulary.valid_markers:
        return StatusClass.VALID_TEMPORARY
    return StatusClass.INVALID


def is_valid_status(status: str | None, vocabulary: StatusVocabulary = DEFAULT_VOCABULARY) -> bool:
    """Permanent and valid-temporary both count as valid."""
    return classify_status(status, vocabulary).is_valid
