"""High-level async client for the parking-validation store."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiohttp

from parkval._transport import RestTransport, Transport
from parkval.config import ParkvalConfig
from parkval.dedup.classify import StatusVocabulary
from parkval.dedup.cleaner import DecisionHook, clean, find_issues
from parkval.dedup.events import DedupDecision
from parkval.exceptions import ParkvalCleanupRefusedError, ParkvalError
from parkval.ingestion.sheet import read_sheet_csv, records_from_rows
from parkval.models.issue import PlateIssue
from parkval.models.record import ValidationRecord
from parkval.models.snapshot import SyncMetadata
from parkval.store import ValidationStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Records read from the store plus the issues found among them."""

    records: tuple[ValidationRecord, ...]
    issues: tuple[PlateIssue, ...] = ()

    @property
    def cleanup_allowed(self) -> bool:
        """Cleanup is only offered once a scan has found something to fix."""
        return bool(self.issues)


@dataclass(frozen=True, slots=True)
class CleanupResult:
    kept: tuple[ValidationRecord, ...]
    removed: int
    metadata: SyncMetadata
    issues_resolved: int = 0
    decisions: tuple[DedupDecision, ...] = field(default=(), repr=False)


class ParkvalClient:
    """Async client for syncing and cleaning validation records.

    Usage::

        async with ParkvalClient(config) as client:
            await client.sync_from_csv("validations.csv")
            scan = await client.scan()
            if scan.cleanup_allowed:
                await client.cleanup(scan)
    """

    def __init__(
        self,
        config: ParkvalConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_decision: DecisionHook | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._store: ValidationStore | None = None
        self._vocabulary = StatusVocabulary.from_config(config)
        self._on_decision = on_decision

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ParkvalClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = RestTransport(self._config, self._http_session)
        self._store = ValidationStore(self._config, self._transport)
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.async_close()

    async def async_close(self) -> None:
        """Close the HTTP session if we own it."""
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_store(self) -> ValidationStore:
        if self._store is None:
            raise ParkvalError("Client not initialized. Use 'async with ParkvalClient(...)'")
        return self._store

    @property
    def vocabulary(self) -> StatusVocabulary:
        return self._vocabulary

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    async def test_connection(self) -> bool:
        """Return whether the store is reachable with the configured secret."""
        return await self._require_store().check_connection()

    async def sync_from_rows(self, rows: Sequence[Sequence[Any]]) -> SyncMetadata | None:
        """Replace the store contents with the sheet *rows*.

        Returns the written metadata, or ``None`` when the sheet held
        only a header and nothing was written.
        """
        store = self._require_store()
        _logger.info("Starting sync from sheet %s", self._config.sheet_name)
        records = records_from_rows(rows)
        if not records:
            return None
        metadata = await store.replace_all(records, source=self._config.source_tag)
        _logger.info("Sync completed: %d records", metadata.total_records)
        return metadata

    async def sync_from_csv(self, path: str | Path) -> SyncMetadata | None:
        """Read a CSV export of the sheet and sync it."""
        return await self.sync_from_rows(read_sheet_csv(path))

    async def scan(self) -> ScanResult:
        """Read the store and report duplicate/conflicting plates."""
        records = await self._require_store().read_validations()
        issues = find_issues(records, vocabulary=self._vocabulary)
        _logger.info("Scan found %d plates with issues among %d records", len(issues), len(records))
        return ScanResult(records=tuple(records), issues=tuple(issues))

    async def cleanup(self, scan: ScanResult, *, source: str = "admin-cleanup") -> CleanupResult:
        """Write back one surviving record per plate from *scan*.

        Raises
        ------
        ParkvalCleanupRefusedError
            If *scan* found no issues.
        """
        if not scan.cleanup_allowed:
            raise ParkvalCleanupRefusedError("Nothing to clean up: the scan found no issues")

        decisions: list[DedupDecision] = []

        def _record(decision: DedupDecision) -> None:
            decisions.append(decision)
            if self._on_decision is not None:
                self._on_decision(decision)

        kept = clean(scan.records, vocabulary=self._vocabulary, on_decision=_record)
        metadata = await self._require_store().replace_all(kept, source=source)
        removed = len(scan.records) - len(kept)
        _logger.info("Cleanup removed %d records", removed)
        return CleanupResult(
            kept=tuple(kept),
            removed=removed,
            metadata=metadata,
            issues_resolved=len(scan.issues),
            decisions=tuple(decisions),
        )
