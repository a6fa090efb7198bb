"""Validation document store.

The store only ever replaces the whole document: a failed write leaves
the previous remote state untouched, and no partial cleanup is written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from parkval._transport import Transport
from parkval.config import ParkvalConfig
from parkval.exceptions import ParkvalStoreError
from parkval.ingestion.remote import records_from_payload
from parkval.models.record import ValidationRecord
from parkval.models.snapshot import SyncMetadata, ValidationSnapshot, epoch_millis

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ValidationStore:
    """Reads and replaces the validations document under ``config.root_path``."""

    def __init__(
        self,
        config: ParkvalConfig,
        transport: Transport,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._transport = transport
        self._clock = clock

    @property
    def root(self) -> str:
        return self._config.root_path

    async def read_validations(self) -> list[ValidationRecord]:
        """Fetch the current ``validations`` list."""
        payload = await self._transport.get_json(f"{self.root}/validations")
        records = records_from_payload(payload)
        _logger.debug("Read %d validation records from %s", len(records), self.root)
        return records

    async def replace_all(self, records: Sequence[ValidationRecord], *, source: str) -> SyncMetadata:
        """Replace the whole document with *records* plus fresh metadata.

        Returns the metadata that was written.
        """
        metadata = SyncMetadata.stamp(total_records=len(records), source=source, now=self._clock())
        snapshot = ValidationSnapshot(validations=tuple(records), metadata=metadata)
        await self._transport.put_json(self.root, snapshot.to_payload())
        _logger.info("Wrote %d validation records to %s", len(records), self.root)
        await self.touch_last_modified()
        return metadata

    async def touch_last_modified(self) -> None:
        """Bump ``metadata/lastModified`` so polling clients notice the change.

        Best effort: the document itself has already been written.
        """
        try:
            await self._transport.put_json(f"{self.root}/metadata/lastModified", epoch_millis(self._clock()))
        except ParkvalStoreError as exc:
            _logger.warning("Could not update lastModified: %s", exc)

    async def check_connection(self) -> bool:
        """Return whether the database root is readable."""
        try:
            await self._transport.get_json("")
        except ParkvalStoreError as exc:
            _logger.error("Store connection failed: %s", exc)
            return False
        _logger.info("Store connection successful")
        return True
