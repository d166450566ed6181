"""Partitioned record store: one JSON array of records per partition key.

Reads never fail: a missing, unreadable or corrupted partition reads as an
empty list and the problem is logged. Writes overwrite the whole partition and
report failure through their return value instead of raising.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import structlog
from src.infrastructure.store.backends import KeyValueBackend

logger = structlog.get_logger(__name__)


class RecordStore:
    """Whole-partition get/set over a key-value blob backend."""

    def __init__(self, backend: KeyValueBackend) -> None:
        self.backend = backend

    async def read(self, partition_key: str) -> list[dict[str, Any]]:
        try:
            raw = await self.backend.get(partition_key)
        except Exception as exc:
            await logger.awarning(
                "record_store_read_failed", partition=partition_key, error=str(exc)
            )
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            await logger.awarning(
                "record_store_corrupted_partition", partition=partition_key, error=str(exc)
            )
            return []

        if not isinstance(data, list):
            await logger.awarning(
                "record_store_corrupted_partition",
                partition=partition_key,
                error=f"expected a JSON array, found {type(data).__name__}",
            )
            return []

        records = [item for item in data if isinstance(item, dict)]
        if len(records) != len(data):
            await logger.awarning(
                "record_store_dropped_non_objects",
                partition=partition_key,
                dropped=len(data) - len(records),
            )
        return records

    async def write(self, partition_key: str, records: Sequence[dict[str, Any]]) -> bool:
        try:
            payload = json.dumps(list(records), ensure_ascii=False)
            await self.backend.set(partition_key, payload)
        except Exception as exc:
            await logger.aerror(
                "record_store_write_failed",
                partition=partition_key,
                records=len(records),
                error=str(exc),
            )
            return False
        return True

    async def read_raw(self, partition_key: str) -> str | None:
        """Return the stored blob untouched, for byte-level comparisons."""
        return await self.backend.get(partition_key)
