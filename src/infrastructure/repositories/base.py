"""Shared read-modify-write machinery for the entity repositories.

Every mutation reads the full partition, changes an in-memory copy and writes
the whole partition back. There is no lock and no revision check, so two
operations interleaving on the same partition can lose an update; callers run
on a single event loop and accept that.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from pydantic import ValidationError
from src.core.errors import NotFoundError, StorageFailureError
from src.domain.models import Record
from src.infrastructure.store import RecordStore

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class PartitionView(Generic[RecordT]):
    """A decoded partition; rows that failed validation ride along untouched."""

    records: list[RecordT]
    unreadable: list[dict[str, Any]] = field(default_factory=list)

    def index_of(self, record_id: str) -> int:
        for index, record in enumerate(self.records):
            if record.id == record_id:
                return index
        return -1


class PartitionRepository(Generic[RecordT]):
    """Generic create/get/update/delete/list over one partition."""

    model: ClassVar[type[Record]]
    partition: ClassVar[str]
    label: ClassVar[str]
    order_field: ClassVar[str | None] = "created_at"
    # Alias refreshed on every update, if the entity tracks one.
    touch_field: ClassVar[str | None] = None

    def __init__(
        self,
        store: RecordStore,
        *,
        prefix: str = "ojt_db_",
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
        latency_ms: int = 0,
    ) -> None:
        self.store = store
        self.prefix = prefix
        self.clock = clock
        self.id_factory = id_factory
        self.latency_ms = latency_ms

    @property
    def key(self) -> str:
        return f"{self.prefix}{self.partition}"

    async def _pause(self) -> None:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def _load(self) -> PartitionView[RecordT]:
        view: PartitionView[RecordT] = PartitionView(records=[])
        for row in await self.store.read(self.key):
            try:
                view.records.append(self.model.model_validate(row))  # type: ignore[arg-type]
            except ValidationError as exc:
                await logger.awarning(
                    "record_unreadable",
                    partition=self.key,
                    record_id=row.get("id"),
                    errors=exc.error_count(),
                )
                view.unreadable.append(row)
        return view

    async def _save(self, view: PartitionView[RecordT], failure: str) -> None:
        rows = [record.to_storage() for record in view.records] + view.unreadable
        if not await self.store.write(self.key, rows):
            raise StorageFailureError(failure)

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.label} not found")

    def _build(self, data: Mapping[str, Any], assigned: Mapping[str, Any]) -> RecordT:
        payload = self.model.storage_keys(dict(data))
        payload.update(self.model.storage_keys(dict(assigned)))
        return self.model.model_validate(payload)  # type: ignore[return-value]

    def _merge(self, record: RecordT, changes: Mapping[str, Any]) -> RecordT:
        payload = record.to_storage()
        payload.update(self.model.storage_keys(dict(changes)))
        return self.model.model_validate(payload)  # type: ignore[return-value]

    def _client_fields(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Caller-supplied fields with server-assigned and review-only aliases dropped."""
        fields = self.model.storage_keys(dict(data))
        for alias in (*self.model.server_fields, *self.model.review_fields):
            fields.pop(alias, None)
        return fields

    def _client_changes(self, updates: Mapping[str, Any]) -> dict[str, Any]:
        changes = self._client_fields(updates)
        if self.touch_field:
            changes[self.touch_field] = self.clock()
        return changes

    def _newest_first(self, records: Iterable[RecordT]) -> list[RecordT]:
        if self.order_field is None:
            return list(records)
        order_field = self.order_field
        return sorted(records, key=lambda record: getattr(record, order_field), reverse=True)

    async def _insert(self, record: RecordT) -> RecordT:
        view = await self._load()
        view.records.append(record)
        await self._save(view, f"Failed to save {self.label.lower()}")
        await logger.ainfo(f"{self.partition}_created", record_id=record.id)
        return record

    async def _find(self, record_id: str) -> RecordT:
        view = await self._load()
        index = view.index_of(record_id)
        if index == -1:
            raise self._not_found()
        return view.records[index]

    async def _apply(
        self,
        record_id: str,
        changes: Mapping[str, Any],
        *,
        guard: Callable[[RecordT], None] | None = None,
    ) -> RecordT:
        view = await self._load()
        index = view.index_of(record_id)
        if index == -1:
            raise self._not_found()
        if guard is not None:
            guard(view.records[index])
        view.records[index] = self._merge(view.records[index], changes)
        await self._save(view, f"Failed to update {self.label.lower()}")
        return view.records[index]

    async def _remove(self, record_id: str) -> bool:
        view = await self._load()
        remaining = [record for record in view.records if record.id != record_id]
        if len(remaining) == len(view.records):
            raise self._not_found()
        view.records = remaining
        await self._save(view, f"Failed to delete {self.label.lower()}")
        await logger.ainfo(f"{self.partition}_deleted", record_id=record_id)
        return True

    async def _select(
        self, predicate: Callable[[RecordT], bool] | None = None, *, newest_first: bool = True
    ) -> list[RecordT]:
        view = await self._load()
        records = [r for r in view.records if predicate is None or predicate(r)]
        return self._newest_first(records) if newest_first else records

    async def count(self, predicate: Callable[[RecordT], bool] | None = None) -> int:
        """Scan and count; used by the aggregate services."""
        return len(await self._select(predicate, newest_first=False))

    async def is_empty(self) -> bool:
        return not await self.store.read(self.key)

    async def seed(self, records: Iterable[RecordT]) -> bool:
        """Write ``records`` only when the partition is empty. Returns whether it wrote."""
        if not await self.is_empty():
            return False
        rows = [record.to_storage() for record in records]
        if not await self.store.write(self.key, rows):
            raise StorageFailureError(f"Failed to seed {self.partition}")
        return True
