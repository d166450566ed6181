"""Key-value blob backends underneath the record store.

A backend maps a partition key to one opaque string. It knows nothing about
records; serialization lives in :mod:`src.infrastructure.store.record_store`.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from src.infrastructure.db import Base, RecordPartitionModel


class StorageQuotaExceeded(Exception):
    """Raised by :class:`InMemoryBackend` when a write would exceed its quota."""


class KeyValueBackend(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def keys(self) -> list[str]: ...


class InMemoryBackend:
    """Process-local blob store with an optional byte quota."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self.quota_bytes = quota_bytes
        self._blobs: dict[str, str] = {}

    def _size_with(self, key: str, value: str) -> int:
        size = len(key.encode()) + len(value.encode())
        for existing_key, existing_value in self._blobs.items():
            if existing_key != key:
                size += len(existing_key.encode()) + len(existing_value.encode())
        return size

    async def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None and self._size_with(key, value) > self.quota_bytes:
            raise StorageQuotaExceeded(
                f"Writing {key} would exceed the {self.quota_bytes} byte storage quota"
            )
        self._blobs[key] = value

    async def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    async def keys(self) -> list[str]:
        return sorted(self._blobs)


class SqlBackend:
    """Blob store backed by the ``record_partitions`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> SqlBackend:
        return cls(async_sessionmaker(engine, expire_on_commit=False))

    async def create_schema(self, engine: AsyncEngine) -> None:
        """Create the blob table when migrations have not been run (local/tests)."""
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as session:
            row = await session.get(RecordPartitionModel, key)
            return row.payload if row is not None else None

    async def set(self, key: str, value: str) -> None:
        async with self._session_factory() as session:
            row = await session.get(RecordPartitionModel, key)
            if row is None:
                session.add(RecordPartitionModel(key=key, payload=value))
            else:
                row.payload = value
            await session.commit()

    async def delete(self, key: str) -> None:
        async with self._session_factory() as session:
            row = await session.get(RecordPartitionModel, key)
            if row is not None:
                await session.delete(row)
                await session.commit()

    async def keys(self) -> list[str]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(RecordPartitionModel.key).order_by(RecordPartitionModel.key)
            )
            return list(result.scalars().all())
