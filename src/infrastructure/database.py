"""The persistence facade handed to callers: one record store, one repository per entity."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine
from src.core.config import Settings, get_settings
from src.domain.services.auth_service import AuthService
from src.domain.services.bootstrap import BootstrapLoader
from src.domain.services.progress import ProgressService
from src.domain.services.statistics import StatisticsService
from src.infrastructure.db.session import dispose_engine, get_engine, get_session_factory
from src.infrastructure.repositories import (
    AnnouncementRepository,
    ContactRepository,
    DocumentRepository,
    EvaluationRepository,
    LogbookRepository,
    UserRepository,
)
from src.infrastructure.repositories.base import IdFactory, new_id, utc_now
from src.infrastructure.store import InMemoryBackend, KeyValueBackend, RecordStore, SqlBackend

logger = structlog.get_logger(__name__)


class Database:
    """Wires repositories and the services built on them around a single record store."""

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: IdFactory = new_id,
        engine: AsyncEngine | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.settings = settings
        self.backend = backend
        self.engine = engine
        self._shared_engine = False
        self.store = RecordStore(backend)

        options = {
            "prefix": settings.partition_prefix,
            "clock": clock,
            "id_factory": id_factory,
            "latency_ms": settings.simulated_latency_ms,
        }
        self.users = UserRepository(
            self.store, assigned_students_limit=settings.assigned_students_limit, **options
        )
        self.logbook = LogbookRepository(self.store, **options)
        self.documents = DocumentRepository(self.store, **options)
        self.announcements = AnnouncementRepository(self.store, **options)
        self.evaluations = EvaluationRepository(self.store, **options)
        self.contacts = ContactRepository(self.store, **options)

        self.statistics = StatisticsService(
            self.users, self.logbook, self.documents, self.evaluations
        )
        self.progress = ProgressService(
            self.logbook,
            self.documents,
            self.evaluations,
            required_hours=settings.required_hours,
        )
        self.bootstrap = BootstrapLoader(
            self.users,
            self.announcements,
            self.logbook,
            self.documents,
            self.evaluations,
            clock=clock,
        )
        self.auth = AuthService(self.users)

    @classmethod
    def in_memory(cls, settings: Settings | None = None, **kwargs) -> Database:
        settings = settings or get_settings()
        backend = InMemoryBackend(quota_bytes=settings.storage_quota_bytes)
        return cls(backend, settings=settings, **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> Database:
        """Build the backend named by ``STORAGE_BACKEND``."""
        settings = settings or get_settings()
        if settings.storage_backend == "memory":
            return cls.in_memory(settings, **kwargs)
        if settings.storage_backend != "sql":
            raise ValueError(f"Unsupported storage backend: {settings.storage_backend}")
        engine = kwargs.pop("engine", None)
        if engine is not None:
            return cls(SqlBackend.from_engine(engine), settings=settings, engine=engine, **kwargs)

        database = cls(
            SqlBackend(get_session_factory()), settings=settings, engine=get_engine(), **kwargs
        )
        database._shared_engine = True
        return database

    async def initialize(self, *, seed: bool | None = None) -> None:
        """Create the blob table if needed and run the bootstrap loader."""
        if isinstance(self.backend, SqlBackend) and self.engine is not None:
            await self.backend.create_schema(self.engine)

        should_seed = self.settings.seed_on_startup if seed is None else seed
        if should_seed:
            result = await self.bootstrap.initialize()
            if not result.ok:
                await logger.aerror("bootstrap_failed", error=result.error)

    async def close(self) -> None:
        if self._shared_engine:
            await dispose_engine()
        elif self.engine is not None:
            await self.engine.dispose()
