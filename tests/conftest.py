from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from collections.abc import AsyncIterator, Iterator  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from src.api.deps import get_database  # noqa: E402
from src.api.main import app  # noqa: E402
from src.core.config import Settings  # noqa: E402
from src.infrastructure.database import Database  # noqa: E402
from src.infrastructure.store import InMemoryBackend  # noqa: E402


class TickingClock:
    """Deterministic clock that moves forward one second per reading."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now


class SequentialIds:
    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return f"{self.prefix}-{self.issued}"


@pytest.fixture()
def settings() -> Settings:
    return Settings(STORAGE_BACKEND="memory", SEED_ON_STARTUP=False, _env_file=None)


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock(datetime(2024, 3, 15, 9, 0, tzinfo=UTC))


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture()
def database(
    backend: InMemoryBackend, settings: Settings, clock: TickingClock, ids: SequentialIds
) -> Database:
    """Empty in-memory facade with a deterministic clock and id factory."""
    return Database(backend, settings=settings, clock=clock, id_factory=ids)


@pytest.fixture()
async def seeded_database(database: Database) -> Database:
    """Facade with the canonical first-run dataset loaded."""
    await database.initialize(seed=True)
    return database


@pytest.fixture()
def api_database(seeded_database: Database) -> Iterator[Database]:
    app.dependency_overrides[get_database] = lambda: seeded_database
    yield seeded_database
    app.dependency_overrides.pop(get_database, None)


@pytest.fixture()
async def async_client(api_database: Database) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to the seeded facade."""
    transport = ASGITransport(app=app)  # type: ignore
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
