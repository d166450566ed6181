"""Cross-repository guarantees: uniqueness, read-after-write and repeatable updates."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from src.core.errors import ErrorKind
from src.infrastructure.database import Database
from src.infrastructure.store import InMemoryBackend
from tests.utils import user_payload

CREATE_CASES = [
    ("users", "create", user_payload("raw@example.com", phone="0917")),
    (
        "logbook",
        "create",
        {
            "user_id": "2",
            "date": datetime(2024, 3, 1, tzinfo=UTC),
            "title": "Deploy",
            "activities": ["k8s"],
            "hours_worked": 4,
        },
    ),
    (
        "documents",
        "upload",
        {"user_id": "2", "type": "waiver", "title": "Waiver", "file_name": "w.pdf"},
    ),
    (
        "announcements",
        "create",
        {"title": "Hi", "content": "Welcome", "author_id": "1", "author_name": "Admin"},
    ),
    (
        "evaluations",
        "create",
        {
            "student_id": "2",
            "evaluator_id": "4",
            "evaluator_role": "supervisor",
            "type": "final",
            "scores": {
                "technical": 70,
                "communication": 75,
                "teamwork": 80,
                "initiative": 85,
                "punctuality": 90,
            },
        },
    ),
    (
        "contacts",
        "submit",
        {"name": "Guest", "email": "guest@example.com", "subject": "Hi", "message": "Hello"},
    ),
]


@pytest.mark.asyncio
@pytest.mark.parametrize(("repository", "method", "payload"), CREATE_CASES)
async def test_read_after_write(
    database: Database, repository: str, method: str, payload: dict
) -> None:
    repo = getattr(database, repository)

    created = (await getattr(repo, method)(payload)).data
    fetched = (await repo.get(created.id)).data

    assert fetched == created
    for field, value in payload.items():
        stored = getattr(fetched, field)
        if isinstance(value, dict):
            stored = stored.model_dump(include=set(value))
        assert stored == value


@pytest.mark.asyncio
async def test_duplicate_email_leaves_partition_untouched(
    database: Database, backend: InMemoryBackend
) -> None:
    await database.users.create(user_payload("first@example.com"))
    before = await backend.get(database.users.key)

    result = await database.users.create(user_payload("first@example.com", role="coordinator"))

    assert result.kind == ErrorKind.CONFLICT
    assert await backend.get(database.users.key) == before


@pytest.mark.asyncio
async def test_repeated_update_yields_same_state(database: Database) -> None:
    entry = (await database.logbook.create(CREATE_CASES[1][2])).data
    changes = {"title": "Deploy to staging", "hours_worked": 5}

    once = (await database.logbook.update(entry.id, changes)).data
    twice = (await database.logbook.update(entry.id, changes)).data

    assert once.model_dump(exclude={"updated_at"}) == twice.model_dump(exclude={"updated_at"})
    assert twice.updated_at >= once.updated_at


@pytest.mark.asyncio
async def test_unreadable_rows_survive_writes(
    database: Database, backend: InMemoryBackend
) -> None:
    broken = {"id": "legacy", "name": "No email"}
    await database.store.write(database.users.key, [broken])

    await database.users.create(user_payload("fresh@example.com"))

    rows = await database.store.read(database.users.key)
    assert broken in rows
    assert [user.email for user in (await database.users.list()).data] == ["fresh@example.com"]
