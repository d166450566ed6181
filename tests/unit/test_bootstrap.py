"""Unit tests for first-run seeding."""

from __future__ import annotations

import pytest
from src.core.auth import Role
from src.infrastructure.database import Database
from tests.utils import user_payload

ALL_SEEDED = [
    "ojt_db_users",
    "ojt_db_announcements",
    "ojt_db_logbook_entries",
    "ojt_db_documents",
    "ojt_db_evaluations",
]


@pytest.mark.asyncio
async def test_seeds_every_empty_partition(database: Database) -> None:
    result = await database.bootstrap.initialize()

    assert result.data == ALL_SEEDED
    users = (await database.users.list()).data
    assert [user.id for user in users] == ["1", "0", "2", "3", "4", "5", "6"]
    assert sum(1 for user in users if user.role == Role.ADMIN) == 2
    assert len((await database.announcements.list()).data) == 3
    assert len((await database.logbook.list_for_user("2")).data) == 3
    assert len((await database.evaluations.list_for_student("2")).data) == 1


@pytest.mark.asyncio
async def test_second_run_is_byte_for_byte_noop(database: Database) -> None:
    await database.bootstrap.initialize()
    before = {key: await database.store.read_raw(key) for key in ALL_SEEDED}

    result = await database.bootstrap.initialize()

    assert result.data == []
    for key in ALL_SEEDED:
        assert await database.store.read_raw(key) == before[key]


@pytest.mark.asyncio
async def test_populated_partition_is_left_alone(database: Database) -> None:
    await database.users.create(user_payload("only@example.com"))

    result = await database.bootstrap.initialize()

    assert "ojt_db_users" not in result.data
    assert "ojt_db_documents" in result.data
    assert [user.email for user in (await database.users.list()).data] == ["only@example.com"]


@pytest.mark.asyncio
async def test_contact_partition_is_not_seeded(database: Database) -> None:
    await database.bootstrap.initialize()

    assert await database.store.read_raw(database.contacts.key) is None


@pytest.mark.asyncio
async def test_initialize_respects_seed_flag(database: Database) -> None:
    await database.initialize(seed=False)

    assert await database.users.is_empty()
