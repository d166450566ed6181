"""Unit tests for contact form submissions."""

from __future__ import annotations

import pytest
from src.core.errors import ErrorKind
from src.domain.models import ContactStatus
from src.infrastructure.database import Database


def contact_payload(**overrides) -> dict:
    payload = {
        "name": "Parent",
        "email": "parent@example.com",
        "subject": "Schedule",
        "message": "When does the OJT start?",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_submit_is_always_new(database: Database) -> None:
    result = await database.contacts.submit(contact_payload(status="closed"))

    assert result.data.status == ContactStatus.NEW
    assert result.data.timestamp is not None


@pytest.mark.asyncio
async def test_respond_marks_responded(database: Database) -> None:
    submission = (await database.contacts.submit(contact_payload())).data

    result = await database.contacts.respond(submission.id, "Next Monday", "3")

    assert result.data.status == ContactStatus.RESPONDED
    assert result.data.response == "Next Monday"
    assert result.data.responded_by == "3"
    assert result.data.responded_at is not None


@pytest.mark.asyncio
async def test_list_filters_by_status(database: Database) -> None:
    first = (await database.contacts.submit(contact_payload())).data
    second = (await database.contacts.submit(contact_payload(subject="MOA"))).data
    await database.contacts.update_status(first.id, ContactStatus.READ)

    unread = (await database.contacts.list("new")).data
    everything = (await database.contacts.list()).data

    assert [submission.id for submission in unread] == [second.id]
    assert [submission.id for submission in everything] == [second.id, first.id]


@pytest.mark.asyncio
async def test_unknown_status_is_invalid(database: Database) -> None:
    submission = (await database.contacts.submit(contact_payload())).data

    result = await database.contacts.update_status(submission.id, "archived")

    assert result.kind == ErrorKind.INVALID


@pytest.mark.asyncio
async def test_delete_unknown_is_not_found(database: Database) -> None:
    result = await database.contacts.delete("nope")

    assert result.kind == ErrorKind.NOT_FOUND
    assert result.error == "Contact submission not found"
