"""Unit tests for logbook entries, reviews and bulk approval."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from src.core.errors import ErrorKind
from src.domain.models import LogbookStatus
from src.infrastructure.database import Database


def entry_payload(user_id: str = "student-1", **overrides) -> dict:
    payload = {
        "user_id": user_id,
        "date": datetime(2024, 3, 14, tzinfo=UTC),
        "title": "Set up CI pipeline",
        "description": "Configured the build",
        "activities": ["CI", "Docker"],
        "hours_worked": 8,
    }
    payload.update(overrides)
    return payload


class TestCreateAndList:
    @pytest.mark.asyncio
    async def test_create_defaults_to_submitted(self, database: Database) -> None:
        result = await database.logbook.create(entry_payload())

        entry = result.data
        assert entry.status == LogbookStatus.SUBMITTED
        assert entry.created_at == entry.updated_at

    @pytest.mark.asyncio
    async def test_negative_hours_are_invalid(self, database: Database) -> None:
        result = await database.logbook.create(entry_payload(hours_worked=-1))

        assert result.kind == ErrorKind.INVALID

    @pytest.mark.asyncio
    async def test_list_for_user_newest_first(self, database: Database) -> None:
        first = (await database.logbook.create(entry_payload(title="first"))).data
        await database.logbook.create(entry_payload(user_id="someone-else"))
        second = (await database.logbook.create(entry_payload(title="second"))).data

        result = await database.logbook.list_for_user("student-1")

        assert [entry.id for entry in result.data] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_for_review_only_submitted(self, seeded_database: Database) -> None:
        result = await seeded_database.logbook.list_for_review()

        assert [entry.id for entry in result.data] == ["3"]

    @pytest.mark.asyncio
    async def test_update_refreshes_updated_at(self, database: Database) -> None:
        entry = (await database.logbook.create(entry_payload())).data

        result = await database.logbook.update(entry.id, {"hours_worked": 6})

        assert result.data.hours_worked == 6
        assert result.data.updated_at > entry.updated_at
        assert result.data.created_at == entry.created_at


class TestReview:
    @pytest.mark.asyncio
    async def test_approve_submitted_entry(self, database: Database) -> None:
        entry = (await database.logbook.create(entry_payload())).data

        result = await database.logbook.review(
            entry.id, LogbookStatus.APPROVED, feedback="Nice", reviewer_id="sup-1"
        )

        assert result.data.status == LogbookStatus.APPROVED
        assert result.data.feedback == "Nice"
        assert result.data.reviewed_by == "sup-1"

    @pytest.mark.asyncio
    async def test_second_review_is_conflict_and_leaves_entry(self, database: Database) -> None:
        entry = (await database.logbook.create(entry_payload())).data
        await database.logbook.review(entry.id, "rejected", feedback="Too vague")

        result = await database.logbook.review(entry.id, "approved")

        assert result.kind == ErrorKind.CONFLICT
        stored = (await database.logbook.get(entry.id)).data
        assert stored.status == LogbookStatus.REJECTED
        assert stored.feedback == "Too vague"

    @pytest.mark.asyncio
    async def test_review_to_draft_is_invalid(self, database: Database) -> None:
        entry = (await database.logbook.create(entry_payload())).data

        result = await database.logbook.review(entry.id, "draft")

        assert result.kind == ErrorKind.INVALID

    @pytest.mark.asyncio
    async def test_review_unknown_entry_is_not_found(self, database: Database) -> None:
        result = await database.logbook.review("nope", "approved")

        assert result.kind == ErrorKind.NOT_FOUND
        assert result.error == "Logbook entry not found"


class TestBulkApprove:
    @pytest.mark.asyncio
    async def test_approves_submitted_and_skips_the_rest(self, database: Database) -> None:
        submitted = (await database.logbook.create(entry_payload())).data
        draft = (await database.logbook.create(entry_payload(status="draft"))).data
        rejected = (await database.logbook.create(entry_payload())).data
        await database.logbook.review(rejected.id, "rejected")

        result = await database.logbook.bulk_approve(
            [submitted.id, draft.id, rejected.id, "missing"], approver_id="coord-1"
        )

        assert [entry.id for entry in result.data] == [submitted.id]
        assert (await database.logbook.get(draft.id)).data.status == LogbookStatus.DRAFT
        assert (await database.logbook.get(rejected.id)).data.status == LogbookStatus.REJECTED
        approved = (await database.logbook.get(submitted.id)).data
        assert approved.status == LogbookStatus.APPROVED
        assert approved.reviewed_by == "coord-1"

    @pytest.mark.asyncio
    async def test_nothing_to_approve_returns_empty(self, database: Database) -> None:
        result = await database.logbook.bulk_approve(["missing"], approver_id="coord-1")

        assert result.ok
        assert result.data == []


class TestStatusGuards:
    @pytest.mark.asyncio
    async def test_create_cannot_start_reviewed(self, database: Database) -> None:
        result = await database.logbook.create(entry_payload(status="approved"))

        assert result.kind == ErrorKind.INVALID
        assert (await database.logbook.list_all()).data == []

    @pytest.mark.asyncio
    async def test_create_drops_review_stamps(self, database: Database) -> None:
        result = await database.logbook.create(
            entry_payload(feedback="Self praise", reviewed_by="student-1")
        )

        assert result.data.feedback is None
        assert result.data.reviewed_by is None

    @pytest.mark.asyncio
    async def test_draft_can_be_submitted(self, database: Database) -> None:
        draft = (await database.logbook.create(entry_payload(status="draft"))).data

        result = await database.logbook.update(draft.id, {"status": "submitted"})

        assert result.data.status == LogbookStatus.SUBMITTED

    @pytest.mark.asyncio
    async def test_update_cannot_approve_rejected_entry(self, database: Database) -> None:
        entry = (await database.logbook.create(entry_payload())).data
        await database.logbook.review(entry.id, "rejected", feedback="Too vague")

        result = await database.logbook.update(entry.id, {"status": LogbookStatus.APPROVED})

        assert result.kind == ErrorKind.INVALID
        assert (await database.logbook.get(entry.id)).data.status == LogbookStatus.REJECTED

    @pytest.mark.asyncio
    async def test_approved_entry_cannot_be_reopened(self, database: Database) -> None:
        entry = (await database.logbook.create(entry_payload())).data
        approved = (await database.logbook.review(entry.id, "approved", reviewer_id="sup-1")).data

        reopened = await database.logbook.update(entry.id, {"status": "submitted"})
        padded = await database.logbook.update(entry.id, {"hours_worked": 400})

        assert reopened.kind == ErrorKind.CONFLICT
        assert padded.kind == ErrorKind.CONFLICT
        assert (await database.logbook.get(entry.id)).data == approved

    @pytest.mark.asyncio
    async def test_update_ignores_review_stamps(self, database: Database) -> None:
        entry = (await database.logbook.create(entry_payload())).data

        result = await database.logbook.update(
            entry.id, {"reviewed_by": "student-1", "feedback": "Approved by me"}
        )

        assert result.data.reviewed_by is None
        assert result.data.feedback is None
        assert result.data.status == LogbookStatus.SUBMITTED
