from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from src.core.errors import ConflictError, ValidationFailedError, handle_errors
from src.domain.models import LogbookEntry, LogbookStatus

from .base import PartitionRepository

logger = structlog.get_logger(__name__)

REVIEW_OUTCOMES = (LogbookStatus.APPROVED, LogbookStatus.REJECTED)
EDITABLE_STATUSES = (LogbookStatus.DRAFT, LogbookStatus.SUBMITTED)


class LogbookRepository(PartitionRepository[LogbookEntry]):
    """Student logbook entries; only ``submitted`` entries can be reviewed.

    Create and update move an entry between ``draft`` and ``submitted`` only.
    Approved and rejected entries are closed to edits.
    """

    model = LogbookEntry
    partition = "logbook_entries"
    label = "Logbook entry"
    order_field = "created_at"
    touch_field = "updatedAt"

    @handle_errors("logbook.create")
    async def create(self, data: Mapping[str, Any]) -> LogbookEntry:
        await self._pause()
        now = self.clock()
        fields = self._client_fields(data)
        fields["status"] = _editable_status(fields.get("status", LogbookStatus.SUBMITTED))
        entry = self._build(
            fields,
            {"id": self.id_factory(), "created_at": now, "updated_at": now},
        )
        return await self._insert(entry)

    @handle_errors("logbook.get")
    async def get(self, entry_id: str) -> LogbookEntry:
        await self._pause()
        return await self._find(entry_id)

    @handle_errors("logbook.list_for_user")
    async def list_for_user(self, user_id: str) -> list[LogbookEntry]:
        await self._pause()
        return await self._select(lambda entry: entry.user_id == user_id)

    @handle_errors("logbook.list_all")
    async def list_all(self) -> list[LogbookEntry]:
        await self._pause()
        return await self._select()

    @handle_errors("logbook.list_for_review")
    async def list_for_review(self) -> list[LogbookEntry]:
        """Submitted entries awaiting a coordinator or supervisor, newest first."""
        await self._pause()
        return await self._select(lambda entry: entry.status == LogbookStatus.SUBMITTED)

    @handle_errors("logbook.update")
    async def update(self, entry_id: str, updates: Mapping[str, Any]) -> LogbookEntry:
        await self._pause()
        changes = self._client_changes(updates)
        if "status" in changes:
            changes["status"] = _editable_status(changes["status"])
        return await self._apply(entry_id, changes, guard=_require_open)

    @handle_errors("logbook.delete")
    async def delete(self, entry_id: str) -> bool:
        await self._pause()
        return await self._remove(entry_id)

    @handle_errors("logbook.review")
    async def review(
        self,
        entry_id: str,
        status: LogbookStatus | str,
        feedback: str | None = None,
        reviewer_id: str | None = None,
    ) -> LogbookEntry:
        """Approve or reject a submitted entry.

        A second review of an entry that is already approved or rejected is a
        conflict and leaves the entry unchanged.
        """
        await self._pause()
        outcome = _review_outcome(status)

        def guard(entry: LogbookEntry) -> None:
            if entry.status != LogbookStatus.SUBMITTED:
                raise ConflictError(
                    f"Only submitted entries can be reviewed (entry is {entry.status.value})"
                )

        entry = await self._apply(
            entry_id,
            {
                "status": outcome,
                "feedback": feedback,
                "reviewed_by": reviewer_id,
                "updated_at": self.clock(),
            },
            guard=guard,
        )
        await logger.ainfo(
            "logbook_entry_reviewed",
            entry_id=entry_id,
            status=outcome.value,
            reviewer_id=reviewer_id,
        )
        return entry

    @handle_errors("logbook.bulk_approve")
    async def bulk_approve(self, entry_ids: Iterable[str], approver_id: str) -> list[LogbookEntry]:
        """Approve every submitted entry among ``entry_ids`` in one partition write.

        Unknown ids and entries that are not awaiting review are skipped; the
        result holds only the entries that were approved.
        """
        await self._pause()
        wanted = set(entry_ids)
        view = await self._load()
        now = self.clock()
        approved: list[LogbookEntry] = []

        for index, entry in enumerate(view.records):
            if entry.id in wanted and entry.status == LogbookStatus.SUBMITTED:
                view.records[index] = self._merge(
                    entry,
                    {
                        "status": LogbookStatus.APPROVED,
                        "reviewed_by": approver_id,
                        "updated_at": now,
                    },
                )
                approved.append(view.records[index])

        if approved:
            await self._save(view, "Failed to bulk approve entries")
        await logger.ainfo(
            "logbook_bulk_approved",
            approver_id=approver_id,
            requested=len(wanted),
            approved=len(approved),
        )
        return approved


def _review_outcome(status: LogbookStatus | str) -> LogbookStatus:
    try:
        outcome = LogbookStatus(status)
    except ValueError as exc:
        raise ValidationFailedError(f"Unknown review status: {status}") from exc
    if outcome not in REVIEW_OUTCOMES:
        raise ValidationFailedError("Review status must be approved or rejected")
    return outcome


def _editable_status(status: LogbookStatus | str) -> LogbookStatus:
    try:
        value = LogbookStatus(status)
    except ValueError as exc:
        raise ValidationFailedError(f"Unknown logbook status: {status}") from exc
    if value not in EDITABLE_STATUSES:
        raise ValidationFailedError("Entries can only be saved as draft or submitted")
    return value


def _require_open(entry: LogbookEntry) -> None:
    if entry.status in REVIEW_OUTCOMES:
        raise ConflictError(f"Reviewed entries cannot be edited (entry is {entry.status.value})")
