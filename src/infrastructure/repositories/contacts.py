from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from src.core.errors import ValidationFailedError, handle_errors
from src.domain.models import ContactStatus, ContactSubmission

from .base import PartitionRepository

logger = structlog.get_logger(__name__)


class ContactRepository(PartitionRepository[ContactSubmission]):
    """Messages sent through the public contact form."""

    model = ContactSubmission
    partition = "contact_submissions"
    label = "Contact submission"
    order_field = "timestamp"

    @handle_errors("contacts.submit")
    async def submit(self, data: Mapping[str, Any]) -> ContactSubmission:
        await self._pause()
        submission = self._build(
            data,
            {"id": self.id_factory(), "timestamp": self.clock(), "status": ContactStatus.NEW},
        )
        return await self._insert(submission)

    @handle_errors("contacts.get")
    async def get(self, submission_id: str) -> ContactSubmission:
        await self._pause()
        return await self._find(submission_id)

    @handle_errors("contacts.list")
    async def list(self, status: ContactStatus | str | None = None) -> list[ContactSubmission]:
        await self._pause()
        if status is None:
            return await self._select()
        wanted = _contact_status(status)
        return await self._select(lambda submission: submission.status == wanted)

    @handle_errors("contacts.update_status")
    async def update_status(
        self, submission_id: str, status: ContactStatus | str
    ) -> ContactSubmission:
        await self._pause()
        return await self._apply(submission_id, {"status": _contact_status(status)})

    @handle_errors("contacts.respond")
    async def respond(
        self, submission_id: str, response: str, responded_by: str
    ) -> ContactSubmission:
        await self._pause()
        submission = await self._apply(
            submission_id,
            {
                "status": ContactStatus.RESPONDED,
                "response": response,
                "responded_by": responded_by,
                "responded_at": self.clock(),
            },
        )
        await logger.ainfo(
            "contact_submission_responded", submission_id=submission_id, responded_by=responded_by
        )
        return submission

    @handle_errors("contacts.delete")
    async def delete(self, submission_id: str) -> bool:
        await self._pause()
        return await self._remove(submission_id)


def _contact_status(status: ContactStatus | str) -> ContactStatus:
    try:
        return ContactStatus(status)
    except ValueError as exc:
        raise ValidationFailedError(f"Unknown contact status: {status}") from exc
