from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from src.core.errors import ConflictError, handle_errors
from src.domain.models import Document, DocumentStatus

from .base import PartitionRepository

logger = structlog.get_logger(__name__)


def _require_pending(document: Document) -> None:
    if document.status != DocumentStatus.PENDING:
        raise ConflictError(
            f"Only pending documents can be reviewed (document is {document.status.value})"
        )


class DocumentRepository(PartitionRepository[Document]):
    """Uploaded OJT paperwork. File contents live elsewhere; ``fileUrl`` is opaque.

    Status and approval stamps change only through ``approve`` and ``reject``.
    """

    model = Document
    partition = "documents"
    label = "Document"
    order_field = "upload_date"

    @handle_errors("documents.upload")
    async def upload(self, data: Mapping[str, Any]) -> Document:
        await self._pause()
        document = self._build(
            self._client_fields(data),
            {
                "id": self.id_factory(),
                "upload_date": self.clock(),
                "status": DocumentStatus.PENDING,
            },
        )
        return await self._insert(document)

    @handle_errors("documents.get")
    async def get(self, document_id: str) -> Document:
        await self._pause()
        return await self._find(document_id)

    @handle_errors("documents.list_for_user")
    async def list_for_user(self, user_id: str) -> list[Document]:
        await self._pause()
        return await self._select(lambda document: document.user_id == user_id)

    @handle_errors("documents.list_for_review")
    async def list_for_review(self) -> list[Document]:
        await self._pause()
        return await self._select(lambda document: document.status == DocumentStatus.PENDING)

    @handle_errors("documents.update")
    async def update(self, document_id: str, updates: Mapping[str, Any]) -> Document:
        await self._pause()
        return await self._apply(document_id, self._client_changes(updates))

    @handle_errors("documents.delete")
    async def delete(self, document_id: str) -> bool:
        await self._pause()
        return await self._remove(document_id)

    @handle_errors("documents.approve")
    async def approve(
        self, document_id: str, approved_by: str, comments: str | None = None
    ) -> Document:
        await self._pause()
        document = await self._apply(
            document_id,
            {
                "status": DocumentStatus.APPROVED,
                "approved_by": approved_by,
                "approval_date": self.clock(),
                "comments": comments,
            },
            guard=_require_pending,
        )
        await logger.ainfo("document_approved", document_id=document_id, approved_by=approved_by)
        return document

    @handle_errors("documents.reject")
    async def reject(
        self, document_id: str, rejected_by: str, comments: str | None = None
    ) -> Document:
        """Reject a pending document; the reviewer is stored in ``approvedBy``."""
        await self._pause()
        document = await self._apply(
            document_id,
            {
                "status": DocumentStatus.REJECTED,
                "approved_by": rejected_by,
                "approval_date": self.clock(),
                "comments": comments,
            },
            guard=_require_pending,
        )
        await logger.ainfo("document_rejected", document_id=document_id, rejected_by=rejected_by)
        return document
