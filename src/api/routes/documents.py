from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from src.api.deps import (
    STAFF_ROLES,
    ensure_self_or_roles,
    get_current_session,
    get_database,
    require_roles,
    unwrap_or_raise,
)
from src.api.schemas.records import DocumentReview, DocumentUpload
from src.core.auth import Role
from src.domain.models import Document, SessionContext
from src.infrastructure.database import Database

router = APIRouter(prefix="/documents", tags=["Documents"])

APPROVERS = (Role.COORDINATOR, Role.ADMIN)


@router.post("", response_model=Document, status_code=status.HTTP_201_CREATED)
async def upload_document(
    payload: DocumentUpload,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> Document:
    """Register document metadata for the caller; the file itself lives elsewhere."""
    data = {**payload.model_dump(), "user_id": session.user_id}
    return unwrap_or_raise(await database.documents.upload(data))


@router.get("/review", response_model=list[Document])
async def list_for_review(
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(APPROVERS)),
) -> list[Document]:
    return unwrap_or_raise(await database.documents.list_for_review())


@router.get("/users/{user_id}", response_model=list[Document])
async def list_for_user(
    user_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> list[Document]:
    ensure_self_or_roles(session, user_id, *STAFF_ROLES)
    return unwrap_or_raise(await database.documents.list_for_user(user_id))


@router.get("/{document_id}", response_model=Document)
async def get_document(
    document_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> Document:
    document = unwrap_or_raise(await database.documents.get(document_id))
    ensure_self_or_roles(session, document.user_id, *STAFF_ROLES)
    return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> Response:
    document = unwrap_or_raise(await database.documents.get(document_id))
    ensure_self_or_roles(session, document.user_id, Role.ADMIN)
    unwrap_or_raise(await database.documents.delete(document_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{document_id}/approve", response_model=Document)
async def approve_document(
    document_id: str,
    payload: DocumentReview,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(APPROVERS)),
) -> Document:
    return unwrap_or_raise(
        await database.documents.approve(document_id, session.user_id, payload.comments)
    )


@router.post("/{document_id}/reject", response_model=Document)
async def reject_document(
    document_id: str,
    payload: DocumentReview,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(APPROVERS)),
) -> Document:
    return unwrap_or_raise(
        await database.documents.reject(document_id, session.user_id, payload.comments)
    )
