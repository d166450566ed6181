from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from src.api.deps import get_database, require_roles, unwrap_or_raise
from src.api.schemas.records import ContactCreate, ContactResponseRequest, ContactStatusUpdate
from src.core.auth import Role
from src.domain.models import ContactStatus, ContactSubmission, SessionContext
from src.infrastructure.database import Database

router = APIRouter(prefix="/contact", tags=["Contact"])

HANDLERS = (Role.COORDINATOR, Role.ADMIN)


@router.post("", response_model=ContactSubmission, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: ContactCreate,
    database: Database = Depends(get_database),
) -> ContactSubmission:
    """Public contact form; no session required."""
    return unwrap_or_raise(await database.contacts.submit(payload.model_dump()))


@router.get("", response_model=list[ContactSubmission])
async def list_submissions(
    status_filter: ContactStatus | None = Query(default=None, alias="status"),
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(HANDLERS)),
) -> list[ContactSubmission]:
    return unwrap_or_raise(await database.contacts.list(status_filter))


@router.get("/{submission_id}", response_model=ContactSubmission)
async def get_submission(
    submission_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(HANDLERS)),
) -> ContactSubmission:
    return unwrap_or_raise(await database.contacts.get(submission_id))


@router.patch("/{submission_id}/status", response_model=ContactSubmission)
async def update_submission_status(
    submission_id: str,
    payload: ContactStatusUpdate,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(HANDLERS)),
) -> ContactSubmission:
    return unwrap_or_raise(await database.contacts.update_status(submission_id, payload.status))


@router.post("/{submission_id}/respond", response_model=ContactSubmission)
async def respond_to_submission(
    submission_id: str,
    payload: ContactResponseRequest,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(HANDLERS)),
) -> ContactSubmission:
    return unwrap_or_raise(
        await database.contacts.respond(submission_id, payload.response, session.user_id)
    )


@router.delete("/{submission_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_submission(
    submission_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles([Role.ADMIN])),
) -> Response:
    unwrap_or_raise(await database.contacts.delete(submission_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
