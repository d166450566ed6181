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
from src.api.schemas.records import (
    BulkApproveRequest,
    LogbookCreate,
    LogbookReview,
    LogbookUpdate,
)
from src.core.auth import Role
from src.domain.models import LogbookEntry, SessionContext
from src.infrastructure.database import Database

router = APIRouter(prefix="/logbook", tags=["Logbook"])

REVIEWERS = (Role.SUPERVISOR, Role.COORDINATOR, Role.ADMIN)


@router.post("", response_model=LogbookEntry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    payload: LogbookCreate,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles([Role.STUDENT])),
) -> LogbookEntry:
    """Record a day of work for the signed-in student."""
    data = {**payload.model_dump(), "user_id": session.user_id}
    return unwrap_or_raise(await database.logbook.create(data))


@router.get("", response_model=list[LogbookEntry])
async def list_entries(
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(STAFF_ROLES)),
) -> list[LogbookEntry]:
    return unwrap_or_raise(await database.logbook.list_all())


@router.get("/review", response_model=list[LogbookEntry])
async def list_for_review(
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(REVIEWERS)),
) -> list[LogbookEntry]:
    """Entries awaiting review, newest first."""
    return unwrap_or_raise(await database.logbook.list_for_review())


@router.post("/bulk-approve", response_model=list[LogbookEntry])
async def bulk_approve(
    payload: BulkApproveRequest,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(REVIEWERS)),
) -> list[LogbookEntry]:
    """Approve the submitted entries among the given ids; returns those approved."""
    approved = await database.logbook.bulk_approve(payload.entry_ids, session.user_id)
    return unwrap_or_raise(approved)


@router.get("/users/{user_id}", response_model=list[LogbookEntry])
async def list_for_user(
    user_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> list[LogbookEntry]:
    ensure_self_or_roles(session, user_id, *STAFF_ROLES)
    return unwrap_or_raise(await database.logbook.list_for_user(user_id))


@router.get("/{entry_id}", response_model=LogbookEntry)
async def get_entry(
    entry_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> LogbookEntry:
    entry = unwrap_or_raise(await database.logbook.get(entry_id))
    ensure_self_or_roles(session, entry.user_id, *STAFF_ROLES)
    return entry


@router.patch("/{entry_id}", response_model=LogbookEntry)
async def update_entry(
    entry_id: str,
    payload: LogbookUpdate,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> LogbookEntry:
    entry = unwrap_or_raise(await database.logbook.get(entry_id))
    ensure_self_or_roles(session, entry.user_id, Role.ADMIN)
    return unwrap_or_raise(
        await database.logbook.update(entry_id, payload.model_dump(exclude_unset=True))
    )


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> Response:
    entry = unwrap_or_raise(await database.logbook.get(entry_id))
    ensure_self_or_roles(session, entry.user_id, Role.ADMIN)
    unwrap_or_raise(await database.logbook.delete(entry_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{entry_id}/review", response_model=LogbookEntry)
async def review_entry(
    entry_id: str,
    payload: LogbookReview,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(REVIEWERS)),
) -> LogbookEntry:
    """Approve or reject a submitted entry. Reviewing twice is a conflict."""
    return unwrap_or_raise(
        await database.logbook.review(
            entry_id, payload.status, feedback=payload.feedback, reviewer_id=session.user_id
        )
    )
