from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from src.api.deps import get_current_session, get_database, require_roles, unwrap_or_raise
from src.api.schemas.records import AnnouncementCreate, AnnouncementUpdate
from src.core.auth import Role
from src.domain.models import Announcement, SessionContext
from src.infrastructure.database import Database

router = APIRouter(prefix="/announcements", tags=["Announcements"])

PUBLISHERS = (Role.COORDINATOR, Role.ADMIN)


@router.get("", response_model=list[Announcement])
async def list_announcements(
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> list[Announcement]:
    """Active announcements, newest first.

    Publishers see every active announcement; everyone else sees those targeted
    at their role or at all users.
    """
    target_role = None if session.role in PUBLISHERS else session.role
    return unwrap_or_raise(await database.announcements.list(target_role))


@router.post("", response_model=Announcement, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    payload: AnnouncementCreate,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(PUBLISHERS)),
) -> Announcement:
    data = {**payload.model_dump(), "author_id": session.user_id, "author_name": session.name}
    return unwrap_or_raise(await database.announcements.create(data))


@router.get("/{announcement_id}", response_model=Announcement)
async def get_announcement(
    announcement_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(get_current_session),
) -> Announcement:
    return unwrap_or_raise(await database.announcements.get(announcement_id))


@router.patch("/{announcement_id}", response_model=Announcement)
async def update_announcement(
    announcement_id: str,
    payload: AnnouncementUpdate,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(PUBLISHERS)),
) -> Announcement:
    return unwrap_or_raise(
        await database.announcements.update(
            announcement_id, payload.model_dump(exclude_unset=True)
        )
    )


@router.post("/{announcement_id}/deactivate", response_model=Announcement)
async def deactivate_announcement(
    announcement_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(PUBLISHERS)),
) -> Announcement:
    """Hide an announcement from listings without deleting it."""
    return unwrap_or_raise(await database.announcements.deactivate(announcement_id))


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement(
    announcement_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles([Role.ADMIN])),
) -> Response:
    unwrap_or_raise(await database.announcements.delete(announcement_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
