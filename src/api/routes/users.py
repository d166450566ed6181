from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from src.api.deps import (
    STAFF_ROLES,
    ensure_self_or_roles,
    get_current_session,
    get_database,
    require_roles,
    unwrap_or_raise,
)
from src.api.schemas.records import UserCreate, UserUpdate
from src.core.auth import Role
from src.domain.models import SessionContext, User
from src.infrastructure.database import Database

router = APIRouter(prefix="/users", tags=["Users"])

MANAGERS = (Role.COORDINATOR, Role.ADMIN)


@router.get("", response_model=list[User])
async def list_users(
    role: Role | None = Query(default=None),
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(STAFF_ROLES)),
) -> list[User]:
    """List users in registration order, optionally filtered by role."""
    return unwrap_or_raise(await database.users.list(role))


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(MANAGERS)),
) -> User:
    """Create an account on someone's behalf; any role, any initial status."""
    return unwrap_or_raise(await database.users.create(payload.model_dump(exclude_none=True)))


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> User:
    ensure_self_or_roles(session, user_id, *STAFF_ROLES)
    return unwrap_or_raise(await database.users.get(user_id))


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> User:
    ensure_self_or_roles(session, user_id, Role.ADMIN)
    return unwrap_or_raise(
        await database.users.update(user_id, payload.model_dump(exclude_unset=True))
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles([Role.ADMIN])),
) -> Response:
    unwrap_or_raise(await database.users.delete(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/approve", response_model=User)
async def approve_user(
    user_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(MANAGERS)),
) -> User:
    """Activate an account waiting for approval."""
    return unwrap_or_raise(await database.users.approve(user_id))


@router.post("/{user_id}/suspend", response_model=User)
async def suspend_user(
    user_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles(MANAGERS)),
) -> User:
    return unwrap_or_raise(await database.users.suspend(user_id))


@router.get("/{user_id}/students", response_model=list[User])
async def list_assigned_students(
    user_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(STAFF_ROLES)),
) -> list[User]:
    """Students a supervisor is responsible for."""
    ensure_self_or_roles(session, user_id, *MANAGERS)
    return unwrap_or_raise(await database.users.list_assigned_students(user_id))
