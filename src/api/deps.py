from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from src.core.auth import Role, TokenError, create_access_token, decode_access_token
from src.core.errors import ErrorKind, Result
from src.domain.models import SessionContext
from src.infrastructure.database import Database

T = TypeVar("T")

bearer_scheme = HTTPBearer(auto_error=False)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.STORAGE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_database(request: Request) -> Database:
    """Return the facade created during application startup."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database not available"
        )
    return database


def unwrap_or_raise(result: Result[T]) -> T:
    """Hand back the payload or translate the error kind into an HTTP error."""
    if result.error is not None:
        kind = result.kind or ErrorKind.UNKNOWN
        raise HTTPException(status_code=_STATUS_BY_KIND[kind], detail=result.error)
    return result.data  # type: ignore[return-value]


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> SessionContext:
    """Resolve the caller's session from a bearer token."""
    if credentials is None:
        raise _unauthorized("Missing bearer token")

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError as exc:
        raise _unauthorized(str(exc)) from exc

    return SessionContext(
        user_id=payload["sub"],
        name=payload.get("name", ""),
        email=payload.get("email", ""),
        role=Role(payload["role"]),
    )


def require_roles(
    required_roles: Sequence[Role | str],
) -> Callable[[SessionContext], SessionContext]:
    """Dependency factory enforcing that the caller's role tag is one of ``required_roles``."""
    names = [role.value if isinstance(role, Role) else role for role in required_roles]
    invalid_roles = [name for name in names if not Role.contains(name)]
    if invalid_roles:
        joined_roles = ", ".join(invalid_roles)
        raise ValueError(f"Unsupported role(s) requested: {joined_roles}")

    required = {Role(name) for name in names}

    def dependency(
        session: SessionContext = Depends(get_current_session),  # noqa: B008
    ) -> SessionContext:
        if not session.has_role(*required):
            raise _forbidden("Insufficient role privileges")
        return session

    return dependency


def issue_session_token(session: SessionContext) -> str:
    return create_access_token(
        session.user_id, role=session.role.value, name=session.name, email=session.email
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


STAFF_ROLES = (Role.COORDINATOR, Role.SUPERVISOR, Role.ADMIN)


def ensure_self_or_roles(session: SessionContext, user_id: str, *roles: Role) -> None:
    """Allow the owner of ``user_id`` or any caller holding one of ``roles``."""
    if session.user_id != user_id and not session.has_role(*roles):
        raise _forbidden("Not allowed to access another user's records")
