"""Authentication routes - register, login, current session."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, status
from src.api.deps import get_current_session, get_database, issue_session_token, unwrap_or_raise
from src.api.schemas.auth import LoginRequest, RegisterRequest, SessionResponse, TokenResponse
from src.domain.models import SessionContext
from src.infrastructure.database import Database

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_response(session: SessionContext) -> TokenResponse:
    return TokenResponse(
        access_token=issue_session_token(session),
        session=SessionResponse(
            user_id=session.user_id,
            name=session.name,
            email=session.email,
            role=session.role,
            status=session.status.value,
        ),
    )


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an active account and return a session token.",
)
async def register(
    payload: RegisterRequest,
    database: Database = Depends(get_database),
) -> TokenResponse:
    profile = payload.model_dump(
        include={"student_id", "company", "department", "phone"}, exclude_none=True
    )
    session = unwrap_or_raise(
        await database.auth.register(
            name=payload.name, email=payload.email, role=payload.role, profile=profile
        )
    )
    return _token_response(session)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="User login",
    description="Sign in an active account by email and return a session token.",
)
async def login(
    payload: LoginRequest,
    database: Database = Depends(get_database),
) -> TokenResponse:
    session = unwrap_or_raise(await database.auth.login(payload.email))
    return _token_response(session)


@router.get("/me", response_model=SessionResponse, summary="Current session")
async def me(
    current: SessionContext = Depends(get_current_session),
    database: Database = Depends(get_database),
) -> SessionResponse:
    """Return the caller's stored profile, refreshed from the user partition."""
    session = unwrap_or_raise(await database.auth.resolve(current.user_id))
    return SessionResponse(
        user_id=session.user_id,
        name=session.name,
        email=session.email,
        role=session.role,
        status=session.status.value,
    )
