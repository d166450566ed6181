from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt
from src.core.config import get_settings


class TokenError(Exception):
    """Raised when a session token cannot be decoded or validated."""


class Role(str, Enum):
    STUDENT = "student"
    COORDINATOR = "coordinator"
    SUPERVISOR = "supervisor"
    ADMIN = "admin"

    @classmethod
    def contains(cls, value: str) -> bool:
        return value in {role.value for role in cls}


def create_access_token(
    subject: str,
    *,
    role: str,
    name: str | None = None,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a session token carrying the user's id and role tag."""
    settings = get_settings()

    if role not in settings.allowed_roles:
        raise TokenError(f"Unsupported role: {role}")

    now = datetime.now(UTC)
    ttl = expires_delta or timedelta(seconds=settings.access_token_ttl_seconds)
    payload = {
        "sub": subject,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
        "iss": settings.app_name,
    }

    if name:
        payload["name"] = name
    if email:
        payload["email"] = email

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Decode and validate a session token."""
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "role", "exp"]},
        )
    except jwt.PyJWTError as exc:  # pragma: no cover - third-party raises numerous subclasses
        raise TokenError("Invalid token") from exc

    if not Role.contains(payload.get("role", "")):
        raise TokenError(f"Unsupported role: {payload.get('role')}")
    return payload
