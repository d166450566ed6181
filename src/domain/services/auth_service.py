"""Sign-in and registration on top of the user repository.

There is no process-wide "current user": a successful login or registration
returns a :class:`SessionContext` that the caller holds and passes along.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog
from src.core.auth import Role
from src.core.errors import ConflictError, ValidationFailedError, handle_errors
from src.domain.models import SessionContext, UserStatus

if TYPE_CHECKING:
    from src.infrastructure.repositories import UserRepository

logger = structlog.get_logger(__name__)

SELF_REGISTRATION_ROLES = (Role.STUDENT, Role.COORDINATOR, Role.SUPERVISOR)
PROFILE_FIELDS = ("student_id", "company", "department", "phone")


class UserInactiveError(ConflictError):
    """Raised when a pending or suspended account tries to sign in."""


class AuthService:
    """Service for login and self-registration."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    @handle_errors("auth.login")
    async def login(self, email: str) -> SessionContext:
        await logger.ainfo("login_attempt", email=email)
        user = (await self.users.find_by_email(email)).unwrap()

        if user.status != UserStatus.ACTIVE:
            await logger.awarning("login_inactive_user", email=email, status=user.status.value)
            raise UserInactiveError(f"Account is {user.status.value}")

        user = (await self.users.record_login(user.id)).unwrap()
        await logger.ainfo("login_success", user_id=user.id)
        return SessionContext.from_user(user)

    @handle_errors("auth.register")
    async def register(
        self,
        *,
        name: str,
        email: str,
        role: Role | str = Role.STUDENT,
        profile: Mapping[str, Any] | None = None,
    ) -> SessionContext:
        """Create an active account and sign it in. Admins cannot self-register."""
        await logger.ainfo("register_attempt", email=email, role=getattr(role, "value", role))
        try:
            user_role = Role(role)
        except ValueError as exc:
            raise ValidationFailedError(f"Invalid role: {role}") from exc
        if user_role not in SELF_REGISTRATION_ROLES:
            raise ValidationFailedError(f"Role {user_role.value} cannot self-register")

        extra = {key: value for key, value in (profile or {}).items() if key in PROFILE_FIELDS}
        user = (
            await self.users.create(
                {
                    "name": name,
                    "email": email,
                    "role": user_role,
                    "status": UserStatus.ACTIVE,
                    **extra,
                }
            )
        ).unwrap()

        await logger.ainfo("register_success", user_id=user.id)
        return SessionContext.from_user(user)

    @handle_errors("auth.resolve")
    async def resolve(self, user_id: str) -> SessionContext:
        """Rebuild a session context from the stored user, e.g. after a profile edit."""
        user = (await self.users.get(user_id)).unwrap()
        return SessionContext.from_user(user)
