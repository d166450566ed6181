from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from src.core.auth import Role
from src.core.errors import ConflictError, ValidationFailedError, handle_errors
from src.domain.models import User, UserStatus

from .base import PartitionRepository

logger = structlog.get_logger(__name__)


class UserRepository(PartitionRepository[User]):
    """Users partition. Email addresses are unique across all users."""

    model = User
    partition = "users"
    label = "User"
    order_field = "registration_date"

    def __init__(self, *args: Any, assigned_students_limit: int = 3, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.assigned_students_limit = assigned_students_limit

    @staticmethod
    def _same_email(user: User, email: str) -> bool:
        return user.email == email.strip().lower()

    @handle_errors("users.create")
    async def create(self, data: Mapping[str, Any]) -> User:
        await self._pause()
        now = self.clock()
        user = self._build(
            {"status": UserStatus.ACTIVE, **data},
            {"id": self.id_factory(), "registration_date": now},
        )

        view = await self._load()
        if any(self._same_email(existing, user.email) for existing in view.records):
            raise ConflictError("User with this email already exists")

        view.records.append(user)
        await self._save(view, "Failed to save user data")
        await logger.ainfo("user_created", user_id=user.id, role=user.role.value)
        return user

    @handle_errors("users.get")
    async def get(self, user_id: str) -> User:
        await self._pause()
        return await self._find(user_id)

    @handle_errors("users.find_by_email")
    async def find_by_email(self, email: str) -> User:
        await self._pause()
        matches = await self._select(lambda user: self._same_email(user, email))
        if not matches:
            raise self._not_found()
        return matches[0]

    @handle_errors("users.update")
    async def update(self, user_id: str, updates: Mapping[str, Any]) -> User:
        await self._pause()
        changes = self._client_changes(updates)
        view = await self._load()
        index = view.index_of(user_id)
        if index == -1:
            raise self._not_found()

        if "email" in changes:
            email = str(changes["email"])
            if any(
                self._same_email(other, email) for other in view.records if other.id != user_id
            ):
                raise ConflictError("User with this email already exists")

        view.records[index] = self._merge(view.records[index], changes)
        await self._save(view, "Failed to update user data")
        return view.records[index]

    @handle_errors("users.list")
    async def list(self, role: Role | str | None = None) -> list[User]:
        await self._pause()
        if role is None:
            return await self._select(newest_first=False)
        try:
            wanted = Role(role)
        except ValueError as exc:
            raise ValidationFailedError(f"Unknown role: {role}") from exc
        return await self._select(lambda user: user.role == wanted, newest_first=False)

    @handle_errors("users.delete")
    async def delete(self, user_id: str) -> bool:
        await self._pause()
        return await self._remove(user_id)

    @handle_errors("users.approve")
    async def approve(self, user_id: str) -> User:
        await self._pause()

        def guard(user: User) -> None:
            if user.status != UserStatus.PENDING_APPROVAL:
                raise ConflictError(f"Cannot approve a user whose status is {user.status.value}")

        user = await self._apply(user_id, {"status": UserStatus.ACTIVE}, guard=guard)
        await logger.ainfo("user_approved", user_id=user_id)
        return user

    @handle_errors("users.suspend")
    async def suspend(self, user_id: str) -> User:
        await self._pause()

        def guard(user: User) -> None:
            if user.status not in (UserStatus.ACTIVE, UserStatus.PENDING_APPROVAL):
                raise ConflictError(f"Cannot suspend a user whose status is {user.status.value}")

        user = await self._apply(user_id, {"status": UserStatus.SUSPENDED}, guard=guard)
        await logger.ainfo("user_suspended", user_id=user_id)
        return user

    @handle_errors("users.record_login")
    async def record_login(self, user_id: str) -> User:
        await self._pause()
        return await self._apply(user_id, {"last_login": self.clock()})

    @handle_errors("users.list_assigned_students")
    async def list_assigned_students(self, supervisor_id: str) -> list[User]:
        """Students supervised by ``supervisor_id``.

        There is no assignment record yet, so every supervisor sees the first
        active students in registration order, capped by the configured limit.
        """
        await self._pause()
        students = await self._select(
            lambda user: user.role == Role.STUDENT and user.status == UserStatus.ACTIVE,
            newest_first=False,
        )
        await logger.adebug(
            "assigned_students_listed", supervisor_id=supervisor_id, count=len(students)
        )
        return students[: self.assigned_students_limit]
