from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.core.auth import Role
from src.core.errors import ValidationFailedError, handle_errors
from src.domain.models import ALL_ROLES, Announcement

from .base import PartitionRepository


class AnnouncementRepository(PartitionRepository[Announcement]):
    """Announcements. ``authorName`` is a snapshot taken when the announcement is created."""

    model = Announcement
    partition = "announcements"
    label = "Announcement"
    order_field = "created_at"
    touch_field = "updatedAt"

    @handle_errors("announcements.create")
    async def create(self, data: Mapping[str, Any]) -> Announcement:
        await self._pause()
        now = self.clock()
        announcement = self._build(
            {"is_active": True, **data},
            {"id": self.id_factory(), "created_at": now, "updated_at": now},
        )
        return await self._insert(announcement)

    @handle_errors("announcements.get")
    async def get(self, announcement_id: str) -> Announcement:
        await self._pause()
        return await self._find(announcement_id)

    @handle_errors("announcements.list")
    async def list(self, target_role: Role | str | None = None) -> list[Announcement]:
        """Active announcements, newest first, optionally only those a role can see."""
        await self._pause()
        if target_role is None:
            return await self._select(lambda announcement: announcement.is_active)
        role = target_role.value if isinstance(target_role, Role) else str(target_role)
        if role != ALL_ROLES and not Role.contains(role):
            raise ValidationFailedError(f"Unknown role: {role}")
        return await self._select(lambda announcement: announcement.is_visible_to(role))

    @handle_errors("announcements.update")
    async def update(self, announcement_id: str, updates: Mapping[str, Any]) -> Announcement:
        await self._pause()
        return await self._apply(announcement_id, self._client_changes(updates))

    @handle_errors("announcements.deactivate")
    async def deactivate(self, announcement_id: str) -> Announcement:
        """Soft delete: the announcement stays stored but drops out of listings."""
        await self._pause()
        return await self._apply(announcement_id, self._client_changes({"is_active": False}))

    @handle_errors("announcements.delete")
    async def delete(self, announcement_id: str) -> bool:
        await self._pause()
        return await self._remove(announcement_id)
