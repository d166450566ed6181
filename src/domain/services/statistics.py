"""System-wide counters for the admin dashboard.

Every call scans the partitions again; nothing is cached or maintained
incrementally, and the scans of different partitions are not isolated from
concurrent writers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from src.core.auth import Role
from src.core.errors import handle_errors
from src.domain.models import DocumentStatus, EvaluationStatus, SystemStatistics, UserStatus

if TYPE_CHECKING:
    from src.infrastructure.repositories import (
        DocumentRepository,
        EvaluationRepository,
        LogbookRepository,
        UserRepository,
    )

logger = structlog.get_logger(__name__)


class StatisticsService:
    """Aggregates counts across the user, logbook, document and evaluation repositories."""

    def __init__(
        self,
        users: UserRepository,
        logbook: LogbookRepository,
        documents: DocumentRepository,
        evaluations: EvaluationRepository,
    ) -> None:
        self.users = users
        self.logbook = logbook
        self.documents = documents
        self.evaluations = evaluations

    @handle_errors("statistics.get_system_stats")
    async def get_system_stats(self, now: datetime | None = None) -> SystemStatistics:
        """Snapshot of the counters; registrations are matched on calendar month and year."""
        now = now or datetime.now(UTC)
        users = (await self.users.list()).unwrap()

        def registered_this_month(registration: datetime) -> bool:
            return registration.year == now.year and registration.month == now.month

        stats = SystemStatistics(
            total_users=len(users),
            active_students=sum(
                1 for u in users if u.role == Role.STUDENT and u.status == UserStatus.ACTIVE
            ),
            total_coordinators=sum(1 for u in users if u.role == Role.COORDINATOR),
            total_supervisors=sum(1 for u in users if u.role == Role.SUPERVISOR),
            total_logbook_entries=await self.logbook.count(),
            pending_documents=await self.documents.count(
                lambda document: document.status == DocumentStatus.PENDING
            ),
            completed_evaluations=await self.evaluations.count(
                lambda evaluation: evaluation.status == EvaluationStatus.APPROVED
            ),
            registrations_this_month=sum(
                1 for u in users if registered_this_month(u.registration_date)
            ),
        )
        await logger.adebug("system_stats_computed", total_users=stats.total_users)
        return stats
