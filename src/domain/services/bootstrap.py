from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from src.core.errors import handle_errors
from src.domain.seed_data import build_seed_dataset

if TYPE_CHECKING:
    from src.infrastructure.repositories import (
        AnnouncementRepository,
        DocumentRepository,
        EvaluationRepository,
        LogbookRepository,
        UserRepository,
    )

logger = structlog.get_logger(__name__)


class BootstrapLoader:
    """Fills empty partitions with the canonical dataset.

    Each partition is checked independently; one that already holds records is
    left exactly as it is, so calling :meth:`initialize` again is a no-op.
    """

    def __init__(
        self,
        users: UserRepository,
        announcements: AnnouncementRepository,
        logbook: LogbookRepository,
        documents: DocumentRepository,
        evaluations: EvaluationRepository,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.users = users
        self.announcements = announcements
        self.logbook = logbook
        self.documents = documents
        self.evaluations = evaluations
        self.clock = clock or (lambda: datetime.now(UTC))

    @handle_errors("bootstrap.initialize")
    async def initialize(self) -> list[str]:
        """Seed every empty partition and return the keys that were written."""
        dataset = build_seed_dataset(self.clock())
        plan = [
            (self.users, dataset.users),
            (self.announcements, dataset.announcements),
            (self.logbook, dataset.logbook_entries),
            (self.documents, dataset.documents),
            (self.evaluations, dataset.evaluations),
        ]

        seeded: list[str] = []
        for repository, records in plan:
            if await repository.seed(records):
                seeded.append(repository.key)

        if seeded:
            await logger.ainfo("bootstrap_seeded", partitions=seeded)
        else:
            await logger.adebug("bootstrap_skipped")
        return seeded
