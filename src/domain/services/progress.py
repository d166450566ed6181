from __future__ import annotations

from typing import TYPE_CHECKING

from src.core.errors import handle_errors
from src.domain.models import (
    DocumentProgress,
    DocumentStatus,
    DocumentType,
    EvaluationProgress,
    EvaluationStatus,
    LogbookProgress,
    LogbookStatus,
    StudentProgress,
)

if TYPE_CHECKING:
    from src.infrastructure.repositories import (
        DocumentRepository,
        EvaluationRepository,
        LogbookRepository,
    )

REQUIRED_DOCUMENT_TYPES = (DocumentType.MOA, DocumentType.WAIVER)


class ProgressService:
    """Per-student completion summary. Only approved logbook hours count."""

    def __init__(
        self,
        logbook: LogbookRepository,
        documents: DocumentRepository,
        evaluations: EvaluationRepository,
        *,
        required_hours: int = 486,
    ) -> None:
        self.logbook = logbook
        self.documents = documents
        self.evaluations = evaluations
        self.required_hours = required_hours

    @handle_errors("progress.get_student_progress")
    async def get_student_progress(self, student_id: str) -> StudentProgress:
        entries = (await self.logbook.list_for_user(student_id)).unwrap()
        documents = (await self.documents.list_for_user(student_id)).unwrap()
        evaluations = (await self.evaluations.list_for_student(student_id)).unwrap()

        approved_entries = [e for e in entries if e.status == LogbookStatus.APPROVED]
        total_hours = sum(e.hours_worked for e in approved_entries)
        completion = (
            (200 * total_hours + self.required_hours) // (2 * self.required_hours)
            if self.required_hours
            else 100
        )

        approved_types = {d.type for d in documents if d.status == DocumentStatus.APPROVED}

        return StudentProgress(
            total_hours=total_hours,
            required_hours=self.required_hours,
            completion_percentage=completion,
            logbook_entries=LogbookProgress(
                total=len(entries),
                approved=len(approved_entries),
                pending=sum(1 for e in entries if e.status == LogbookStatus.SUBMITTED),
                rejected=sum(1 for e in entries if e.status == LogbookStatus.REJECTED),
            ),
            documents=DocumentProgress(
                required=len(REQUIRED_DOCUMENT_TYPES),
                submitted=sum(1 for t in REQUIRED_DOCUMENT_TYPES if t in approved_types),
                pending=sum(1 for d in documents if d.status == DocumentStatus.PENDING),
            ),
            evaluations=EvaluationProgress(
                total=len(evaluations),
                completed=sum(1 for e in evaluations if e.status == EvaluationStatus.APPROVED),
            ),
            # list_for_user is newest first
            last_activity=entries[0].created_at if entries else None,
        )
