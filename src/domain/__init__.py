from src.domain.models import (
    Announcement,
    ContactSubmission,
    Document,
    Evaluation,
    LogbookEntry,
    SessionContext,
    StudentProgress,
    SystemStatistics,
    User,
)

__all__ = [
    "Announcement",
    "ContactSubmission",
    "Document",
    "Evaluation",
    "LogbookEntry",
    "SessionContext",
    "StudentProgress",
    "SystemStatistics",
    "User",
]
