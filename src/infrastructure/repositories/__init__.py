from .announcements import AnnouncementRepository
from .base import PartitionRepository, PartitionView
from .contacts import ContactRepository
from .documents import DocumentRepository
from .evaluations import EvaluationRepository
from .logbook import LogbookRepository
from .users import UserRepository

__all__ = [
    "AnnouncementRepository",
    "ContactRepository",
    "DocumentRepository",
    "EvaluationRepository",
    "LogbookRepository",
    "PartitionRepository",
    "PartitionView",
    "UserRepository",
]
