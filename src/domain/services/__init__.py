"""Domain services."""

from src.domain.services.auth_service import AuthService, UserInactiveError
from src.domain.services.bootstrap import BootstrapLoader
from src.domain.services.progress import ProgressService
from src.domain.services.statistics import StatisticsService

__all__ = [
    "AuthService",
    "BootstrapLoader",
    "ProgressService",
    "StatisticsService",
    "UserInactiveError",
]
