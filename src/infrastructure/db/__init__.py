from . import models  # noqa: F401
from .base import Base
from .models import RecordPartitionModel
from .session import dispose_engine, get_engine, get_session_factory

__all__ = [
    "Base",
    "RecordPartitionModel",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
]
