from .backends import InMemoryBackend, KeyValueBackend, SqlBackend, StorageQuotaExceeded
from .record_store import RecordStore

__all__ = [
    "InMemoryBackend",
    "KeyValueBackend",
    "RecordStore",
    "SqlBackend",
    "StorageQuotaExceeded",
]
