"""Persistence for propdash."""

from propdash.db.backends import MemoryStorage, SQLiteStorage, StorageBackend
from propdash.db.store import JournalStore, PropStore

__all__ = [
    "JournalStore",
    "MemoryStorage",
    "PropStore",
    "SQLiteStorage",
    "StorageBackend",
]
