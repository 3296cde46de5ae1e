"""
Journal Core Module.

In-memory journal state (entries, goals, journeys) persisted as a single
record per user.
"""

from .store import JournalStore
from .persistence import PersistenceAdapter, PersistedState, SaveResult, storage_key_for
from .storage import InMemoryStorage, SQLiteStorage
from .summary import summarize_journey, build_journey_summary

__all__ = [
    "JournalStore",
    "PersistenceAdapter",
    "PersistedState",
    "SaveResult",
    "storage_key_for",
    "InMemoryStorage",
    "SQLiteStorage",
    "summarize_journey",
    "build_journey_summary",
]
