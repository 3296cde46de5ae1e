"""Process-wide journal store for the API."""
import logging
from typing import Optional

from journal_core.config import Settings, get_settings
from journal_core.geocoding import AddressResolver, NominatimGeocoder
from journal_core.persistence import PersistenceAdapter
from journal_core.storage import SQLiteStorage
from journal_core.store import JournalStore

log = logging.getLogger(__name__)


class StoreManager:
    """
    Lazily builds one JournalStore backed by SQLite storage.

    The store is loaded on first use and shared by every request.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._store: Optional[JournalStore] = None

    async def get_store(self) -> JournalStore:
        if self._store is None:
            storage = SQLiteStorage(self.settings.storage_db_path)
            store = JournalStore(PersistenceAdapter(storage, settings=self.settings))
            await store.load()
            self._store = store
            log.info(f"[STORE] Loaded journal store from {self.settings.storage_db_path}")
        return self._store


# Singleton instance
store_manager = StoreManager()


async def get_store() -> JournalStore:
    """FastAPI dependency returning the shared store."""
    return await store_manager.get_store()


def get_resolvers() -> list[AddressResolver]:
    """FastAPI dependency listing address resolvers, in fallback order."""
    return [NominatimGeocoder()]
