"""
Persistence Adapter.

Serializes the whole journal state into a single JSON record stored
under a key namespaced by the signed-in user. Every save writes the
full record; there are no partial updates.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import Settings, get_settings
from .models import Goal, JournalEntry, Journey
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "journal_app_data"


def storage_key_for(user_id: Optional[str]) -> str:
    """Storage key for a user, or the shared key when signed out."""
    if user_id:
        return f"{STORAGE_KEY}_{user_id}"
    return STORAGE_KEY


@dataclass
class PersistedState:
    """Everything written to storage in one record."""

    entries: List[JournalEntry] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    journeys: List[Journey] = field(default_factory=list)
    active_journey_id: Optional[str] = None
    user_name: str = "My Journal"
    is_dark_mode: bool = True

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "goals": [g.to_dict() for g in self.goals],
            "journeys": [j.to_dict() for j in self.journeys],
            "activeJourneyId": self.active_journey_id,
            "userName": self.user_name,
            "isDarkMode": self.is_dark_mode,
        }


@dataclass
class SaveResult:
    """Outcome of a save, so callers can observe write failures."""

    saved: bool
    key: str
    error: Optional[str] = None


class PersistenceAdapter:
    """Loads and saves the journal record through a key-value storage."""

    def __init__(
        self,
        storage: KeyValueStorage,
        user_id: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.storage = storage
        self.user_id = user_id
        self.settings = settings or get_settings()

    @property
    def key(self) -> str:
        return storage_key_for(self.user_id)

    def default_state(self) -> PersistedState:
        return PersistedState(
            user_name=self.settings.default_user_name,
            is_dark_mode=self.settings.default_dark_mode,
        )

    def encode(self, state: PersistedState) -> str:
        return json.dumps(state.to_dict())

    def decode(self, raw: str) -> PersistedState:
        """
        Parse a stored record, filling in defaults for missing fields.

        Raises:
            ValueError: if the record is not a JSON object or an item is malformed
        """
        parsed = json.loads(raw)
        if not isinstance(parsed, dict):
            raise ValueError("Persisted record is not an object")

        try:
            entries = [JournalEntry.from_dict(e) for e in parsed.get("entries") or []]
            goals = [Goal.from_dict(g) for g in parsed.get("goals") or []]
            journeys = [Journey.from_dict(j) for j in parsed.get("journeys") or []]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise ValueError(f"Malformed item in persisted record: {e}") from e

        user_name = parsed.get("userName")
        is_dark_mode = parsed.get("isDarkMode")
        return PersistedState(
            entries=entries,
            goals=goals,
            journeys=journeys,
            active_journey_id=parsed.get("activeJourneyId"),
            user_name=self.settings.default_user_name if user_name is None else str(user_name),
            is_dark_mode=(
                self.settings.default_dark_mode if is_dark_mode is None else bool(is_dark_mode)
            ),
        )

    async def load(self) -> PersistedState:
        """
        Load the record for the current user.

        A missing or unreadable record yields the default state; the
        failure is logged and never raised.
        """
        key = self.key
        try:
            raw = await self.storage.get_item(key)
        except Exception as e:
            logger.error(f"[STORAGE] Error loading data for {key}: {e}")
            return self.default_state()

        if not raw:
            logger.info(f"[STORAGE] No saved data under {key}, using defaults")
            return self.default_state()

        try:
            state = self.decode(raw)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass
            logger.error(f"[STORAGE] Corrupt record under {key}: {e}")
            return self.default_state()

        logger.info(
            f"[STORAGE] Loaded {len(state.entries)} entries, {len(state.goals)} goals, "
            f"{len(state.journeys)} journeys from {key}"
        )
        return state

    async def save(self, state: PersistedState) -> SaveResult:
        """Write the full state. Storage failures are logged and reported in the result."""
        key = self.key
        # Encoding errors are programming errors and propagate
        raw = self.encode(state)
        try:
            await self.storage.set_item(key, raw)
        except Exception as e:
            logger.error(f"[STORAGE] Error saving data for {key}: {e}")
            return SaveResult(saved=False, key=key, error=str(e))

        logger.debug(f"[STORAGE] Saved state to {key}")
        return SaveResult(saved=True, key=key)

    async def clear(self) -> None:
        """Remove the record for the current user."""
        await self.storage.remove_item(self.key)
        logger.info(f"[STORAGE] Cleared {self.key}")
