"""
Entry Collection Manager.

Create, update, delete and favorite journal entries, plus the
client-side search filters used by the entry list.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from .models import Coordinates, JournalEntry, Mood, new_id, now_iso, now_ms

logger = logging.getLogger(__name__)

# Fields callers may not overwrite through update()
_IDENTITY_FIELDS = {"id", "created_at"}

# Fields that must always hold a value; None for these is ignored
_REQUIRED_FIELDS = {"date", "content", "mood", "is_favorite"}


def local_day(iso_string: str) -> Optional[date]:
    """Calendar day of an ISO timestamp in local time, or None if unparseable."""
    try:
        dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.date()


def _coerce(name: str, value: Any) -> Any:
    if name == "mood" and value is not None and not isinstance(value, Mood):
        return Mood(value)
    if name == "coordinates" and isinstance(value, dict):
        return Coordinates.from_dict(value)
    if name == "tags" and value is not None:
        return list(value)
    return value


class EntryCollection:
    """Newest-first list of journal entries."""

    def __init__(self, entries: Optional[List[JournalEntry]] = None):
        self.entries: List[JournalEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, entry_id: str) -> Optional[JournalEntry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def add(
        self,
        content: str,
        mood: Mood = Mood.NEUTRAL,
        date: Optional[str] = None,
        **fields: Any,
    ) -> JournalEntry:
        """
        Create an entry and put it at the front of the collection.

        Content is not validated; an empty string is stored as given.

        Args:
            content: Free text of the entry
            mood: One of the five moods
            date: ISO timestamp the entry is filed under (defaults to now)
            **fields: Optional attributes (title, photo, location, coordinates,
                weather, tags, time, is_favorite)

        Returns:
            The created entry
        """
        entry = JournalEntry(
            id=new_id(),
            date=date or now_iso(),
            content=content,
            mood=_coerce("mood", mood),
            created_at=now_ms(),
        )
        self._apply(entry, fields)
        self.entries.insert(0, entry)
        logger.info(f"[ENTRIES] Added entry {entry.id} ({entry.mood.value})")
        return entry

    def update(self, entry_id: str, changes: Dict[str, Any]) -> Optional[JournalEntry]:
        """Merge changes into an entry and stamp updated_at. Unknown ids are ignored."""
        entry = self.get(entry_id)
        if entry is None:
            logger.debug(f"[ENTRIES] Update skipped, no entry {entry_id}")
            return None

        self._apply(entry, changes)
        entry.updated_at = now_ms()
        logger.info(f"[ENTRIES] Updated entry {entry_id}")
        return entry

    def delete(self, entry_id: str) -> bool:
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.id != entry_id]
        removed = len(self.entries) < before
        if removed:
            logger.info(f"[ENTRIES] Deleted entry {entry_id}")
        else:
            logger.debug(f"[ENTRIES] Delete skipped, no entry {entry_id}")
        return removed

    def toggle_favorite(self, entry_id: str) -> Optional[JournalEntry]:
        entry = self.get(entry_id)
        if entry is None:
            logger.debug(f"[ENTRIES] Favorite toggle skipped, no entry {entry_id}")
            return None
        entry.is_favorite = not entry.is_favorite
        return entry

    def filter(
        self,
        query: str = "",
        tags: Iterable[str] = (),
        favorites_only: bool = False,
        on_date: Optional[date] = None,
    ) -> List[JournalEntry]:
        """
        Entries matching every active filter, in collection order.

        Args:
            query: Case-insensitive substring of content or title ("" matches all)
            tags: Entry must share at least one of these tags (empty matches all)
            favorites_only: Keep only favorite entries
            on_date: Keep only entries filed on this local calendar day
        """
        needle = query.lower()
        selected = set(tags)
        results = []

        for entry in self.entries:
            if needle and needle not in entry.content.lower() and (
                entry.title is None or needle not in entry.title.lower()
            ):
                continue
            if selected and not (entry.tags and selected.intersection(entry.tags)):
                continue
            if favorites_only and not entry.is_favorite:
                continue
            if on_date is not None and local_day(entry.date) != on_date:
                continue
            results.append(entry)

        return results

    def all_tags(self) -> List[str]:
        """Distinct tags across all entries, in first-seen order."""
        seen: Dict[str, None] = {}
        for entry in self.entries:
            for tag in entry.tags or []:
                seen.setdefault(tag, None)
        return list(seen)

    def _apply(self, entry: JournalEntry, fields: Dict[str, Any]) -> None:
        for name, value in fields.items():
            if name in _IDENTITY_FIELDS:
                continue
            if value is None and name in _REQUIRED_FIELDS:
                logger.warning(f"[ENTRIES] Ignoring empty value for required field '{name}'")
                continue
            if not hasattr(entry, name):
                logger.warning(f"[ENTRIES] Ignoring unknown entry field '{name}'")
                continue
            setattr(entry, name, _coerce(name, value))
