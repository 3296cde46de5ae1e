"""
Journal Store.

The single state container for entries, goals and journeys plus the
view state that drives the screens. Each mutation updates state
synchronously and then awaits a full-state save; the outcome of the
latest save is kept in `last_save`.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from .entries import EntryCollection
from .goal_tracker import CheckInEvent, GoalTracker
from .journeys import JourneyTracker
from .models import (
    AlarmSound,
    Goal,
    JournalEntry,
    Journey,
    JourneySnapshot,
    JourneySummary,
    Mood,
    RoutePoint,
)
from .persistence import PersistedState, PersistenceAdapter, SaveResult

logger = logging.getLogger(__name__)


class JournalStore:
    """Owns all journal state and persists it after every mutation."""

    def __init__(self, adapter: PersistenceAdapter):
        self.adapter = adapter
        self.last_save: Optional[SaveResult] = None
        self.is_loading = True
        self._reset(adapter.default_state())

        # View state, never persisted
        self.search_query = ""
        self.goal_search_query = ""
        self.journey_search_query = ""
        self.selected_tags: List[str] = []
        self.favorites_only = False
        self.selected_date: Optional[date] = None

    def _reset(self, state: PersistedState) -> None:
        self.entries = EntryCollection(state.entries)
        self.goals = GoalTracker(state.goals)
        self.journeys = JourneyTracker(state.journeys, state.active_journey_id)
        self.user_name = state.user_name
        self.is_dark_mode = state.is_dark_mode

    def snapshot(self) -> PersistedState:
        """Current persisted portion of the state."""
        return PersistedState(
            entries=list(self.entries.entries),
            goals=list(self.goals.goals),
            journeys=list(self.journeys.journeys),
            active_journey_id=self.journeys.active_journey_id,
            user_name=self.user_name,
            is_dark_mode=self.is_dark_mode,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Hydrate state from storage for the current user."""
        self.is_loading = True
        self._reset(await self.adapter.load())
        self.is_loading = False

    async def save(self) -> SaveResult:
        self.last_save = await self.adapter.save(self.snapshot())
        return self.last_save

    def clear_data(self) -> None:
        """Drop in-memory data (e.g. on sign-out) without touching storage."""
        self._reset(self.adapter.default_state())
        self.search_query = ""
        self.goal_search_query = ""
        self.journey_search_query = ""
        self.selected_tags = []
        self.favorites_only = False
        self.selected_date = None
        logger.info("[STORE] Cleared in-memory journal data")

    async def switch_user(self, user_id: Optional[str], display_name: Optional[str] = None) -> None:
        """
        React to an auth identity change.

        Switches the storage key to the user's record, reloads it and
        seeds the user name from the display name when one is present.
        """
        self.adapter.user_id = user_id
        logger.info(f"[STORE] Switching to storage key {self.adapter.key}")
        await self.load()
        if display_name:
            await self.set_user_name(display_name)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    async def add_entry(
        self,
        content: str,
        mood: Mood = Mood.NEUTRAL,
        date: Optional[str] = None,
        **fields: Any,
    ) -> JournalEntry:
        entry = self.entries.add(content, mood, date, **fields)
        await self.save()
        return entry

    async def update_entry(self, entry_id: str, changes: Dict[str, Any]) -> Optional[JournalEntry]:
        entry = self.entries.update(entry_id, changes)
        await self.save()
        return entry

    async def delete_entry(self, entry_id: str) -> bool:
        removed = self.entries.delete(entry_id)
        await self.save()
        return removed

    async def toggle_favorite(self, entry_id: str) -> Optional[JournalEntry]:
        entry = self.entries.toggle_favorite(entry_id)
        await self.save()
        return entry

    def filtered_entries(self) -> List[JournalEntry]:
        """Entries matching the current search, tag, favorite and date filters."""
        return self.entries.filter(
            query=self.search_query,
            tags=self.selected_tags,
            favorites_only=self.favorites_only,
            on_date=self.selected_date,
        )

    def all_tags(self) -> List[str]:
        return self.entries.all_tags()

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    async def add_goal(
        self,
        title: str,
        description: str,
        target_days: int,
        is_active: bool = True,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        reminder_enabled: bool = False,
        reminder_time: str = "09:00",
        alarm_sound: AlarmSound = AlarmSound.DEFAULT,
    ) -> Goal:
        goal = self.goals.add(
            title,
            description,
            target_days,
            is_active=is_active,
            start_date=start_date,
            end_date=end_date,
            reminder_enabled=reminder_enabled,
            reminder_time=reminder_time,
            alarm_sound=alarm_sound,
        )
        await self.save()
        return goal

    async def update_goal(self, goal_id: str, changes: Dict[str, Any]) -> Optional[Goal]:
        goal = self.goals.update(goal_id, changes)
        await self.save()
        return goal

    async def delete_goal(self, goal_id: str) -> bool:
        removed = self.goals.delete(goal_id)
        await self.save()
        return removed

    async def check_in_goal(self, goal_id: str, today: Optional[date] = None) -> Optional[CheckInEvent]:
        event = self.goals.check_in(goal_id, today=today)
        await self.save()
        return event

    def filtered_goals(self) -> List[Goal]:
        return self.goals.search(self.goal_search_query)

    # ------------------------------------------------------------------
    # Journeys
    # ------------------------------------------------------------------

    @property
    def active_journey(self) -> Optional[Journey]:
        return self.journeys.active

    async def start_journey(self, theme: str, now: Optional[datetime] = None) -> Optional[Journey]:
        journey = self.journeys.start(theme, now=now)
        if journey is not None:
            await self.save()
        return journey

    async def add_route_point(
        self,
        latitude: float,
        longitude: float,
        now: Optional[datetime] = None,
    ) -> Optional[RoutePoint]:
        point = self.journeys.add_route_point(latitude, longitude, now=now)
        if point is not None:
            await self.save()
        return point

    async def add_snapshot(
        self,
        latitude: float,
        longitude: float,
        address: Optional[str] = None,
        mood_rating: Optional[int] = None,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[JourneySnapshot]:
        snapshot = self.journeys.add_snapshot(
            latitude, longitude, address=address, mood_rating=mood_rating, note=note, now=now
        )
        if snapshot is not None:
            await self.save()
        return snapshot

    async def end_journey(self, summary: JourneySummary, now: Optional[datetime] = None) -> Optional[Journey]:
        journey = self.journeys.end(summary, now=now)
        if journey is not None:
            await self.save()
        return journey

    async def delete_journey(self, journey_id: str) -> bool:
        removed = self.journeys.delete(journey_id)
        await self.save()
        return removed

    def filtered_journeys(self) -> List[Journey]:
        return self.journeys.search(self.journey_search_query)

    # ------------------------------------------------------------------
    # User and view state
    # ------------------------------------------------------------------

    async def set_user_name(self, name: str) -> None:
        self.user_name = name
        await self.save()

    async def toggle_theme(self) -> bool:
        self.is_dark_mode = not self.is_dark_mode
        await self.save()
        return self.is_dark_mode

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    def set_goal_search_query(self, query: str) -> None:
        self.goal_search_query = query

    def set_journey_search_query(self, query: str) -> None:
        self.journey_search_query = query

    def set_selected_tags(self, tags: Iterable[str]) -> None:
        self.selected_tags = list(tags)

    def set_favorites_only(self, enabled: bool) -> None:
        self.favorites_only = enabled

    def set_selected_date(self, day: Optional[date]) -> None:
        self.selected_date = day
