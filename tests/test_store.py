"""
Unit tests for the journal store.

These tests verify:
1. Every mutation persists the full state
2. Save failures are observable and leave memory authoritative
3. View-state filters combine as the entry list expects
4. Switching users changes the storage record

Usage:
    pytest tests/test_store.py -v
"""
import json
import pytest
from datetime import date, datetime, timedelta, timezone

from journal_core.models import JourneySummary, Mood
from journal_core.persistence import PersistenceAdapter
from journal_core.store import JournalStore


def saved_record(storage, key="journal_app_data"):
    return json.loads(storage.items[key])


class TestEntryMutations:
    """Entry operations persist after each change."""

    @pytest.mark.asyncio
    async def test_add_entry_persists(self, store, storage):
        entry = await store.add_entry("First entry", Mood.HAPPY, title="Hello")

        record = saved_record(storage)
        assert [e["id"] for e in record["entries"]] == [entry.id]
        assert store.last_save.saved is True

    @pytest.mark.asyncio
    async def test_update_unknown_still_persists(self, store, storage):
        result = await store.update_entry("missing", {"content": "x"})

        assert result is None
        assert "journal_app_data" in storage.items

    @pytest.mark.asyncio
    async def test_delete_and_favorite(self, store, storage):
        keep = await store.add_entry("keep")
        drop = await store.add_entry("drop")

        await store.toggle_favorite(keep.id)
        await store.delete_entry(drop.id)

        record = saved_record(storage)
        assert [e["id"] for e in record["entries"]] == [keep.id]
        assert record["entries"][0]["isFavorite"] is True


class TestSaveFailures:
    """A failed write is reported and in-memory state stays."""

    @pytest.mark.asyncio
    async def test_failed_save_observable(self, failing_store):
        entry = await failing_store.add_entry("written while offline")

        assert failing_store.last_save.saved is False
        assert failing_store.last_save.error
        assert failing_store.entries.get(entry.id) is entry

    @pytest.mark.asyncio
    async def test_explicit_save_returns_result(self, failing_store):
        result = await failing_store.save()
        assert result.saved is False
        assert result is failing_store.last_save


class TestGoalMutations:
    @pytest.mark.asyncio
    async def test_check_in_persists_streak(self, store, storage):
        goal = await store.add_goal("Stretch", "", 3, start_date="2024-05-01")
        day = date(2024, 5, 1)

        await store.check_in_goal(goal.id, today=day)
        await store.check_in_goal(goal.id, today=day + timedelta(days=1))

        saved = saved_record(storage)["goals"][0]
        assert saved["currentStreak"] == 2
        assert saved["completedDays"] == 2
        assert saved["lastCheckIn"] == "2024-05-02"

    @pytest.mark.asyncio
    async def test_pause_through_update(self, store, storage):
        goal = await store.add_goal("Stretch", "", 3)
        await store.update_goal(goal.id, {"is_active": False})

        assert saved_record(storage)["goals"][0]["isActive"] is False

    @pytest.mark.asyncio
    async def test_delete_goal(self, store):
        first = await store.add_goal("A", "", 3)
        second = await store.add_goal("B", "", 3)

        assert await store.delete_goal(first.id) is True
        assert [g.id for g in store.goals.goals] == [second.id]

    @pytest.mark.asyncio
    async def test_goal_search_view_state(self, store):
        await store.add_goal("Read", "Twenty pages", 10)
        await store.add_goal("Run", "5k", 10)

        store.set_goal_search_query("pages")
        assert [g.title for g in store.filtered_goals()] == ["Read"]


class TestJourneyMutations:
    """Journey operations through the store."""

    @pytest.mark.asyncio
    async def test_morning_walk_scenario(self, store, storage):
        start = datetime(2024, 5, 1, 7, 0, tzinfo=timezone.utc)
        journey = await store.start_journey("Morning Walk", now=start)
        await store.add_route_point(51.50, -0.12)
        await store.add_route_point(51.51, -0.13)
        await store.add_snapshot(51.51, -0.13, note="nice view")

        summary = JourneySummary(physicality="Started: A\nEnded: B\nDuration: 30m", memory="nice view")
        ended = await store.end_journey(summary)

        assert ended is journey
        assert journey.is_active is False
        assert len(journey.route) == 2
        assert len(journey.snapshots) == 1
        assert journey.summary == summary
        assert store.active_journey is None

        record = saved_record(storage)
        assert record["activeJourneyId"] is None
        assert record["journeys"][0]["summary"]["memory"] == "nice view"

    @pytest.mark.asyncio
    async def test_active_pointer_persisted(self, store, storage):
        journey = await store.start_journey("Commute")
        assert saved_record(storage)["activeJourneyId"] == journey.id

    @pytest.mark.asyncio
    async def test_second_start_rejected(self, store):
        first = await store.start_journey("First")
        assert await store.start_journey("Second") is None
        assert store.active_journey is first
        assert len(store.journeys) == 1

    @pytest.mark.asyncio
    async def test_delete_active_journey(self, store, storage):
        journey = await store.start_journey("Commute")
        await store.delete_journey(journey.id)

        assert store.active_journey is None
        assert saved_record(storage)["journeys"] == []

    @pytest.mark.asyncio
    async def test_journey_search_view_state(self, store):
        await store.start_journey("Forest hike")
        await store.end_journey(JourneySummary())
        await store.start_journey("Beach")
        await store.end_journey(JourneySummary())

        store.set_journey_search_query("forest")
        assert [j.theme for j in store.filtered_journeys()] == ["Forest hike"]


class TestViewState:
    """Filters and toggles."""

    @pytest.mark.asyncio
    async def test_filtered_entries_combines_filters(self, store):
        await store.add_entry("Dog walk", Mood.HAPPY, "2024-05-01T08:00:00", tags=["dog"])
        fav = await store.add_entry("Dog park", Mood.HAPPY, "2024-05-02T08:00:00", tags=["dog"])
        await store.add_entry("Cat nap", Mood.NEUTRAL, "2024-05-02T12:00:00", tags=["cat"])
        await store.toggle_favorite(fav.id)

        store.set_search_query("dog")
        assert len(store.filtered_entries()) == 2

        store.set_favorites_only(True)
        assert [e.id for e in store.filtered_entries()] == [fav.id]

        store.set_favorites_only(False)
        store.set_search_query("")
        store.set_selected_tags(["cat"])
        store.set_selected_date(date(2024, 5, 2))
        assert [e.content for e in store.filtered_entries()] == ["Cat nap"]

    @pytest.mark.asyncio
    async def test_search_query_not_persisted(self, store, storage):
        store.set_search_query("anything")
        assert storage.items == {}

    @pytest.mark.asyncio
    async def test_toggle_theme_and_user_name(self, store, storage):
        assert store.is_dark_mode is True
        assert await store.toggle_theme() is False
        await store.set_user_name("Robin")

        record = saved_record(storage)
        assert record["isDarkMode"] is False
        assert record["userName"] == "Robin"

    @pytest.mark.asyncio
    async def test_all_tags(self, store):
        await store.add_entry("a", tags=["x", "y"])
        await store.add_entry("b", tags=["y", "z"])
        assert sorted(store.all_tags()) == ["x", "y", "z"]


class TestLoadAndUsers:
    """Hydration and identity switches."""

    @pytest.mark.asyncio
    async def test_load_restores_saved_state(self, store, adapter):
        entry = await store.add_entry("persist me")
        journey = await store.start_journey("Ongoing")

        fresh = JournalStore(adapter)
        assert fresh.is_loading is True
        await fresh.load()

        assert fresh.is_loading is False
        assert fresh.entries.get(entry.id).content == "persist me"
        assert fresh.active_journey.id == journey.id

    @pytest.mark.asyncio
    async def test_switch_user_uses_own_record(self, store, storage):
        await store.add_entry("shared device entry")

        await store.switch_user("user-1", display_name="Alex")
        assert len(store.entries) == 0
        assert store.user_name == "Alex"
        assert "journal_app_data_user-1" in storage.items

        await store.add_entry("alex entry")
        await store.switch_user(None)
        assert [e.content for e in store.entries.entries] == ["shared device entry"]

    @pytest.mark.asyncio
    async def test_switch_user_without_display_name_keeps_saved_name(self, storage, settings):
        seeded = JournalStore(PersistenceAdapter(storage, user_id="u2", settings=settings))
        await seeded.set_user_name("Saved Name")

        store = JournalStore(PersistenceAdapter(storage, settings=settings))
        await store.switch_user("u2")
        assert store.user_name == "Saved Name"

    @pytest.mark.asyncio
    async def test_clear_data(self, store, storage):
        await store.add_entry("entry")
        store.set_search_query("entry")

        store.clear_data()

        assert len(store.entries) == 0
        assert store.search_query == ""
        assert store.user_name == "My Journal"
        # Storage untouched
        assert len(saved_record(storage)["entries"]) == 1
