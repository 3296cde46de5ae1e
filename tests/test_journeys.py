"""
Unit tests for the journey lifecycle manager.

These tests verify:
1. Start/end transitions and the single active journey pointer
2. Route points and snapshots only land on the active journey
3. Starting while another journey is active is rejected
4. Pointer reconciliation when restoring saved journeys

Usage:
    pytest tests/test_journeys.py -v
"""
import pytest
from datetime import datetime, timezone

from journal_core.journeys import JourneyTracker
from journal_core.models import Journey, JourneySummary


START = datetime(2024, 5, 1, 7, 0, tzinfo=timezone.utc)
END = datetime(2024, 5, 1, 8, 15, tzinfo=timezone.utc)


@pytest.fixture
def tracker():
    return JourneyTracker()


class TestJourneyLifecycle:
    """Test Idle -> Active -> Ended."""

    def test_start_sets_active_pointer(self, tracker):
        journey = tracker.start("Morning Walk", now=START)

        assert journey.is_active is True
        assert journey.start_time == START.isoformat()
        assert journey.route == []
        assert journey.snapshots == []
        assert tracker.active_journey_id == journey.id
        assert tracker.active is journey

    def test_theme_trimmed(self, tracker):
        journey = tracker.start("  Coastline  ")
        assert journey.theme == "Coastline"

    def test_empty_theme_rejected(self, tracker):
        assert tracker.start("   ") is None
        assert len(tracker) == 0
        assert tracker.active_journey_id is None

    def test_start_while_active_rejected(self, tracker):
        first = tracker.start("First")
        assert tracker.start("Second") is None

        assert len(tracker) == 1
        assert tracker.active_journey_id == first.id
        assert first.is_active is True

    def test_start_after_end_allowed(self, tracker):
        tracker.start("First")
        tracker.end(JourneySummary())
        second = tracker.start("Second")

        assert second is not None
        assert tracker.active_journey_id == second.id

    def test_morning_walk_scenario(self, tracker):
        tracker.start("Morning Walk", now=START)
        tracker.add_route_point(51.50, -0.12)
        tracker.add_route_point(51.51, -0.13)
        tracker.add_snapshot(51.51, -0.13, note="nice view")

        summary = JourneySummary(physicality="Started: A\nEnded: B\nDuration: 1h 15m", memory="nice view")
        journey = tracker.end(summary, now=END)

        assert journey.is_active is False
        assert len(journey.route) == 2
        assert len(journey.snapshots) == 1
        assert journey.summary == summary
        assert journey.end_time == END.isoformat()
        assert tracker.active_journey_id is None

    def test_route_point_ignored_when_idle(self, tracker):
        assert tracker.add_route_point(1.0, 2.0) is None

    def test_snapshot_ignored_when_idle(self, tracker):
        assert tracker.add_snapshot(1.0, 2.0, note="lost") is None

    def test_ended_journey_frozen(self, tracker):
        tracker.start("Walk")
        tracker.add_route_point(1.0, 2.0)
        journey = tracker.end(JourneySummary())

        tracker.add_route_point(3.0, 4.0)
        tracker.add_snapshot(3.0, 4.0, note="late")

        assert len(journey.route) == 1
        assert journey.snapshots == []

    def test_end_when_idle(self, tracker):
        assert tracker.end(JourneySummary()) is None

    def test_snapshot_fields(self, tracker):
        tracker.start("Walk")
        snapshot = tracker.add_snapshot(1.0, 2.0, address="MAIN ST", mood_rating=7, note="calm")

        assert snapshot.address == "MAIN ST"
        assert snapshot.mood_rating == 7
        assert snapshot.note == "calm"
        assert snapshot.id


class TestJourneyDeletion:
    """Test deleting journeys."""

    def test_delete_active_clears_pointer(self, tracker):
        journey = tracker.start("Walk")
        assert tracker.delete(journey.id) is True
        assert tracker.active_journey_id is None

    def test_delete_ended_keeps_active(self, tracker):
        old = tracker.start("Old")
        tracker.end(JourneySummary())
        current = tracker.start("Current")

        tracker.delete(old.id)
        assert len(tracker) == 1
        assert tracker.active_journey_id == current.id

    def test_delete_unknown(self, tracker):
        tracker.start("Walk")
        assert tracker.delete("missing") is False
        assert len(tracker) == 1


class TestJourneySearch:
    def test_search_history(self, tracker):
        tracker.start("Forest hike")
        tracker.end(JourneySummary(narrative="Saw a deer"))
        tracker.start("City stroll")
        tracker.end(JourneySummary())
        tracker.start("Ongoing forest run")

        assert [j.theme for j in tracker.search("forest")] == ["Forest hike"]
        assert [j.theme for j in tracker.search("DEER")] == ["Forest hike"]
        assert len(tracker.search("")) == 2


class TestReconcileActive:
    """Test pointer repair when restoring saved journeys."""

    def _journey(self, journey_id, active):
        return Journey(id=journey_id, theme=journey_id, start_time=START.isoformat(), is_active=active)

    def test_dangling_pointer_cleared(self):
        tracker = JourneyTracker([self._journey("a", False)], active_journey_id="missing")
        assert tracker.active_journey_id is None

    def test_pointer_to_ended_journey_cleared(self):
        tracker = JourneyTracker([self._journey("a", False)], active_journey_id="a")
        assert tracker.active_journey_id is None

    def test_missing_pointer_recovered(self):
        tracker = JourneyTracker([self._journey("a", True)])
        assert tracker.active_journey_id == "a"

    def test_extra_active_journeys_deactivated(self):
        journeys = [self._journey("a", True), self._journey("b", True)]
        tracker = JourneyTracker(journeys, active_journey_id="b")

        assert tracker.active_journey_id == "b"
        assert [j.is_active for j in tracker.journeys] == [False, True]
