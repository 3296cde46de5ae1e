"""
Unit tests for journey summary assembly and the stale-completion guard.

Usage:
    pytest tests/test_summary.py -v
"""
import asyncio
import pytest
from datetime import datetime, timedelta, timezone

from journal_core.journeys import JourneyTracker
from journal_core.summary import (
    UNKNOWN_ADDRESS,
    StaleGuard,
    build_journey_summary,
    format_duration,
    resolve_address,
    summarize_journey,
)


START = datetime(2024, 5, 1, 7, 0, tzinfo=timezone.utc)


class StaticResolver:
    """Resolver returning a fixed answer and recording calls."""

    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    async def reverse(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        if self.error:
            raise self.error
        return self.answer


class TestFormatDuration:
    def test_minutes_only(self):
        assert format_duration(59 * 60 + 30) == "59m"

    def test_hours_and_minutes(self):
        assert format_duration(2 * 3600 + 5 * 60) == "2h 5m"

    def test_zero_hours_exact(self):
        assert format_duration(3600) == "1h 0m"

    def test_negative_clamped(self):
        assert format_duration(-10) == "0m"


class TestResolveAddress:
    """Fallback chain across resolvers."""

    @pytest.mark.asyncio
    async def test_first_answer_wins(self):
        primary = StaticResolver("HIGH ST, OXFORD")
        secondary = StaticResolver("UNUSED")

        assert await resolve_address(1.0, 2.0, [primary, secondary]) == "HIGH ST, OXFORD"
        assert secondary.calls == []

    @pytest.mark.asyncio
    async def test_falls_back_after_error(self):
        broken = StaticResolver(error=RuntimeError("geocoder offline"))
        fallback = StaticResolver("HIGH ST, OXFORD")

        assert await resolve_address(1.0, 2.0, [broken, fallback]) == "HIGH ST, OXFORD"

    @pytest.mark.asyncio
    async def test_falls_back_after_empty(self):
        empty = StaticResolver(None)
        fallback = StaticResolver("HIGH ST, OXFORD")

        assert await resolve_address(1.0, 2.0, [empty, fallback]) == "HIGH ST, OXFORD"

    @pytest.mark.asyncio
    async def test_sentinel_when_all_fail(self):
        assert await resolve_address(1.0, 2.0, [StaticResolver(None)]) == UNKNOWN_ADDRESS
        assert await resolve_address(1.0, 2.0, []) == UNKNOWN_ADDRESS


class TestBuildSummary:
    def _journey(self):
        tracker = JourneyTracker()
        tracker.start("Morning Walk", now=START)
        tracker.add_snapshot(1.0, 2.0, note="nice view")
        tracker.add_snapshot(1.1, 2.1)
        tracker.add_snapshot(1.2, 2.2, note="coffee stop")
        return tracker.active

    def test_physicality_and_memory(self):
        summary = build_journey_summary(
            self._journey(), "A STREET", "B ROAD", end_time=START + timedelta(hours=1, minutes=15)
        )

        assert summary.physicality == "Started: A STREET\nEnded: B ROAD\nDuration: 1h 15m"
        assert summary.memory == "nice view; coffee stop"
        assert summary.mindset == ""
        assert summary.reflective_questions == []
        assert summary.narrative == ""


class TestSummarizeJourney:
    """Endpoint resolution order."""

    @pytest.mark.asyncio
    async def test_prefers_snapshot_addresses(self):
        tracker = JourneyTracker()
        journey = tracker.start("Walk", now=START)
        tracker.add_route_point(1.0, 2.0)
        tracker.add_snapshot(1.0, 2.0, address="FIRST")
        tracker.add_snapshot(1.5, 2.5)
        tracker.add_snapshot(2.0, 3.0, address="LAST")
        resolver = StaticResolver("GEOCODED")

        summary = await summarize_journey(journey, [resolver], end_time=START + timedelta(minutes=20))

        assert summary.physicality.startswith("Started: FIRST\nEnded: LAST")
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_geocodes_route_endpoints(self):
        tracker = JourneyTracker()
        journey = tracker.start("Walk", now=START)
        tracker.add_route_point(1.0, 2.0)
        tracker.add_route_point(1.5, 2.5)
        tracker.add_route_point(2.0, 3.0)
        resolver = StaticResolver("SOMEWHERE")

        await summarize_journey(journey, [resolver], end_time=START + timedelta(minutes=5))

        assert resolver.calls == [(1.0, 2.0), (2.0, 3.0)]

    @pytest.mark.asyncio
    async def test_unknown_without_data(self):
        tracker = JourneyTracker()
        journey = tracker.start("Walk", now=START)

        summary = await summarize_journey(journey, [], end_time=START + timedelta(minutes=5))
        assert summary.physicality == "Started: Unknown Location\nEnded: Unknown Location\nDuration: 5m"


class TestStaleGuard:
    """Results arriving after close() are dropped."""

    @pytest.mark.asyncio
    async def test_applies_while_open(self):
        guard = StaleGuard()
        received = []

        async def lookup():
            return "ADDRESS"

        assert await guard.deliver(lookup(), received.append) is True
        assert received == ["ADDRESS"]

    @pytest.mark.asyncio
    async def test_drops_after_close(self):
        guard = StaleGuard()
        received = []
        release = asyncio.Event()

        async def slow_lookup():
            await release.wait()
            return "ADDRESS"

        task = asyncio.ensure_future(guard.deliver(slow_lookup(), received.append))
        await asyncio.sleep(0)
        guard.close()
        release.set()

        assert await task is False
        assert received == []
