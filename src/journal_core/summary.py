"""
Journey Summary Assembly.

Helpers for the layer that ends a journey: resolve start and end
addresses through a chain of resolvers, format the duration and build
the JourneySummary handed to JourneyTracker.end().
"""

import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from .geocoding import AddressResolver
from .models import Journey, JourneySummary

logger = logging.getLogger(__name__)

UNKNOWN_ADDRESS = "UNKNOWN LOCATION"
UNKNOWN_ENDPOINT = "Unknown Location"

T = TypeVar("T")


async def resolve_address(
    latitude: float,
    longitude: float,
    resolvers: Sequence[AddressResolver],
) -> str:
    """
    Try each resolver in order and return the first address found.

    A resolver that raises or returns nothing is skipped. When every
    resolver fails the sentinel UNKNOWN_ADDRESS is returned.
    """
    for resolver in resolvers:
        try:
            address = await resolver.reverse(latitude, longitude)
        except Exception as e:
            logger.warning(f"[GEOCODE] {type(resolver).__name__} failed, trying next: {e}")
            continue
        if address:
            return address
    return UNKNOWN_ADDRESS


def format_duration(seconds: float) -> str:
    """Format a duration as "1h 5m", or "5m" under an hour."""
    seconds = max(int(seconds), 0)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def _parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def build_journey_summary(
    journey: Journey,
    start_address: str,
    end_address: str,
    end_time: Optional[datetime] = None,
) -> JourneySummary:
    """
    Build the recap for a journey about to end.

    Args:
        journey: The active journey
        start_address: Where the journey began
        end_address: Where it finished
        end_time: When it ends (defaults to now)
    """
    end_time = end_time or datetime.now().astimezone()
    if end_time.tzinfo is None:
        end_time = end_time.astimezone()

    duration = (end_time - _parse_timestamp(journey.start_time)).total_seconds()
    notes = [s.note for s in journey.snapshots if s.note]

    return JourneySummary(
        physicality=(
            f"Started: {start_address}\n"
            f"Ended: {end_address}\n"
            f"Duration: {format_duration(duration)}"
        ),
        memory="; ".join(notes),
    )


async def summarize_journey(
    journey: Journey,
    resolvers: Sequence[AddressResolver] = (),
    end_time: Optional[datetime] = None,
) -> JourneySummary:
    """
    Resolve a journey's endpoints and build its summary.

    Snapshot addresses are preferred (first and last); otherwise the
    first and last route points are geocoded; with neither, both
    endpoints are "Unknown Location".
    """
    start_address = end_address = UNKNOWN_ENDPOINT

    addresses = [s.address for s in journey.snapshots if s.address]
    if addresses:
        start_address, end_address = addresses[0], addresses[-1]
    elif journey.route:
        first, last = journey.route[0], journey.route[-1]
        start_address = await resolve_address(first.latitude, first.longitude, resolvers)
        end_address = await resolve_address(last.latitude, last.longitude, resolvers)

    return build_journey_summary(journey, start_address, end_address, end_time)


class StaleGuard:
    """
    Drops results that complete after their consumer has gone away.

    The consumer calls close() when it is torn down; any pending lookup
    that finishes afterwards is discarded instead of written to state.
    """

    def __init__(self):
        self.open = True

    def close(self) -> None:
        self.open = False

    async def deliver(
        self,
        pending: Awaitable[T],
        apply: Callable[[T], Any],
    ) -> bool:
        """
        Await a pending result and apply it only if the guard is still open.

        Returns:
            True if the result was applied
        """
        result = await pending
        if not self.open:
            logger.debug("[GUARD] Discarding result that completed after close")
            return False
        apply(result)
        return True
