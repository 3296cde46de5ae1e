"""
Journey Lifecycle Module.

A journey moves Idle -> Active -> Ended. Only one journey can be active
at a time; route points and snapshots are appended to the active journey
as the caller pushes location updates, and the journey is frozen once
it ends.
"""

import logging
from datetime import datetime
from typing import List, Optional

from .models import (
    Journey,
    JourneySnapshot,
    JourneySummary,
    RoutePoint,
    new_id,
)

logger = logging.getLogger(__name__)


def _timestamp(now: Optional[datetime]) -> str:
    return (now or datetime.now().astimezone()).isoformat()


class JourneyTracker:
    """
    Owns the journey list and the active-journey pointer.

    Starting a journey while another is active is rejected; the caller
    must end the current journey first.
    """

    def __init__(
        self,
        journeys: Optional[List[Journey]] = None,
        active_journey_id: Optional[str] = None,
    ):
        self.journeys: List[Journey] = list(journeys or [])
        self.active_journey_id: Optional[str] = active_journey_id
        self._reconcile_active()

    def __len__(self) -> int:
        return len(self.journeys)

    def _reconcile_active(self) -> None:
        """Make the pointer and the is_active flags agree on at most one journey."""
        pointed = self.get(self.active_journey_id) if self.active_journey_id else None
        if pointed is None or not pointed.is_active:
            if self.active_journey_id:
                logger.warning(
                    f"[JOURNEY] Active pointer {self.active_journey_id} has no active journey, clearing"
                )
            pointed = next((j for j in self.journeys if j.is_active), None)
            self.active_journey_id = pointed.id if pointed else None

        for journey in self.journeys:
            if journey.is_active and journey is not pointed:
                logger.warning(f"[JOURNEY] Deactivating stray active journey {journey.id}")
                journey.is_active = False

    def get(self, journey_id: str) -> Optional[Journey]:
        for journey in self.journeys:
            if journey.id == journey_id:
                return journey
        return None

    @property
    def active(self) -> Optional[Journey]:
        if self.active_journey_id is None:
            return None
        return self.get(self.active_journey_id)

    def start(self, theme: str, now: Optional[datetime] = None) -> Optional[Journey]:
        """
        Start a new journey.

        Args:
            theme: What the journey is about; surrounding whitespace is trimmed
            now: Start time (defaults to the current time)

        Returns:
            The new journey, or None if the theme is empty or a journey
            is already active
        """
        theme = theme.strip()
        if not theme:
            logger.info("[JOURNEY] Start rejected: empty theme")
            return None

        if self.active is not None:
            logger.warning(
                f"[JOURNEY] Start rejected: journey {self.active_journey_id} is still active"
            )
            return None

        journey = Journey(
            id=new_id(),
            theme=theme,
            start_time=_timestamp(now),
            is_active=True,
        )
        self.journeys.insert(0, journey)
        self.active_journey_id = journey.id
        logger.info(f"[JOURNEY] Started '{theme}' ({journey.id})")
        return journey

    def add_route_point(
        self,
        latitude: float,
        longitude: float,
        now: Optional[datetime] = None,
    ) -> Optional[RoutePoint]:
        """Append a position to the active journey's route. Ignored when idle."""
        journey = self.active
        if journey is None:
            logger.debug("[JOURNEY] Route point ignored, no active journey")
            return None

        point = RoutePoint(latitude=latitude, longitude=longitude, timestamp=_timestamp(now))
        journey.route.append(point)
        return point

    def add_snapshot(
        self,
        latitude: float,
        longitude: float,
        address: Optional[str] = None,
        mood_rating: Optional[int] = None,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[JourneySnapshot]:
        """Append a snapshot to the active journey. Ignored when idle."""
        journey = self.active
        if journey is None:
            logger.debug("[JOURNEY] Snapshot ignored, no active journey")
            return None

        snapshot = JourneySnapshot(
            latitude=latitude,
            longitude=longitude,
            timestamp=_timestamp(now),
            address=address,
            mood_rating=mood_rating,
            note=note,
        )
        journey.snapshots.append(snapshot)
        logger.info(f"[JOURNEY] Snapshot #{len(journey.snapshots)} for '{journey.theme}'")
        return snapshot

    def end(self, summary: JourneySummary, now: Optional[datetime] = None) -> Optional[Journey]:
        """
        End the active journey and attach the caller-built summary.

        Returns:
            The ended journey, or None when no journey is active
        """
        journey = self.active
        if journey is None:
            logger.debug("[JOURNEY] End ignored, no active journey")
            return None

        journey.is_active = False
        journey.end_time = _timestamp(now)
        journey.summary = summary
        self.active_journey_id = None
        logger.info(
            f"[JOURNEY] Ended '{journey.theme}': {len(journey.route)} points, "
            f"{len(journey.snapshots)} snapshots"
        )
        return journey

    def delete(self, journey_id: str) -> bool:
        before = len(self.journeys)
        self.journeys = [j for j in self.journeys if j.id != journey_id]
        removed = len(self.journeys) < before
        if removed:
            if self.active_journey_id == journey_id:
                self.active_journey_id = None
            logger.info(f"[JOURNEY] Deleted journey {journey_id}")
        return removed

    def history(self) -> List[Journey]:
        """Ended journeys, newest first."""
        return [j for j in self.journeys if not j.is_active]

    def search(self, query: str) -> List[Journey]:
        """Ended journeys whose theme or summary narrative contains the query."""
        if not query:
            return self.history()
        needle = query.lower()
        return [
            j for j in self.history()
            if needle in j.theme.lower()
            or (j.summary is not None and needle in j.summary.narrative.lower())
        ]
