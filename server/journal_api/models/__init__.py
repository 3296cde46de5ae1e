"""Pydantic models for journal API requests and responses."""
from .entries import Entry, EntryCreate, EntryUpdate, CoordinatesModel
from .goals import Goal, GoalCreate, GoalUpdate, CheckInResult
from .journeys import (
    Journey,
    JourneyStart,
    JourneyEnd,
    JourneySummary,
    RoutePoint,
    RoutePointCreate,
    Snapshot,
    SnapshotCreate,
)
from .stats import JournalStats

__all__ = [
    "Entry",
    "EntryCreate",
    "EntryUpdate",
    "CoordinatesModel",
    "Goal",
    "GoalCreate",
    "GoalUpdate",
    "CheckInResult",
    "Journey",
    "JourneyStart",
    "JourneyEnd",
    "JourneySummary",
    "RoutePoint",
    "RoutePointCreate",
    "Snapshot",
    "SnapshotCreate",
    "JournalStats",
]
