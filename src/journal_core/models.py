"""
Journal Data Models.

Dataclasses for journal entries, goals and journeys. Every model
serializes to the camelCase dictionaries stored in the persisted
record and can be rebuilt from them.
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Mood(str, Enum):
    """Mood attached to a journal entry."""

    AMAZING = "amazing"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    TERRIBLE = "terrible"


class AlarmSound(str, Enum):
    """Sound played by a goal reminder."""

    DEFAULT = "default"
    BELL = "bell"
    CHIME = "chime"
    GENTLE = "gentle"
    URGENT = "urgent"


def new_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def now_iso() -> str:
    return datetime.now().astimezone().isoformat()


@dataclass
class Coordinates:
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Coordinates":
        return cls(latitude=data["latitude"], longitude=data["longitude"])


@dataclass
class JournalEntry:
    """A single diary record."""

    id: str
    date: str
    content: str
    mood: Mood = Mood.NEUTRAL
    created_at: int = field(default_factory=now_ms)
    title: Optional[str] = None
    photo: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    weather: Optional[str] = None
    tags: Optional[List[str]] = None
    time: Optional[str] = None  # HH:MM
    is_favorite: bool = False
    updated_at: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = {
            "id": self.id,
            "date": self.date,
            "content": self.content,
            "mood": self.mood.value,
            "createdAt": self.created_at,
            "isFavorite": self.is_favorite,
        }

        # Optional fields are only written when present
        if self.title is not None:
            result["title"] = self.title
        if self.photo is not None:
            result["photo"] = self.photo
        if self.location is not None:
            result["location"] = self.location
        if self.coordinates is not None:
            result["coordinates"] = self.coordinates.to_dict()
        if self.weather is not None:
            result["weather"] = self.weather
        if self.tags is not None:
            result["tags"] = list(self.tags)
        if self.time is not None:
            result["time"] = self.time
        if self.updated_at is not None:
            result["updatedAt"] = self.updated_at

        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JournalEntry":
        coordinates = data.get("coordinates")
        tags = data.get("tags")
        return cls(
            id=str(data["id"]),
            date=data.get("date", ""),
            content=data.get("content", ""),
            mood=Mood(data.get("mood", Mood.NEUTRAL.value)),
            created_at=data.get("createdAt", 0),
            title=data.get("title"),
            photo=data.get("photo"),
            location=data.get("location"),
            coordinates=Coordinates.from_dict(coordinates) if coordinates else None,
            weather=data.get("weather"),
            tags=list(tags) if tags is not None else None,
            time=data.get("time"),
            is_favorite=bool(data.get("isFavorite", False)),
            updated_at=data.get("updatedAt"),
        )


@dataclass
class Goal:
    """A multi-day habit target tracked through daily check-ins."""

    id: str
    title: str
    description: str
    target_days: int
    start_date: str
    end_date: str
    is_active: bool = True
    completed_days: int = 0
    created_at: int = field(default_factory=now_ms)
    reminder_enabled: bool = False
    reminder_time: str = "09:00"
    alarm_sound: AlarmSound = AlarmSound.DEFAULT
    check_in_history: List[str] = field(default_factory=list)
    current_streak: int = 0
    longest_streak: int = 0
    last_check_in: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.completed_days >= self.target_days

    @property
    def progress_percent(self) -> float:
        """Completion as a percentage of the target."""
        if self.target_days <= 0:
            return 100.0
        return min((self.completed_days / self.target_days) * 100, 100.0)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "targetDays": self.target_days,
            "completedDays": self.completed_days,
            "isActive": self.is_active,
            "createdAt": self.created_at,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "reminderEnabled": self.reminder_enabled,
            "reminderTime": self.reminder_time,
            "alarmSound": self.alarm_sound.value,
            "checkInHistory": list(self.check_in_history),
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "lastCheckIn": self.last_check_in,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            target_days=int(data.get("targetDays", 1)),
            start_date=data.get("startDate", ""),
            end_date=data.get("endDate", ""),
            is_active=bool(data.get("isActive", True)),
            completed_days=int(data.get("completedDays", 0)),
            created_at=data.get("createdAt", 0),
            reminder_enabled=bool(data.get("reminderEnabled", False)),
            reminder_time=data.get("reminderTime", "09:00"),
            alarm_sound=AlarmSound(data.get("alarmSound", AlarmSound.DEFAULT.value)),
            check_in_history=list(data.get("checkInHistory", [])),
            current_streak=int(data.get("currentStreak", 0)),
            longest_streak=int(data.get("longestStreak", 0)),
            last_check_in=data.get("lastCheckIn"),
        )


@dataclass
class RoutePoint:
    """One recorded position along a journey's path."""

    latitude: float
    longitude: float
    timestamp: str = field(default_factory=now_iso)

    def to_dict(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutePoint":
        return cls(
            latitude=data["latitude"],
            longitude=data["longitude"],
            timestamp=data.get("timestamp", ""),
        )


@dataclass
class JourneySnapshot:
    """A geotagged mood/note captured during an active journey."""

    latitude: float
    longitude: float
    id: str = field(default_factory=new_id)
    timestamp: str = field(default_factory=now_iso)
    address: Optional[str] = None
    mood_rating: Optional[int] = None
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
            "moodRating": self.mood_rating,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JourneySnapshot":
        return cls(
            id=str(data.get("id") or new_id()),
            timestamp=data.get("timestamp", ""),
            latitude=data["latitude"],
            longitude=data["longitude"],
            address=data.get("address"),
            mood_rating=data.get("moodRating"),
            note=data.get("note"),
        )


@dataclass
class JourneySummary:
    """Textual recap attached to a journey when it ends."""

    physicality: str = ""
    mindset: str = ""
    memory: str = ""
    values: str = ""
    reflective_questions: List[str] = field(default_factory=list)
    narrative: str = ""

    def to_dict(self) -> dict:
        return {
            "physicality": self.physicality,
            "mindset": self.mindset,
            "memory": self.memory,
            "values": self.values,
            "reflectiveQuestions": list(self.reflective_questions),
            "narrative": self.narrative,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JourneySummary":
        return cls(
            physicality=data.get("physicality", ""),
            mindset=data.get("mindset", ""),
            memory=data.get("memory", ""),
            values=data.get("values", ""),
            reflective_questions=list(data.get("reflectiveQuestions", [])),
            narrative=data.get("narrative", ""),
        )


@dataclass
class Journey:
    """A timed, location-tracked session."""

    id: str
    theme: str
    start_time: str
    is_active: bool = True
    end_time: Optional[str] = None
    route: List[RoutePoint] = field(default_factory=list)
    snapshots: List[JourneySnapshot] = field(default_factory=list)
    summary: Optional[JourneySummary] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "theme": self.theme,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "isActive": self.is_active,
            "route": [p.to_dict() for p in self.route],
            "snapshots": [s.to_dict() for s in self.snapshots],
            "summary": self.summary.to_dict() if self.summary else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Journey":
        summary = data.get("summary")
        return cls(
            id=str(data["id"]),
            theme=data.get("theme", ""),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime"),
            is_active=bool(data.get("isActive", False)),
            route=[RoutePoint.from_dict(p) for p in data.get("route", [])],
            snapshots=[JourneySnapshot.from_dict(s) for s in data.get("snapshots", [])],
            summary=JourneySummary.from_dict(summary) if summary else None,
        )
