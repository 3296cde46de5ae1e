"""Journey API models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class JourneyStart(BaseModel):
    theme: str = Field(min_length=1)


class RoutePointCreate(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class SnapshotCreate(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: Optional[str] = None
    mood_rating: Optional[int] = Field(default=None, ge=1, le=10)
    note: Optional[str] = None


class RoutePoint(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    latitude: float
    longitude: float
    timestamp: str


class Snapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    timestamp: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    mood_rating: Optional[int] = Field(default=None, serialization_alias="moodRating")
    note: Optional[str] = None


class JourneySummary(BaseModel):
    """End-of-journey recap."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    physicality: str = ""
    mindset: str = ""
    memory: str = ""
    values: str = ""
    reflective_questions: list[str] = Field(default_factory=list, serialization_alias="reflectiveQuestions")
    narrative: str = ""


class JourneyEnd(BaseModel):
    """End request; without a summary the server assembles one."""

    summary: Optional[JourneySummary] = None


class Journey(BaseModel):
    """Journey as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    theme: str
    start_time: str = Field(serialization_alias="startTime")
    end_time: Optional[str] = Field(default=None, serialization_alias="endTime")
    is_active: bool = Field(serialization_alias="isActive")
    route: list[RoutePoint]
    snapshots: list[Snapshot]
    summary: Optional[JourneySummary] = None
