"""Journal entry API models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from journal_core.models import Mood


class CoordinatesModel(BaseModel):
    """Latitude/longitude pair."""

    model_config = ConfigDict(from_attributes=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class EntryCreate(BaseModel):
    """Fields accepted when creating an entry."""

    content: str
    mood: Mood = Mood.NEUTRAL
    date: Optional[str] = None
    title: Optional[str] = None
    photo: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[CoordinatesModel] = None
    weather: Optional[str] = None
    tags: Optional[list[str]] = None
    time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    is_favorite: bool = False


class EntryUpdate(BaseModel):
    """Partial update; only fields that are sent are applied."""

    content: Optional[str] = None
    mood: Optional[Mood] = None
    date: Optional[str] = None
    title: Optional[str] = None
    photo: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[CoordinatesModel] = None
    weather: Optional[str] = None
    tags: Optional[list[str]] = None
    time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    is_favorite: Optional[bool] = None


class Entry(BaseModel):
    """Journal entry as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    date: str
    content: str
    mood: Mood
    created_at: int = Field(serialization_alias="createdAt")
    title: Optional[str] = None
    photo: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[CoordinatesModel] = None
    weather: Optional[str] = None
    tags: Optional[list[str]] = None
    time: Optional[str] = None
    is_favorite: bool = Field(serialization_alias="isFavorite")
    updated_at: Optional[int] = Field(default=None, serialization_alias="updatedAt")
