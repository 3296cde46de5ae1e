"""Goal API models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from journal_core.models import AlarmSound

TIME_PATTERN = r"^\d{2}:\d{2}$"


class GoalCreate(BaseModel):
    """Fields accepted when creating a goal."""

    title: str
    description: str = ""
    target_days: int = Field(ge=1)
    is_active: bool = True
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    reminder_enabled: bool = False
    reminder_time: str = Field(default="09:00", pattern=TIME_PATTERN)
    alarm_sound: AlarmSound = AlarmSound.DEFAULT


class GoalUpdate(BaseModel):
    """Partial update, including pause/resume through is_active."""

    title: Optional[str] = None
    description: Optional[str] = None
    target_days: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    reminder_enabled: Optional[bool] = None
    reminder_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    alarm_sound: Optional[AlarmSound] = None


class Goal(BaseModel):
    """Goal as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    description: str
    target_days: int = Field(serialization_alias="targetDays")
    completed_days: int = Field(serialization_alias="completedDays")
    is_active: bool = Field(serialization_alias="isActive")
    created_at: int = Field(serialization_alias="createdAt")
    start_date: str = Field(serialization_alias="startDate")
    end_date: str = Field(serialization_alias="endDate")
    reminder_enabled: bool = Field(serialization_alias="reminderEnabled")
    reminder_time: str = Field(serialization_alias="reminderTime")
    alarm_sound: AlarmSound = Field(serialization_alias="alarmSound")
    check_in_history: list[str] = Field(serialization_alias="checkInHistory")
    current_streak: int = Field(serialization_alias="currentStreak")
    longest_streak: int = Field(serialization_alias="longestStreak")
    last_check_in: Optional[str] = Field(default=None, serialization_alias="lastCheckIn")


class CheckInResult(BaseModel):
    """Outcome of a check-in request."""

    model_config = ConfigDict(populate_by_name=True)

    recorded: bool
    achieved: bool = False
    message: str
    goal: Goal
