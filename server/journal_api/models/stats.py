"""Journal statistics model."""
from pydantic import BaseModel, Field, ConfigDict


class JournalStats(BaseModel):
    """Counts shown on the profile screen."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(serialization_alias="userName")
    is_dark_mode: bool = Field(serialization_alias="isDarkMode")
    total_entries: int = Field(serialization_alias="totalEntries")
    favorite_entries: int = Field(serialization_alias="favoriteEntries")
    entries_this_month: int = Field(serialization_alias="entriesThisMonth")
    active_goals: int = Field(serialization_alias="activeGoals")
    paused_goals: int = Field(serialization_alias="pausedGoals")
    completed_goals: int = Field(serialization_alias="completedGoals")
    longest_streak: int = Field(serialization_alias="longestStreak")
    total_journeys: int = Field(serialization_alias="totalJourneys")
    completed_journeys: int = Field(serialization_alias="completedJourneys")
