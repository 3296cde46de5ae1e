"""Derived, read-only views over journal state."""
from datetime import date
from typing import Dict, List, Optional

from .entries import local_day
from .models import Goal, JournalEntry, Journey, Mood


def favorite_count(entries: List[JournalEntry]) -> int:
    return sum(1 for e in entries if e.is_favorite)


def entries_in_month(entries: List[JournalEntry], today: Optional[date] = None) -> int:
    """Entries filed in the same calendar month as today."""
    today = today or date.today()
    count = 0
    for entry in entries:
        day = local_day(entry.date)
        if day and day.year == today.year and day.month == today.month:
            count += 1
    return count


def entry_count_for_day(entries: List[JournalEntry], day: date) -> int:
    return sum(1 for e in entries if local_day(e.date) == day)


def mood_for_day(entries: List[JournalEntry], day: date) -> Optional[Mood]:
    """Mood of the newest entry filed on a day, if any."""
    for entry in entries:
        if local_day(entry.date) == day:
            return entry.mood
    return None


def goal_buckets(goals: List[Goal]) -> Dict[str, List[Goal]]:
    """
    Split goals the way the goals screen lists them.

    Completed goals land in "completed" whether or not they are paused.
    """
    buckets: Dict[str, List[Goal]] = {"active": [], "paused": [], "completed": []}
    for goal in goals:
        if goal.is_completed:
            buckets["completed"].append(goal)
        elif goal.is_active:
            buckets["active"].append(goal)
        else:
            buckets["paused"].append(goal)
    return buckets


def get_summary(
    entries: List[JournalEntry],
    goals: List[Goal],
    journeys: List[Journey],
    today: Optional[date] = None,
) -> Dict:
    """Counts shown on the profile screen."""
    buckets = goal_buckets(goals)
    return {
        "total_entries": len(entries),
        "favorite_entries": favorite_count(entries),
        "entries_this_month": entries_in_month(entries, today),
        "active_goals": len(buckets["active"]),
        "paused_goals": len(buckets["paused"]),
        "completed_goals": len(buckets["completed"]),
        "longest_streak": max((g.longest_streak for g in goals), default=0),
        "total_journeys": len(journeys),
        "completed_journeys": sum(1 for j in journeys if not j.is_active),
    }
