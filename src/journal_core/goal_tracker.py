"""
Goal Tracking Module.

Tracks multi-day habit goals through daily check-ins, maintaining the
current and longest streak of consecutive check-in days and capping
completed days at the goal's target.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from .models import AlarmSound, Goal, new_id, now_iso, now_ms

logger = logging.getLogger(__name__)

_IDENTITY_FIELDS = {"id", "created_at"}

# Only last_check_in may be cleared; None for anything else is ignored
_NULLABLE_FIELDS = {"last_check_in"}


@dataclass
class CheckInEvent:
    """Event generated when a check-in is recorded."""

    event_type: str  # checked_in, achieved
    goal_id: str
    goal_title: str
    day: str
    current_streak: int
    longest_streak: int
    completed_days: int
    target_days: int
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "goal_id": self.goal_id,
            "goal_title": self.goal_title,
            "day": self.day,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "completed_days": self.completed_days,
            "target_days": self.target_days,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


def _parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def default_end_date(start_date: str, target_days: int) -> str:
    """
    Start date plus target_days days, in the same ISO form as the start.

    A date-only start ("2024-05-01") yields a date-only end; a full
    timestamp yields a timestamp.
    """
    start = datetime.fromisoformat(start_date.replace("Z", "+00:00"))
    end = start + timedelta(days=target_days)
    if len(start_date) == 10:
        return end.date().isoformat()
    return end.isoformat()


def next_streak(current_streak: int, last_check_in: Optional[date], today: date) -> int:
    """
    Streak value after checking in on `today`.

    Consecutive only when today is exactly one day after the last
    check-in; any other gap (including none recorded) restarts at 1.
    """
    if last_check_in is None:
        return 1
    if (today - last_check_in).days == 1:
        return current_streak + 1
    return 1


class GoalTracker:
    """
    Manages goals and their daily check-ins.

    Goals are kept newest-first. Unknown goal ids are ignored by every
    operation.
    """

    def __init__(self, goals: Optional[List[Goal]] = None):
        self.goals: List[Goal] = list(goals or [])
        self._event_history: List[CheckInEvent] = []

    def __len__(self) -> int:
        return len(self.goals)

    def get(self, goal_id: str) -> Optional[Goal]:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        return None

    def add(
        self,
        title: str,
        description: str,
        target_days: int,
        is_active: bool = True,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        reminder_enabled: bool = False,
        reminder_time: str = "09:00",
        alarm_sound: AlarmSound = AlarmSound.DEFAULT,
    ) -> Goal:
        """
        Create a goal with empty check-in history.

        Args:
            title: Goal title
            description: Free-text description
            target_days: Number of check-in days to complete the goal
            is_active: False creates the goal paused
            start_date: ISO start (defaults to now)
            end_date: ISO end (defaults to start + target_days days)
            reminder_enabled: Whether a daily reminder is scheduled
            reminder_time: HH:MM of the reminder
            alarm_sound: Sound used by the reminder

        Returns:
            The created goal
        """
        start = start_date or now_iso()
        goal = Goal(
            id=new_id(),
            title=title,
            description=description,
            target_days=target_days,
            is_active=is_active,
            start_date=start,
            end_date=end_date or default_end_date(start, target_days),
            created_at=now_ms(),
            reminder_enabled=reminder_enabled,
            reminder_time=reminder_time,
            alarm_sound=AlarmSound(alarm_sound),
        )
        self.goals.insert(0, goal)
        logger.info(f"[GOALS] Added goal: {goal.title} ({goal.target_days} days)")
        return goal

    def update(self, goal_id: str, changes: Dict[str, Any]) -> Optional[Goal]:
        """Shallow-merge changes into a goal."""
        goal = self.get(goal_id)
        if goal is None:
            logger.debug(f"[GOALS] Update skipped, no goal {goal_id}")
            return None

        for name, value in changes.items():
            if name in _IDENTITY_FIELDS:
                continue
            if value is None and name not in _NULLABLE_FIELDS:
                logger.warning(f"[GOALS] Ignoring empty value for field '{name}'")
                continue
            if not hasattr(goal, name):
                logger.warning(f"[GOALS] Ignoring unknown goal field '{name}'")
                continue
            if name == "alarm_sound":
                value = AlarmSound(value)
            setattr(goal, name, value)

        # A lowered target never leaves more completed days than it allows
        goal.completed_days = min(goal.completed_days, goal.target_days)
        logger.info(f"[GOALS] Updated goal {goal.title}")
        return goal

    def pause(self, goal_id: str) -> Optional[Goal]:
        return self.update(goal_id, {"is_active": False})

    def resume(self, goal_id: str) -> Optional[Goal]:
        return self.update(goal_id, {"is_active": True})

    def delete(self, goal_id: str) -> bool:
        before = len(self.goals)
        self.goals = [g for g in self.goals if g.id != goal_id]
        removed = len(self.goals) < before
        if removed:
            logger.info(f"[GOALS] Removed goal {goal_id}")
        return removed

    def check_in(self, goal_id: str, today: Optional[date] = None) -> Optional[CheckInEvent]:
        """
        Record today's check-in for a goal.

        At most one check-in is recorded per calendar day; repeated calls
        on the same day change nothing.

        Args:
            goal_id: Goal to check in
            today: Calendar day of the check-in (defaults to the local date)

        Returns:
            CheckInEvent if a check-in was recorded, None otherwise
        """
        goal = self.get(goal_id)
        if goal is None:
            logger.debug(f"[GOALS] Check-in skipped, no goal {goal_id}")
            return None

        if today is None:
            today = date.today()
        day = today.isoformat()

        if goal.last_check_in == day or day in goal.check_in_history:
            logger.debug(f"[GOALS] {goal.title} already checked in on {day}")
            return None

        last = _parse_day(goal.last_check_in)
        if goal.last_check_in and last is None:
            logger.warning(
                f"[GOALS] Unreadable last check-in '{goal.last_check_in}' for {goal.title}, "
                "restarting streak"
            )

        streak = next_streak(goal.current_streak, last, today)
        was_completed = goal.is_completed

        goal.current_streak = streak
        goal.longest_streak = max(goal.longest_streak, streak)
        goal.completed_days = min(goal.completed_days + 1, goal.target_days)
        goal.check_in_history.append(day)
        goal.last_check_in = day

        if goal.is_completed and not was_completed:
            event_type = "achieved"
            message = f"You completed {goal.title}! {goal.target_days} days done."
            logger.info(f"[GOALS] {goal.title} ACHIEVED on {day}")
        else:
            event_type = "checked_in"
            message = f"Day {goal.completed_days} of {goal.target_days}. Streak: {streak}."

        event = CheckInEvent(
            event_type=event_type,
            goal_id=goal.id,
            goal_title=goal.title,
            day=day,
            current_streak=goal.current_streak,
            longest_streak=goal.longest_streak,
            completed_days=goal.completed_days,
            target_days=goal.target_days,
            message=message,
        )
        self._event_history.append(event)

        logger.debug(
            f"[GOALS] {goal.title}: {goal.completed_days}/{goal.target_days} "
            f"({goal.progress_percent:.0f}%) streak={streak} longest={goal.longest_streak}"
        )
        return event

    def search(self, query: str) -> List[Goal]:
        """Goals whose title or description contains the query (case-insensitive)."""
        if not query:
            return list(self.goals)
        needle = query.lower()
        return [
            g for g in self.goals
            if needle in g.title.lower() or needle in g.description.lower()
        ]

    def get_event_history(self, count: int = 10) -> List[Dict]:
        """Get recent check-in events."""
        return [e.to_dict() for e in self._event_history[-count:]]
