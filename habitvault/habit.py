"""
Habit data model: habits, their completions and streak bookkeeping.

Everything in this module is pure in-memory state. Persisting a ledger is
the job of :class:`habitvault.storage.Vault`.
"""

import datetime
import secrets
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from . import config


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _local_today() -> datetime.date:
    """Current calendar date in local time."""
    return datetime.date.today()


def generate_habit_id() -> str:
    """Time-based habit id, with a random suffix to keep same-second ids apart."""
    return f"{config.HABIT_ID_PREFIX}{int(time.time())}_{secrets.token_hex(3)}"


@dataclass
class Habit:
    """Represents a single tracked habit."""
    id: str
    name: str
    description: str = ""
    created_at: datetime.datetime = field(default_factory=_utc_now)
    target_days_per_week: int = config.DEFAULT_TARGET_DAYS_PER_WEEK
    streak: int = 0
    longest_streak: int = 0

    @classmethod
    def create(cls, name: str, description: str = "",
               target_days_per_week: int = config.DEFAULT_TARGET_DAYS_PER_WEEK) -> 'Habit':
        """Create a new habit with a generated id and the current timestamp."""
        return cls(
            id=generate_habit_id(),
            name=name,
            description=description,
            target_days_per_week=target_days_per_week,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'created_at': self.created_at.isoformat(),
            'target_days_per_week': self.target_days_per_week,
            'streak': self.streak,
            'longest_streak': self.longest_streak,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Habit':
        """Create from dictionary."""
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            description=str(data['description']),
            created_at=datetime.datetime.fromisoformat(data['created_at']),
            target_days_per_week=int(data['target_days_per_week']),
            streak=int(data['streak']),
            longest_streak=int(data['longest_streak']),
        )


@dataclass
class HabitCompletion:
    """A habit marked done on one calendar date."""
    habit_id: str
    date: datetime.date
    completed_at: datetime.datetime = field(default_factory=_utc_now)
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'habit_id': self.habit_id,
            'date': self.date.isoformat(),
            'completed_at': self.completed_at.isoformat(),
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HabitCompletion':
        notes = data.get('notes')
        return cls(
            habit_id=str(data['habit_id']),
            date=datetime.date.fromisoformat(data['date']),
            completed_at=datetime.datetime.fromisoformat(data['completed_at']),
            notes=None if notes is None else str(notes),
        )


def streak_tier(streak: int) -> str:
    """Classify a streak length for display: "low", "building" or "on_fire"."""
    if streak >= config.STREAK_TIER_ON_FIRE:
        return "on_fire"
    if streak >= config.STREAK_TIER_BUILDING:
        return "building"
    return "low"


@dataclass
class HabitLedger:
    """All habits and completions of one vault, in insertion order.

    Every completion refers to a habit in the same ledger; removing a habit
    removes its completions as well.
    """
    habits: List[Habit] = field(default_factory=list)
    completions: List[HabitCompletion] = field(default_factory=list)

    def add_habit(self, habit: Habit) -> None:
        """Append a habit. Callers are responsible for generating distinct ids."""
        self.habits.append(habit)

    def remove_habit(self, habit_id: str) -> None:
        """Remove a habit together with all of its completions."""
        self.habits = [h for h in self.habits if h.id != habit_id]
        self.completions = [c for c in self.completions if c.habit_id != habit_id]

    def update_habit(self, habit_id: str, name: str, description: str) -> None:
        """Rename a habit and replace its description. Streaks are untouched."""
        habit = self.get_habit(habit_id)
        if habit is not None:
            habit.name = name
            habit.description = description

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def mark_completed(self, habit_id: str, date: datetime.date,
                       notes: Optional[str] = None) -> None:
        """Record a completion for (habit_id, date) unless one already exists."""
        if self.get_habit(habit_id) is None or self.is_completed_on_date(habit_id, date):
            return
        self.completions.append(HabitCompletion(habit_id=habit_id, date=date, notes=notes))
        self._update_streak(habit_id)

    def unmark_completed(self, habit_id: str, date: datetime.date) -> None:
        self.completions = [
            c for c in self.completions
            if not (c.habit_id == habit_id and c.date == date)
        ]
        self._update_streak(habit_id)

    def is_completed_on_date(self, habit_id: str, date: datetime.date) -> bool:
        return any(c.habit_id == habit_id and c.date == date for c in self.completions)

    def completions_for(self, habit_id: str) -> List[HabitCompletion]:
        return [c for c in self.completions if c.habit_id == habit_id]

    def _update_streak(self, habit_id: str) -> None:
        """
        Recompute the current streak of one habit.

        The streak is the number of consecutive completed days ending today;
        a run that stops before today counts as zero. The longest streak is
        only ever raised here. Cost grows with the length of today's run.
        """
        habit = self.get_habit(habit_id)
        if habit is None:
            return

        completed = {c.date for c in self.completions if c.habit_id == habit_id}
        day = _local_today()
        streak = 0
        while day in completed:
            streak += 1
            day -= datetime.timedelta(days=1)

        habit.streak = streak
        if streak > habit.longest_streak:
            habit.longest_streak = streak

    def to_dict(self) -> Dict[str, Any]:
        return {
            'habits': [h.to_dict() for h in self.habits],
            'completions': [c.to_dict() for c in self.completions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HabitLedger':
        return cls(
            habits=[Habit.from_dict(h) for h in data['habits']],
            completions=[HabitCompletion.from_dict(c) for c in data['completions']],
        )
