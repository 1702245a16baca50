"""
Month view model for a single habit.

Plain data for a calendar widget: which days of a month are completed and
which one is today. Rendering is left to the presentation layer.
"""

import calendar
import datetime
from dataclasses import dataclass
from typing import List, Optional

from .habit import HabitLedger


@dataclass(frozen=True)
class MonthView:
    """A calendar month, navigable forwards and backwards."""
    year: int
    month: int

    @classmethod
    def current(cls, today: Optional[datetime.date] = None) -> 'MonthView':
        today = today or datetime.date.today()
        return cls(today.year, today.month)

    @property
    def first_day(self) -> datetime.date:
        return datetime.date(self.year, self.month, 1)

    @property
    def label(self) -> str:
        return self.first_day.strftime("%B %Y")

    def next(self) -> 'MonthView':
        if self.month == 12:
            return MonthView(self.year + 1, 1)
        return MonthView(self.year, self.month + 1)

    def previous(self) -> 'MonthView':
        if self.month == 1:
            return MonthView(self.year - 1, 12)
        return MonthView(self.year, self.month - 1)


@dataclass(frozen=True)
class DayCell:
    date: datetime.date
    completed: bool
    is_today: bool


def month_grid(ledger: HabitLedger, habit_id: str, view: MonthView,
               today: Optional[datetime.date] = None) -> List[List[Optional[DayCell]]]:
    """
    Build the Monday-first week rows of a month for one habit.

    Days outside the month are None.
    """
    today = today or datetime.date.today()
    completed = {c.date for c in ledger.completions_for(habit_id)}
    weeks = []
    for week in calendar.Calendar(firstweekday=calendar.MONDAY).monthdayscalendar(view.year, view.month):
        row = []
        for day in week:
            if day == 0:
                row.append(None)
                continue
            date = datetime.date(view.year, view.month, day)
            row.append(DayCell(date=date, completed=date in completed, is_today=date == today))
        weeks.append(row)
    return weeks


def toggle_day(ledger: HabitLedger, habit_id: str, day: datetime.date) -> bool:
    """Flip the completion state of one day and return the new state."""
    if ledger.is_completed_on_date(habit_id, day):
        ledger.unmark_completed(habit_id, day)
        return False
    ledger.mark_completed(habit_id, day)
    return ledger.is_completed_on_date(habit_id, day)
