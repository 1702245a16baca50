"""Tests for the month view model."""

import datetime

from habitvault.habit import Habit, HabitLedger
from habitvault.month_view import DayCell, MonthView, month_grid, toggle_day


class TestMonthView:

    def test_next_wraps_year(self):
        assert MonthView(2025, 12).next() == MonthView(2026, 1)
        assert MonthView(2026, 5).next() == MonthView(2026, 6)

    def test_previous_wraps_year(self):
        assert MonthView(2026, 1).previous() == MonthView(2025, 12)
        assert MonthView(2026, 5).previous() == MonthView(2026, 4)

    def test_current(self):
        assert MonthView.current(datetime.date(2026, 3, 15)) == MonthView(2026, 3)

    def test_label(self):
        assert MonthView(2026, 3).label == "March 2026"


class TestMonthGrid:

    def test_grid_layout_and_flags(self):
        ledger = HabitLedger()
        ledger.add_habit(Habit(id="h1", name="Read"))
        ledger.mark_completed("h1", datetime.date(2026, 3, 2))
        today = datetime.date(2026, 3, 15)

        weeks = month_grid(ledger, "h1", MonthView(2026, 3), today=today)

        # March 2026 starts on a Sunday: six padding cells in the first row.
        assert weeks[0][:6] == [None] * 6
        assert weeks[0][6] == DayCell(datetime.date(2026, 3, 1), completed=False, is_today=False)
        cells = [cell for week in weeks for cell in week if cell is not None]
        assert len(cells) == 31
        assert all(len(week) == 7 for week in weeks)
        assert [c.date.day for c in cells if c.completed] == [2]
        assert [c.date.day for c in cells if c.is_today] == [15]

    def test_other_habits_not_shown(self):
        ledger = HabitLedger()
        ledger.add_habit(Habit(id="h1", name="Read"))
        ledger.add_habit(Habit(id="h2", name="Run"))
        ledger.mark_completed("h2", datetime.date(2026, 3, 2))
        weeks = month_grid(ledger, "h1", MonthView(2026, 3), today=datetime.date(2026, 3, 15))
        assert not any(cell.completed for week in weeks for cell in week if cell)


class TestToggleDay:

    def test_toggle_marks_then_unmarks(self, today):
        ledger = HabitLedger()
        ledger.add_habit(Habit(id="h1", name="Read"))
        assert toggle_day(ledger, "h1", today) is True
        assert ledger.get_habit("h1").streak == 1
        assert toggle_day(ledger, "h1", today) is False
        assert ledger.get_habit("h1").streak == 0
        assert ledger.get_habit("h1").longest_streak == 1

    def test_toggle_unknown_habit(self, today):
        ledger = HabitLedger()
        assert toggle_day(ledger, "missing", today) is False
        assert ledger.completions == []
