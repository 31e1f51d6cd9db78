"""Calendar view range and navigation tests"""
from datetime import date, timedelta

import pytest

from app.services.calendar.views import CalendarView, days_for_view, shift_anchor
from app.services.errors import ValidationError


class TestDaysForView:
    def test_day(self):
        assert days_for_view(CalendarView.DAY, date(2025, 10, 8)) == [date(2025, 10, 8)]

    def test_week_runs_monday_to_sunday(self):
        days = days_for_view(CalendarView.WEEK, date(2025, 10, 8))
        assert len(days) == 7
        assert days[0] == date(2025, 10, 6)
        assert days[-1] == date(2025, 10, 12)

    def test_month_covers_whole_weeks(self):
        days = days_for_view(CalendarView.MONTH, date(2025, 10, 15))
        assert days[0] == date(2025, 9, 29)
        assert days[-1] == date(2025, 11, 2)
        assert len(days) == 35
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    def test_year(self):
        days = days_for_view(CalendarView.YEAR, date(2024, 6, 1))
        assert len(days) == 366
        assert days[0] == date(2024, 1, 1)
        assert days[-1] == date(2024, 12, 31)

    def test_view_accepts_plain_string(self):
        assert days_for_view("day", date(2025, 1, 1)) == [date(2025, 1, 1)]


class TestShiftAnchor:
    def test_day_and_week(self):
        assert shift_anchor(CalendarView.DAY, date(2025, 12, 31), 1) == date(2026, 1, 1)
        assert shift_anchor(CalendarView.WEEK, date(2025, 10, 8), -1) == date(2025, 10, 1)

    def test_month_clamps_to_month_end(self):
        assert shift_anchor(CalendarView.MONTH, date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert shift_anchor(CalendarView.MONTH, date(2025, 1, 15), -1) == date(2024, 12, 15)

    def test_year_from_leap_day(self):
        assert shift_anchor(CalendarView.YEAR, date(2024, 2, 29), 1) == date(2025, 2, 28)

    @pytest.mark.parametrize("step", ["1", 1.0, True])
    def test_non_integer_step(self, step):
        with pytest.raises(ValidationError):
            shift_anchor(CalendarView.DAY, date(2025, 1, 1), step)


class TestDateRangeEdges:
    @pytest.mark.parametrize("view, current, step", [
        (CalendarView.DAY, date.max, 1),
        (CalendarView.WEEK, date.min, -1),
        (CalendarView.MONTH, date(9999, 12, 1), 1),
        (CalendarView.YEAR, date(9999, 6, 1), 1),
        (CalendarView.YEAR, date(1, 6, 1), -1),
    ])
    def test_shift_past_supported_range(self, view, current, step):
        with pytest.raises(ValidationError):
            shift_anchor(view, current, step)

    @pytest.mark.parametrize("view", [CalendarView.WEEK, CalendarView.MONTH])
    def test_view_past_last_date(self, view):
        with pytest.raises(ValidationError):
            days_for_view(view, date.max)

    def test_last_day_still_shown(self):
        assert days_for_view(CalendarView.DAY, date.max) == [date.max]
