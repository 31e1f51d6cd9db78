"""Calendar view ranges (day / week / month / year) and navigation"""
import calendar
from datetime import date, timedelta
from enum import Enum
from typing import List

from app.services.errors import ValidationError


class CalendarView(str, Enum):
    """Calendar view enum"""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _week_start(day: date) -> date:
    # Weeks start on Monday
    return day - timedelta(days=day.weekday())


def _days_between(start: date, end: date) -> List[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def days_for_view(view: CalendarView, current: date) -> List[date]:
    """
    Days displayed by a view around `current`.

    Args:
        view: Calendar view
        current: Anchor date of the view

    Returns:
        - day: [current]
        - week: Monday..Sunday containing current
        - month: whole Monday-start weeks covering the month
        - year: every day of the year

    Raises:
        ValidationError: If the range would leave the supported calendar (years 1..9999)
    """
    view = CalendarView(view)
    try:
        if view == CalendarView.DAY:
            return [current]
        if view == CalendarView.WEEK:
            start = _week_start(current)
            return _days_between(start, start + timedelta(days=6))
        if view == CalendarView.MONTH:
            first = current.replace(day=1)
            last = current.replace(day=calendar.monthrange(current.year, current.month)[1])
            start = _week_start(first)
            end = _week_start(last) + timedelta(days=6)
            return _days_between(start, end)
        return _days_between(date(current.year, 1, 1), date(current.year, 12, 31))
    except (OverflowError, ValueError):
        raise ValidationError(f"{view.value} view of {current} is outside the supported date range")


def _add_months(current: date, months: int) -> date:
    index = current.year * 12 + (current.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    # 1/31 -> 2/28: clamp to the end of the target month
    day = min(current.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def shift_anchor(view: CalendarView, current: date, step: int) -> date:
    """
    Move the view anchor `step` pages forward (positive) or back (negative)

    Raises:
        ValidationError: If step is not an integer or the result leaves years 1..9999
    """
    if not isinstance(step, int) or isinstance(step, bool):
        raise ValidationError(f"step must be an integer, got {step!r}")
    view = CalendarView(view)
    try:
        if view == CalendarView.DAY:
            return current + timedelta(days=step)
        if view == CalendarView.WEEK:
            return current + timedelta(weeks=step)
        if view == CalendarView.MONTH:
            return _add_months(current, step)
        return _add_months(current, 12 * step)
    except (OverflowError, ValueError):
        raise ValidationError(f"Shifting {current} by {step} {view.value}(s) leaves the supported date range")
