"""Weekly/monthly tracking windows and period navigation."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from ..models.habit import as_day

# Sunday-first, matching the tracking grid layout
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class ViewMode(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True, slots=True)
class Day:
    """One cell of a tracking window."""

    date: date
    label: str


def sunday_index(day: date) -> int:
    """Day-of-week index with 0 = Sunday."""

    return (day.weekday() + 1) % 7


def _make_day(day: date) -> Day:
    return Day(date=day, label=WEEKDAY_LABELS[sunday_index(day)])


def week_start(reference: date | datetime) -> date:
    """The Sunday on or before ``reference``."""

    day = as_day(reference)
    return day - timedelta(days=sunday_index(day))


def window(reference: date | datetime, mode: ViewMode | str) -> list[Day]:
    """Return the ordered days of the period containing ``reference``.

    Weekly windows run Sunday through Saturday and always hold 7 days;
    monthly windows hold every day of the reference month.
    """

    mode = ViewMode(mode)
    day = as_day(reference)
    if mode is ViewMode.WEEKLY:
        start = week_start(day)
        return [_make_day(start + timedelta(days=i)) for i in range(7)]

    days_in_month = monthrange(day.year, day.month)[1]
    return [_make_day(date(day.year, day.month, i)) for i in range(1, days_in_month + 1)]


def _add_months(start: date, months: int) -> date:
    month = start.month - 1 + months
    year = start.year + month // 12
    month = month % 12 + 1
    day = min(start.day, monthrange(year, month)[1])
    return date(year, month, day)


def shift_period(reference: date | datetime, mode: ViewMode | str, steps: int) -> date:
    """Move ``reference`` by ``steps`` weeks or months (negative goes back).

    Month shifts keep the day of month, clamped to the target month's length.
    """

    mode = ViewMode(mode)
    day = as_day(reference)
    if mode is ViewMode.WEEKLY:
        return day + timedelta(days=7 * steps)
    return _add_months(day, steps)


def previous_period(reference: date | datetime, mode: ViewMode | str) -> date:
    return shift_period(reference, mode, -1)


def next_period(reference: date | datetime, mode: ViewMode | str) -> date:
    return shift_period(reference, mode, 1)


def _short_month(day: date) -> str:
    return MONTH_NAMES[day.month - 1][:3]


def period_label(reference: date | datetime, mode: ViewMode | str) -> str:
    """Heading for the period, e.g. ``"Jan 5 - Jan 11"`` or ``"January 2025"``."""

    mode = ViewMode(mode)
    day = as_day(reference)
    if mode is ViewMode.WEEKLY:
        start = week_start(day)
        end = start + timedelta(days=6)
        return f"{_short_month(start)} {start.day} - {_short_month(end)} {end.day}"
    return f"{MONTH_NAMES[day.month - 1]} {day.year}"


__all__ = [
    "Day",
    "ViewMode",
    "MONTH_NAMES",
    "WEEKDAY_LABELS",
    "next_period",
    "period_label",
    "previous_period",
    "shift_period",
    "sunday_index",
    "week_start",
    "window",
]
