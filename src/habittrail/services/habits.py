"""Habit service helpers for progress, streaks and the daily summary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..models.habit import Habit, as_day
from .periods import Day

STREAK_SCAN_LIMIT_DAYS = 365


@dataclass(slots=True)
class HabitProgress:
    """Completion figures for one habit over one window."""

    completed: int
    total: int
    percentage: int


@dataclass(slots=True)
class HabitSummary:
    """Figures for the summary panel."""

    total_habits: int
    completed_today: int
    current_streak: int
    longest_streak: int


def _percentage(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    ratio = Decimal(completed) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_progress(habit: Habit, days: Sequence[Day | date]) -> HabitProgress:
    """Count completed days of ``habit`` inside a tracking window."""

    total = len(days)
    completed = sum(
        1 for day in days if habit.is_completed(day.date if isinstance(day, Day) else day)
    )
    return HabitProgress(completed=completed, total=total, percentage=_percentage(completed, total))


def _active_days(habits: Iterable[Habit]) -> set[date]:
    """Days on which at least one habit was completed."""

    active: set[date] = set()
    for habit in habits:
        active.update(habit.completions)
    return active


def current_streak(
    habits: Iterable[Habit],
    today: date | datetime | None = None,
    *,
    max_days: int = STREAK_SCAN_LIMIT_DAYS,
) -> int:
    """Consecutive active days ending at ``today``.

    A day is active when any habit was completed on it. No completion today
    means a streak of 0, even if yesterday was active. At most ``max_days``
    days are scanned.
    """

    today = as_day(today or date.today())
    active = _active_days(habits)

    streak = 0
    cursor = today
    while streak < max_days and cursor in active:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(habits: Iterable[Habit]) -> int:
    """Longest run of consecutive active days ever recorded."""

    longest = 0
    run = 0
    last_day: date | None = None
    for day in sorted(_active_days(habits)):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day
    return longest


def completed_today(habits: Iterable[Habit], today: date | datetime | None = None) -> int:
    """Number of habits marked complete on ``today``."""

    today = as_day(today or date.today())
    return sum(1 for habit in habits if habit.is_completed(today))


def summarize(habits: Sequence[Habit], today: date | datetime | None = None) -> HabitSummary:
    """Compose the summary panel figures."""

    today = as_day(today or date.today())
    return HabitSummary(
        total_habits=len(habits),
        completed_today=completed_today(habits, today),
        current_streak=current_streak(habits, today),
        longest_streak=longest_streak(habits),
    )


__all__ = [
    "HabitProgress",
    "HabitSummary",
    "STREAK_SCAN_LIMIT_DAYS",
    "completed_today",
    "compute_progress",
    "current_streak",
    "longest_streak",
    "summarize",
]
