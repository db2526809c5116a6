"""Tests for habit streak calculations.

These tests verify the logic for calculating current and longest streaks,
including edge cases like:
- Consecutive days across several habits
- Gaps in habit completion
- Today without a completion
- Empty habit data
- The one-year scan limit
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from habittrail.models.habit import CompletionLedger, Habit
from habittrail.services.habits import (
    completed_today,
    current_streak,
    longest_streak,
    summarize,
)

TODAY = date(2025, 1, 8)


def _habit(name: str, *days: date) -> Habit:
    return Habit(
        id=name.lower(),
        name=name,
        created_at=datetime(2024, 1, 1),
        completions=CompletionLedger(days),
    )


def _days_back(count: int, *, end: date = TODAY) -> list[date]:
    return [end - timedelta(days=i) for i in range(count)]


class TestCurrentStreak:
    """Tests for the consecutive-day streak ending today."""

    def test_no_habits_returns_zero(self):
        assert current_streak([], TODAY) == 0

    def test_habit_without_entries_returns_zero(self):
        assert current_streak([_habit("Exercise")], TODAY) == 0

    def test_single_entry_today_returns_one(self):
        assert current_streak([_habit("Exercise", TODAY)], TODAY) == 1

    def test_today_and_yesterday_returns_two(self):
        habit = _habit("Reading", TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=3))

        assert current_streak([habit], TODAY) == 2

    def test_missing_today_returns_zero(self):
        """Yesterday's run does not count when today has no completion."""
        habit = _habit("Exercise", *_days_back(5, end=TODAY - timedelta(days=1)))

        assert current_streak([habit], TODAY) == 0

    def test_days_can_come_from_different_habits(self):
        reading = _habit("Reading", TODAY, TODAY - timedelta(days=2))
        running = _habit("Running", TODAY - timedelta(days=1), TODAY - timedelta(days=3))

        assert current_streak([reading, running], TODAY) == 4

    def test_accepts_datetime_today(self):
        habit = _habit("Yoga", *_days_back(3))

        assert current_streak([habit], datetime(2025, 1, 8, 23, 59)) == 3

    def test_capped_at_one_year(self):
        habit = _habit("Meditation", *_days_back(400))

        assert current_streak([habit], TODAY) == 365

    def test_future_completions_do_not_count(self):
        habit = _habit("Journal", TODAY + timedelta(days=1))

        assert current_streak([habit], TODAY) == 0


class TestLongestStreak:
    """Tests for calculating the longest historical streak."""

    def test_no_entries_returns_zero(self):
        assert longest_streak([_habit("Exercise")]) == 0
        assert longest_streak([]) == 0

    def test_multiple_runs_returns_longest(self):
        start1, start2, start3 = date(2024, 1, 1), date(2024, 1, 10), date(2024, 1, 20)
        days = (
            [start1 + timedelta(days=i) for i in range(3)]
            + [start2 + timedelta(days=i) for i in range(7)]
            + [start3 + timedelta(days=i) for i in range(4)]
        )

        assert longest_streak([_habit("Reading", *days)]) == 7

    def test_runs_merge_across_habits(self):
        a = _habit("A", date(2024, 3, 1), date(2024, 3, 3))
        b = _habit("B", date(2024, 3, 2), date(2024, 3, 4))

        assert longest_streak([a, b]) == 4


def test_completed_today_counts_habits():
    habits = [_habit("A", TODAY), _habit("B", TODAY - timedelta(days=1)), _habit("C", TODAY)]

    assert completed_today(habits, TODAY) == 2


def test_summary_combines_figures():
    habits = [_habit("A", *_days_back(3)), _habit("B")]

    summary = summarize(habits, TODAY)

    assert summary.total_habits == 2
    assert summary.completed_today == 1
    assert summary.current_streak == 3
    assert summary.longest_streak == 3
