"""Habits tracking data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Iterator

from ..constants.categories import HabitCategory


def as_day(value: date | datetime) -> date:
    """Reduce a date or datetime to its calendar day."""

    if isinstance(value, datetime):
        return value.date()
    return value


class CompletionLedger:
    """Set of calendar days on which a habit was completed.

    Entries are unique per day; time of day is discarded on the way in.
    """

    __slots__ = ("_days",)

    def __init__(self, days: Iterable[date | datetime] = ()):
        self._days: set[date] = {as_day(d) for d in days}

    def is_completed(self, day: date | datetime) -> bool:
        return as_day(day) in self._days

    def toggle(self, day: date | datetime) -> bool:
        """Flip completion for ``day`` and return the new state."""

        key = as_day(day)
        if key in self._days:
            self._days.remove(key)
            return False
        self._days.add(key)
        return True

    def dates(self) -> list[date]:
        """Completion days in ascending order."""

        return sorted(self._days)

    def __contains__(self, day: object) -> bool:
        if isinstance(day, (date, datetime)):
            return self.is_completed(day)
        return False

    def __iter__(self) -> Iterator[date]:
        return iter(self.dates())

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompletionLedger):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        return f"CompletionLedger({[d.isoformat() for d in self.dates()]})"


@dataclass
class Habit:
    """A user-defined habit tracked per calendar day."""

    id: str
    name: str
    created_at: datetime
    goal: str = ""
    category: HabitCategory = HabitCategory.UNSET
    completions: CompletionLedger = field(default_factory=CompletionLedger)

    def is_completed(self, day: date | datetime) -> bool:
        return self.completions.is_completed(day)

    def toggle(self, day: date | datetime) -> bool:
        return self.completions.toggle(day)


__all__ = ["CompletionLedger", "Habit", "as_day"]
