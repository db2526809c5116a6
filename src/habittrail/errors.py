"""Error types raised by the habit store and its storage layer."""

from __future__ import annotations


class HabitTrailError(Exception):
    """Base class for all application errors."""


class ValidationError(HabitTrailError, ValueError):
    """Rejected user input: empty, too long or duplicate name, unknown category."""


class NotFoundError(HabitTrailError, LookupError):
    """An operation referenced a habit identifier that does not exist."""

    def __init__(self, habit_id: str):
        super().__init__(f"Habit not found: {habit_id}")
        self.habit_id = habit_id


class PersistenceError(HabitTrailError, RuntimeError):
    """Reading, writing or decoding the stored habit list failed."""


__all__ = ["HabitTrailError", "NotFoundError", "PersistenceError", "ValidationError"]
