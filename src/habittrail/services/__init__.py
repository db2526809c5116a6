"""Service module exports."""

from . import habit_codec, habit_store, habits, periods

__all__ = ["habit_codec", "habit_store", "habits", "periods"]
