"""Domain records and SQLModel table exports."""

from .habit import CompletionLedger, Habit, as_day
from .settings import AppSetting

__all__ = [
    "AppSetting",
    "CompletionLedger",
    "Habit",
    "as_day",
]
