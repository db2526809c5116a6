"""
Centralized habit category definitions.
Keys are what gets persisted; display names are what the CLI shows.
"""

from __future__ import annotations

from enum import Enum

from ..errors import ValidationError


class HabitCategory(str, Enum):
    """Closed set of habit categories; UNSET means no category was chosen."""

    UNSET = ""
    HEALTH = "health"
    LEARNING = "learning"
    PRODUCTIVITY = "productivity"
    MINDFULNESS = "mindfulness"
    SOCIAL = "social"
    FINANCE = "finance"
    OTHER = "other"


CATEGORY_DISPLAY_NAMES = {
    HabitCategory.UNSET: "",
    HabitCategory.HEALTH: "Health & Fitness",
    HabitCategory.LEARNING: "Learning",
    HabitCategory.PRODUCTIVITY: "Productivity",
    HabitCategory.MINDFULNESS: "Mindfulness",
    HabitCategory.SOCIAL: "Social",
    HabitCategory.FINANCE: "Finance",
    HabitCategory.OTHER: "Other",
}

# Selectable categories, in the order the original form listed them
HABIT_CATEGORIES = [category for category in HabitCategory if category is not HabitCategory.UNSET]

HABIT_NAME_MAX_LENGTH = 50
HABIT_GOAL_MAX_LENGTH = 30


def parse_category(raw: HabitCategory | str | None) -> HabitCategory:
    """Return the category for a stored or user-supplied key.

    ``None`` and blank strings map to ``HabitCategory.UNSET``; anything else
    that is not a known key raises ``ValidationError``.
    """

    if isinstance(raw, HabitCategory):
        return raw
    key = (raw or "").strip().lower()
    try:
        return HabitCategory(key)
    except ValueError:
        raise ValidationError(f"Unknown habit category: {raw!r}") from None


def category_display_name(category: HabitCategory | str | None) -> str:
    """Human-readable label for a category ("" when unset)."""

    return CATEGORY_DISPLAY_NAMES[parse_category(category)]


__all__ = [
    "CATEGORY_DISPLAY_NAMES",
    "HABIT_CATEGORIES",
    "HABIT_GOAL_MAX_LENGTH",
    "HABIT_NAME_MAX_LENGTH",
    "HabitCategory",
    "category_display_name",
    "parse_category",
]
