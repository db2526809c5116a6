"""In-memory habit list with validation and key-value persistence."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Callable, Optional

from ..constants import DEFAULT_STORAGE_KEY
from ..constants.categories import (
    HABIT_GOAL_MAX_LENGTH,
    HABIT_NAME_MAX_LENGTH,
    HabitCategory,
    parse_category,
)
from ..domain.repositories import KeyValueStore
from ..errors import NotFoundError, PersistenceError, ValidationError
from ..logging_config import get_logger
from ..models.habit import CompletionLedger, Habit
from . import habit_codec

logger = get_logger("store")


def _new_id() -> str:
    return uuid.uuid4().hex


class HabitStore:
    """Owns the habit list for one session.

    Lifecycle is ``open`` (load), any number of mutations, each followed by a
    save of the full list. A failed save leaves the in-memory list mutated,
    marks the store ``dirty`` and raises ``PersistenceError``.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.storage = storage
        self.storage_key = storage_key
        self._clock = clock
        self._id_factory = id_factory
        self._habits: list[Habit] = []
        self.dirty = False

    @classmethod
    def open(cls, storage: KeyValueStore, **kwargs) -> "HabitStore":
        """Create a store and load the persisted list."""

        store = cls(storage, **kwargs)
        store.load()
        return store

    # -- persistence -----------------------------------------------------

    def load(self) -> list[Habit]:
        """Replace the in-memory list with the stored one.

        Absent, corrupt or unreadable data yields an empty list and the slot
        is cleared.
        """

        try:
            payload = self.storage.get(self.storage_key)
            habits = habit_codec.loads(payload) if payload is not None else []
        except PersistenceError as exc:
            logger.warning("Discarding stored habits: %s", exc)
            habits = []
            try:
                self.storage.delete(self.storage_key)
            except PersistenceError:
                logger.warning("Could not clear storage slot %s", self.storage_key)

        self._habits = habits
        self.dirty = False
        logger.info("Loaded habits", extra={"count": len(habits)})
        return list(habits)

    def save(self) -> None:
        """Write the full list to storage."""

        try:
            self.storage.set(self.storage_key, habit_codec.dumps(self._habits))
        except PersistenceError:
            self.dirty = True
            logger.warning("Saving habits failed; in-memory changes are unsaved", exc_info=True)
            raise
        self.dirty = False

    # -- queries ---------------------------------------------------------

    @property
    def habits(self) -> tuple[Habit, ...]:
        return tuple(self._habits)

    def __len__(self) -> int:
        return len(self._habits)

    def get(self, habit_id: str) -> Optional[Habit]:
        return next((h for h in self._habits if h.id == habit_id), None)

    def find_by_name(self, name: str) -> Optional[Habit]:
        key = name.strip().casefold()
        return next((h for h in self._habits if h.name.casefold() == key), None)

    # -- validation ------------------------------------------------------

    def _validate(
        self,
        name: str,
        goal: str | None,
        category: HabitCategory | str | None,
        *,
        exclude_id: str | None = None,
    ) -> tuple[str, str, HabitCategory]:
        name = (name or "").strip()
        goal = (goal or "").strip()

        if not name:
            raise ValidationError("Please enter a habit name")
        if len(name) > HABIT_NAME_MAX_LENGTH:
            raise ValidationError(f"Habit name must be at most {HABIT_NAME_MAX_LENGTH} characters")
        if len(goal) > HABIT_GOAL_MAX_LENGTH:
            raise ValidationError(f"Goal must be at most {HABIT_GOAL_MAX_LENGTH} characters")

        duplicate = self.find_by_name(name)
        if duplicate is not None and duplicate.id != exclude_id:
            raise ValidationError("A habit with this name already exists")

        return name, goal, parse_category(category)

    # -- mutations -------------------------------------------------------

    def create(
        self,
        name: str,
        goal: str | None = "",
        category: HabitCategory | str | None = HabitCategory.UNSET,
    ) -> Habit:
        name, goal, category = self._validate(name, goal, category)

        habit = Habit(
            id=self._id_factory(),
            name=name,
            goal=goal,
            category=category,
            created_at=self._clock(),
            completions=CompletionLedger(),
        )
        self._habits.append(habit)
        logger.info("Created habit", extra={"habit_id": habit.id, "habit_name": name})
        self.save()
        return habit

    def update(
        self,
        habit_id: str,
        name: str,
        goal: str | None = "",
        category: HabitCategory | str | None = HabitCategory.UNSET,
    ) -> Habit:
        habit = self.get(habit_id)
        if habit is None:
            raise NotFoundError(habit_id)

        name, goal, category = self._validate(name, goal, category, exclude_id=habit_id)
        habit.name = name
        habit.goal = goal
        habit.category = category
        logger.info("Updated habit", extra={"habit_id": habit_id, "habit_name": name})
        self.save()
        return habit

    def delete(self, habit_id: str) -> bool:
        """Remove a habit; returns False when it was already gone."""

        remaining = [h for h in self._habits if h.id != habit_id]
        if len(remaining) == len(self._habits):
            return False
        self._habits = remaining
        logger.info("Deleted habit", extra={"habit_id": habit_id})
        self.save()
        return True

    def toggle_completion(self, habit_id: str, day: date | datetime) -> Optional[bool]:
        """Flip completion for ``day``; None when the habit does not exist."""

        habit = self.get(habit_id)
        if habit is None:
            return None
        state = habit.toggle(day)
        self.save()
        return state

    def clear(self) -> None:
        """Drop every habit and remove the storage slot."""

        self._habits = []
        try:
            self.storage.delete(self.storage_key)
        except PersistenceError:
            self.dirty = True
            raise
        self.dirty = False
        logger.info("Cleared all habits")


__all__ = ["HabitStore"]
