"""JSON encoding of the persisted habit list.

Each record is stored as::

    {"id": "...", "name": "...", "goal": "...", "category": "health",
     "createdAt": "2025-01-05T09:30:00", "completedDates": ["2025-01-05"]}

Decoding is strict: any missing field, wrong type, unknown category or
unparseable date raises ``PersistenceError`` so the caller can fall back to
an empty list instead of carrying a half-valid record around.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Iterable

from ..constants.categories import HABIT_GOAL_MAX_LENGTH, HABIT_NAME_MAX_LENGTH, parse_category
from ..errors import PersistenceError, ValidationError
from ..models.habit import CompletionLedger, Habit

_STRING_FIELDS = ("id", "name", "goal", "category", "createdAt")


def _parse_datetime(raw: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" on Python 3.11+
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


def _parse_day(raw: Any) -> date:
    """Accept plain ISO dates and legacy full timestamps."""

    if not isinstance(raw, str):
        raise PersistenceError(f"Completion date must be a string, got {type(raw).__name__}")
    try:
        if "T" in raw:
            moment = _parse_datetime(raw)
            # offset-bearing timestamps count on the local calendar day
            if moment.tzinfo is not None:
                moment = moment.astimezone()
            return moment.date()
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise PersistenceError(f"Invalid completion date: {raw!r}") from exc


def habit_to_record(habit: Habit) -> dict[str, Any]:
    return {
        "id": habit.id,
        "name": habit.name,
        "goal": habit.goal,
        "category": habit.category.value,
        "createdAt": habit.created_at.isoformat(),
        "completedDates": [day.isoformat() for day in habit.completions],
    }


def habit_from_record(record: Any) -> Habit:
    """Build a ``Habit`` from one decoded record, validating its shape."""

    if not isinstance(record, dict):
        raise PersistenceError(f"Habit record must be an object, got {type(record).__name__}")

    for name in _STRING_FIELDS:
        if not isinstance(record.get(name), str):
            raise PersistenceError(f"Habit record field '{name}' is missing or not a string")
    if not record["id"] or not record["name"].strip():
        raise PersistenceError("Habit record has an empty id or name")
    if record["name"] != record["name"].strip() or len(record["name"]) > HABIT_NAME_MAX_LENGTH:
        raise PersistenceError(f"Invalid habit name in stored data: {record['name']!r}")
    if len(record["goal"]) > HABIT_GOAL_MAX_LENGTH:
        raise PersistenceError(f"Habit goal is longer than {HABIT_GOAL_MAX_LENGTH} characters")

    completed = record.get("completedDates")
    if not isinstance(completed, list):
        raise PersistenceError("Habit record field 'completedDates' must be a list")

    try:
        category = parse_category(record["category"])
    except ValidationError as exc:
        raise PersistenceError(str(exc)) from exc

    try:
        created_at = _parse_datetime(record["createdAt"])
    except ValueError as exc:
        raise PersistenceError(f"Invalid createdAt: {record['createdAt']!r}") from exc

    return Habit(
        id=record["id"],
        name=record["name"],
        goal=record["goal"],
        category=category,
        created_at=created_at,
        completions=CompletionLedger(_parse_day(raw) for raw in completed),
    )


def dumps(habits: Iterable[Habit]) -> str:
    """Serialize the full habit list for the storage slot."""

    try:
        return json.dumps([habit_to_record(habit) for habit in habits])
    except (TypeError, ValueError) as exc:
        raise PersistenceError("Failed to serialize habits") from exc


def loads(payload: str) -> list[Habit]:
    """Decode a storage payload; raise ``PersistenceError`` on any mismatch."""

    try:
        records = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise PersistenceError("Stored habits are not valid JSON") from exc

    if not isinstance(records, list):
        raise PersistenceError("Stored habits must be a JSON list")

    habits = [habit_from_record(record) for record in records]

    seen_ids: set[str] = set()
    seen_names: set[str] = set()
    for habit in habits:
        name_key = habit.name.strip().casefold()
        if habit.id in seen_ids or name_key in seen_names:
            raise PersistenceError(f"Duplicate habit in stored data: {habit.name!r}")
        seen_ids.add(habit.id)
        seen_names.add(name_key)

    return habits


__all__ = ["dumps", "habit_from_record", "habit_to_record", "loads"]
