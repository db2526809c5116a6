"""Pytest configuration and shared fixtures for HabitTrail tests.

Provides a throwaway SQLite database, an in-memory key-value fake and a
habit store with a fixed clock, so services can be tested without touching
the real data directory.
"""

from __future__ import annotations

import itertools
import logging
import tempfile
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habittrail.errors import PersistenceError
from habittrail.models import AppSetting  # noqa: F401  registers the table
from habittrail.services.habit_store import HabitStore

FIXED_NOW = datetime(2025, 1, 8, 9, 30)
TODAY = FIXED_NOW.date()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching ``Callable[[], ContextManager[Session]]``."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


# =============================================================================
# Storage fakes
# =============================================================================


class MemoryKeyValueStore:
    """Dict-backed key-value store; ``fail_writes`` simulates a full quota."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get(self, key: str):
        if self.fail_reads:
            raise PersistenceError("read failed")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded")
        self.writes += 1
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


@pytest.fixture
def memory_storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def id_factory():
    """Deterministic ids: habit-1, habit-2, ..."""

    counter = itertools.count(1)
    return lambda: f"habit-{next(counter)}"


@pytest.fixture
def store(memory_storage, id_factory) -> HabitStore:
    """Empty habit store with a fixed clock."""

    return HabitStore.open(memory_storage, clock=lambda: FIXED_NOW, id_factory=id_factory)


@pytest.fixture
def habit_factory(store):
    """Create habits in the store, optionally pre-completed on some days."""

    def _create(name: str = "Read", *, goal: str = "", category: str = "", days: tuple[date, ...] = ()):
        habit = store.create(name, goal, category)
        for day in days:
            store.toggle_completion(habit.id, day)
        return habit

    return _create


@pytest.fixture(autouse=True)
def _reset_app_logger():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""

    yield
    app_logger = logging.getLogger("habittrail")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
