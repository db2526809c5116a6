"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelKeyValueStore
from .services.habit_store import HabitStore


@dataclass
class AppContext:
    """Configuration, storage and the session's habit store."""

    config: BaseConfig
    session_factory: Callable[[], Session]
    storage: SQLModelKeyValueStore
    store: HabitStore


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, open the habit store and bundle them."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    storage = SQLModelKeyValueStore(session_factory)
    store = HabitStore.open(storage, storage_key=config.STORAGE_KEY)

    return AppContext(
        config=config,
        session_factory=session_factory,
        storage=storage,
        store=store,
    )
