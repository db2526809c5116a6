"""SQLModel-backed key/value store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...errors import PersistenceError
from ...logging_config import get_logger
from ...models.settings import AppSetting

logger = get_logger("storage")


class SQLModelKeyValueStore:
    """Key-value slots persisted in the ``app_setting`` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with self.session_factory() as session:
                setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
                return setting.value if setting else None
        except SQLAlchemyError as exc:
            logger.warning("Failed to read key %s", key, exc_info=True)
            raise PersistenceError(f"Could not read '{key}' from storage") from exc

    def set(self, key: str, value: str, description: str | None = None) -> None:
        try:
            with self.session_factory() as session:
                setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
                if setting:
                    setting.value = value
                    setting.updated_at = datetime.now(timezone.utc)
                    if description is not None:
                        setting.description = description
                else:
                    setting = AppSetting(key=key, value=value, description=description)
                session.add(setting)
                session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Failed to write key %s", key, exc_info=True)
            raise PersistenceError(f"Could not write '{key}' to storage") from exc

    def delete(self, key: str) -> None:
        try:
            with self.session_factory() as session:
                setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
                if setting:
                    session.delete(setting)
                    session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Failed to delete key %s", key, exc_info=True)
            raise PersistenceError(f"Could not delete '{key}' from storage") from exc


__all__ = ["SQLModelKeyValueStore"]
