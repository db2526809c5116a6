"""Concrete repository implementations using SQLModel."""

from .settings import SQLModelKeyValueStore

__all__ = ["SQLModelKeyValueStore"]
