"""Key-value storage protocol."""

from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Single-key persistence slot used by the habit store.

    Implementations raise ``PersistenceError`` when the backend fails.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write ``value`` under ``key`` in one operation."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""
        ...
