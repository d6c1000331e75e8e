"""Thread-safe in-memory key/value storage."""

from __future__ import annotations

import threading


class KVStore:
    """A string-to-string map guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        with self._lock:
            self._data[key] = value

    def get(self, key: str) -> str:
        """Return the value stored under ``key``, or an empty string."""
        with self._lock:
            return self._data.get(key, "")