"""Thread-safe in-memory key-value store with a data version counter."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class Item:
    """A stored value and its absolute expiry time in nanoseconds (0 for none)."""

    value: str
    expiration: int = 0


class KeyValueStorage:
    """Stores items by key; every write or delete bumps the data version."""

    def __init__(self) -> None:
        self._items: dict[str, Item] = {}
        self._version = 0
        self._lock = threading.Lock()

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = Item(value)
            self._version += 1

    def set_with_expiration(self, key: str, value: str, expiration: timedelta) -> None:
        """Store a value stamped with an absolute expiry time in nanoseconds."""
        expires_at = time.time_ns() + (expiration // timedelta(microseconds=1)) * 1000
        with self._lock:
            self._items[key] = Item(value, expires_at)
            self._version += 1

    def get(self, key: str) -> Item | None:
        with self._lock:
            return self._items.get(key)

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)
            self._version += 1

    def data_version(self) -> int:
        with self._lock:
            return self._version