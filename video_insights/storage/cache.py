"""In-memory TTL key-value cache."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheKey:
    """Key of a cached analysis result."""

    video_id: str
    language: str
    operation: str

    def serialize(self) -> str:
        return f"{self.video_id}:{self.language}:{self.operation}"


@dataclass
class _Entry(Generic[T]):
    value: T
    expires_at: float


class TTLCache(Generic[T]):
    """Thread-safe dict whose entries expire *ttl* seconds after being set.

    Expiry is checked lazily when a key is read. ``clock`` returns seconds
    and can be swapped in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, _Entry[T]] = {}
        self._lock = threading.Lock()

    def _live_entry(self, key: str) -> _Entry[T] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            return None
        return entry

    def get(self, key: str) -> T | None:
        with self._lock:
            entry = self._live_entry(key)
            return entry.value if entry else None

    def set(self, key: str, value: T, ttl_seconds: float) -> float:
        """Store *value* and return its expiry time on this cache's clock."""
        expires_at = self._clock() + ttl_seconds
        with self._lock:
            self._entries[key] = _Entry(value=value, expires_at=expires_at)
        return expires_at

    def pop(self, key: str) -> T | None:
        """Remove and return a live value (consume-once reads)."""
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return None
            del self._entries[key]
            return entry.value

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
