"""Cache – thread-safe TTL store keyed by discovery URI."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Generic, TypeVar

from oidc_metadata.kernel.time import Clock, SystemClock

T = TypeVar("T")

__all__ = ["CacheEntry", "CacheStore"]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the POSIX time after which it is stale."""

    value: T
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return self.expires_at >= now


class CacheStore(Generic[T]):
    """Mapping of key to :class:`CacheEntry`, guarded by one lock.

    The lock is held only for the duration of a single operation. Entries
    are immutable and replaced whole, so readers never see a value paired
    with another write's expiry.
    """

    def __init__(self, clock: Clock | None = None, name: str = "cache") -> None:
        self._clock = clock or SystemClock()
        self.name = name
        self._entries: dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry[T] | None:
        """Return the entry for *key*, expired or not."""
        with self._lock:
            return self._entries.get(key)

    def get_valid(self, key: str) -> T | None:
        """Return the cached value for *key* only while its entry is valid."""
        entry = self.get(key)
        if entry is not None and entry.is_valid(self._clock.timestamp()):
            return entry.value
        return None

    def put(self, key: str, value: T, ttl_seconds: float) -> CacheEntry[T]:
        """Store *value* under *key* until ``now + ttl_seconds``, replacing any entry."""
        entry = CacheEntry(value=value, expires_at=self._clock.timestamp() + ttl_seconds)
        with self._lock:
            self._entries[key] = entry
        return entry

    def remove_if_expired(self, key: str, now: float | None = None) -> bool:
        """Drop *key* if its entry expired before *now*; return whether it was dropped."""
        if now is None:
            now = self._clock.timestamp()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.expires_at >= now:
                return False
            del self._entries[key]
            return True

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def all_keys(self) -> list[str]:
        """Snapshot of the current keys, safe to iterate while the store changes."""
        with self._lock:
            return list(self._entries)

    def evict_expired(self, now: float | None = None) -> int:
        if now is None:
            now = self._clock.timestamp()
        return sum(1 for key in self.all_keys() if self.remove_if_expired(key, now))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
