"""Thread-safe in-memory cache with expiry and first-in-first-out eviction."""

from __future__ import annotations

import dataclasses
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional

from .logger import CACHE_LOGGER_DOMAIN, debug_log

DEFAULT_MAX_CAPACITY = 2000
DEFAULT_TTL_SECONDS = 30 * 60


class Cache:
    """Key-value store whose entries expire after a fixed time to live.

    When more than ``max_capacity`` entries are held, the oldest inserted
    entries are evicted first. Re-inserting a key refreshes its age.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        max_capacity: int = DEFAULT_MAX_CAPACITY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = float(default_ttl)
        self._max_capacity = max_capacity
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (value, insertion time, ttl); order of the dict is insertion order
        self._entries: "OrderedDict[str, tuple[Any, float, float]]" = OrderedDict()

    @property
    def default_ttl(self) -> float:
        """Seconds an entry lives after it is inserted."""
        return self._default_ttl

    @property
    def max_capacity(self) -> int:
        """Largest number of entries kept at once."""
        return self._max_capacity

    @staticmethod
    def builder() -> "CacheBuilder":
        """Start configuring a new cache."""
        return CacheBuilder()

    def _clean_expired(self, now: float) -> None:
        expired = [
            key
            for key, (_, inserted, ttl) in self._entries.items()
            if now - inserted > ttl
        ]
        for key in expired:
            del self._entries[key]
            debug_log(f"Removed expired cache entry: key={key}", CACHE_LOGGER_DOMAIN)

    def insert(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, evicting the oldest entries if full."""
        now = self._clock()
        debug_log(f"Inserting cache entry: key={key}", CACHE_LOGGER_DOMAIN)
        with self._lock:
            self._clean_expired(now)
            self._entries.pop(key, None)
            self._entries[key] = (value, now, self._default_ttl)
            while len(self._entries) > self._max_capacity and self._entries:
                oldest, _ = self._entries.popitem(last=False)
                debug_log(f"Evicted oldest cache entry: key={oldest}", CACHE_LOGGER_DOMAIN)

    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key``, or None if absent or expired."""
        now = self._clock()
        with self._lock:
            self._clean_expired(now)
            entry = self._entries.get(key)
        if entry is None:
            return None
        value, inserted, ttl = entry
        if now - inserted > ttl:
            return None
        return value

    def remove(self, key: str) -> None:
        """Drop ``key`` from the cache if it is present."""
        with self._lock:
            if self._entries.pop(key, None) is not None:
                debug_log(f"Removed cache entry: key={key}", CACHE_LOGGER_DOMAIN)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@dataclasses.dataclass(frozen=True)
class CacheBuilder:
    """Configures and creates a :class:`Cache`."""

    max_capacity: int = DEFAULT_MAX_CAPACITY
    default_ttl: float = DEFAULT_TTL_SECONDS

    def with_max_capacity(self, capacity: int) -> "CacheBuilder":
        return dataclasses.replace(self, max_capacity=capacity)

    def with_max_alive_seconds(self, seconds: float) -> "CacheBuilder":
        return dataclasses.replace(self, default_ttl=seconds)

    def build(self) -> Cache:
        return Cache(default_ttl=self.default_ttl, max_capacity=self.max_capacity)


_instance: Optional[Cache] = None
_instance_lock = threading.Lock()


def get_instance() -> Cache:
    """Return the shared process-wide cache, creating it on first use."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = (
                CacheBuilder()
                .with_max_capacity(DEFAULT_MAX_CAPACITY)
                .with_max_alive_seconds(DEFAULT_TTL_SECONDS)
                .build()
            )
        return _instance