"""Process-local TTL caches for hot public reads and admin counters."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, TypeVar

from akwaaba_shared.config import settings

T = TypeVar("T")


class TTLCache:
    """Dict-backed cache; every entry expires `ttl` seconds after it was stored."""

    def __init__(self, name: str, ttl: float) -> None:
        self.name = name
        self.ttl = ttl
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            hit = self._entries.get(key)
            if hit is None:
                return None
            stored_at, value = hit
            if time.monotonic() - stored_at > self.ttl:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (time.monotonic(), value)

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        """Return the cached value for `key`, calling `loader` on a miss.

        The loader runs outside the lock, so two concurrent misses may both
        query the database; the later result overwrites the earlier one.
        """
        value = self.get(key)
        if value is None:
            value = loader()
            self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


featured_cache = TTLCache("featured_properties", settings.featured_cache_ttl)
agent_search_cache = TTLCache("agent_search", settings.agent_search_cache_ttl)
admin_stats_cache = TTLCache("admin_stats", settings.admin_stats_cache_ttl)

ALL_CACHES = (featured_cache, agent_search_cache, admin_stats_cache)
