"""In-memory TTL cache for query results.

Entries expire ``ttl_seconds`` after they were written. Expired entries are
evicted lazily by the ``get`` that observes them, or eagerly by
``clear_expired`` (driven by the sweep scheduler in HTTP mode).

The cache itself is not thread-safe. All tool handlers run inline on the
event loop, which serialises every access.
"""

from __future__ import annotations

import copy
import time
from typing import TYPE_CHECKING, Any

import structlog

from vcontext.models.cache import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()


class TTLCache:
    """Expiring key/value store implementing CacheProtocol."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def _is_stale(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp >= self._ttl

    def get(self, key: str) -> Any | None:
        """Return a shallow copy of the cached value, or ``None`` on miss or expiry.

        Nested lists and dicts are shared with the stored entry and must be
        treated as read-only.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_stale(entry, self._clock()):
            del self._entries[key]
            log.debug("cache_entry_expired", key=key)
            return None
        return copy.copy(entry.value)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, timestamp=self._clock())

    def clear(self) -> int:
        """Drop every entry. Returns the number removed."""
        removed = len(self._entries)
        self._entries.clear()
        log.info("cache_cleared", removed=removed)
        return removed

    def clear_expired(self) -> int:
        """Drop every stale entry regardless of access. Returns the number removed."""
        now = self._clock()
        stale_keys = [key for key, entry in self._entries.items() if self._is_stale(entry, now)]
        for key in stale_keys:
            del self._entries[key]
        log.info("cache_sweep_complete", removed=len(stale_keys), remaining=len(self._entries))
        return len(stale_keys)

    def size(self) -> int:
        return len(self._entries)
