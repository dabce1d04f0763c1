"""In-memory TTL cache for successful JSON responses.

Keyed by request fingerprint (path plus raw query string). Thread-safe and
bounded; stale entries stay put until overwritten, swept, or evicted.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

from starlette.requests import Request

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cached payload with the instant it was stored."""

    payload: Any
    stored_at: float


class ResponseCache:
    """Thread-safe, in-memory TTL cache with bounded size.

    An entry is servable while ``now - stored_at < ttl_seconds``. ``lookup``
    never removes or reorders entries; ``store`` always overwrites.

    Attributes:
        ttl_seconds: Freshness window applied to all entries.
        max_entries: Maximum number of cached items (None for unlimited).
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        max_entries: int | None = 4096,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1 or None")

        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        # Insertion order == store order; an overwrite moves the key to the end.
        self._store: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"ResponseCache(ttl_seconds={self._ttl}, max_entries={self._max_entries}, "
            f"size={len(self._store)}, hits={self._hits}, misses={self._misses}, "
            f"evictions={self._evictions})"
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def lookup(self, key: str, now: float | None = None) -> Any | None:
        """Return the cached payload for ``key`` if it is still fresh.

        Args:
            key: Request fingerprint.
            now: Evaluation instant; defaults to the cache clock.

        Returns:
            Cached payload, or None if absent or stale.
        """

        if now is None:
            now = self._clock()

        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                logger.debug("cache.miss", extra={"cache_key": key, "reason": "not_found"})
                return None

            if now - entry.stored_at >= self._ttl:
                self._misses += 1
                logger.debug("cache.miss", extra={"cache_key": key, "reason": "stale"})
                return None

            self._hits += 1
            logger.debug("cache.hit", extra={"cache_key": key})
            return entry.payload

    def store(self, key: str, payload: Any, now: float | None = None) -> None:
        """Insert or overwrite the entry for ``key``.

        Args:
            key: Request fingerprint.
            payload: JSON-serializable response body.
            now: Store instant; defaults to the cache clock.
        """

        if now is None:
            now = self._clock()

        with self._lock:
            if key not in self._store and self._is_full_locked():
                self._sweep_locked(now)
            self._store[key] = CacheEntry(payload=payload, stored_at=now)
            self._store.move_to_end(key)
            self._evict_if_over_capacity_locked()

            logger.debug(
                "cache.store",
                extra={"cache_key": key, "size": len(self._store), "ttl_s": self._ttl},
            )

    def sweep(self, now: float | None = None) -> int:
        """Remove stale entries and return how many were dropped."""

        if now is None:
            now = self._clock()
        with self._lock:
            return self._sweep_locked(now)

    def clear(self) -> None:
        """Remove all cached entries and reset counters."""

        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> dict[str, int | float | None]:
        """Return lightweight cache metrics without exposing payloads."""

        with self._lock:
            return {
                "ttl_seconds": self._ttl,
                "max_entries": self._max_entries,
                "entries": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def _is_full_locked(self) -> bool:
        return self._max_entries is not None and len(self._store) >= self._max_entries

    def _sweep_locked(self, now: float) -> int:
        stale = [k for k, entry in self._store.items() if now - entry.stored_at >= self._ttl]
        for key in stale:
            del self._store[key]
        self._evictions += len(stale)
        return len(stale)

    def _evict_if_over_capacity_locked(self) -> None:
        if self._max_entries is None:
            return

        while len(self._store) > self._max_entries:
            # popitem(last=False) removes the oldest stored entry
            self._store.popitem(last=False)
            self._evictions += 1


def build_cache_key(request: Request) -> str:
    """Build the cache fingerprint of a request.

    The raw query string is kept byte-for-byte, so parameter order matters:
    ``/a?x=1&y=2`` and ``/a?y=2&x=1`` are distinct keys.

    Args:
        request: Incoming request.

    Returns:
        Path followed by ``?`` and the raw query string (path only when empty).
    """

    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path
