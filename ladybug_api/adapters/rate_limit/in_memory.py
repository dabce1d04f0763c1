"""In-memory sliding window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: a lock guards the per-client map, so a check-and-record on one
  client never interleaves with another on the same client.
"""

from __future__ import annotations

import math
import threading
import time
from collections import OrderedDict
from typing import Callable

from ladybug_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting admissions within a trailing time window per client.

    Each client keeps the admission instants that are still inside the window.
    Expired instants are pruned lazily on every check; ``sweep`` forgets idle
    clients entirely. Rejected requests do not consume a slot.

    Important:
        Tracking is bounded by ``max_clients``. When a new client arrives at
        capacity, the least recently admitted client is forgotten, which also
        resets its quota.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        max_clients: int | None = 10_000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum admitted requests per client within the window.
            window_seconds: Length of the trailing window in seconds.
            max_clients: Maximum tracked clients (None for unlimited).
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If limit, window_seconds or max_clients are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if max_clients is not None and max_clients < 1:
            raise ValueError("max_clients must be >= 1 or None")

        self._limit = limit
        self._window_seconds = window_seconds
        self._max_clients = max_clients
        self._clock = clock
        self._lock = threading.RLock()
        # Ordered by most recent admission so capacity eviction drops the idlest client.
        self._timestamps_by_client: OrderedDict[str, list[float]] = OrderedDict()
        self._evictions = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps_by_client)

    def check_and_record(self, client_id: str, now: float | None = None) -> RateLimitResult:
        if now is None:
            now = self._clock()
        window_start = now - self._window_seconds

        with self._lock:
            recent = [t for t in self._timestamps_by_client.get(client_id, ()) if t > window_start]

            if len(recent) >= self._limit:
                if client_id in self._timestamps_by_client:
                    self._timestamps_by_client[client_id] = recent
                reset_at = min(recent) + self._window_seconds
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_at=int(math.ceil(reset_at)),
                    retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
                )

            recent.append(now)
            self._timestamps_by_client[client_id] = recent
            self._timestamps_by_client.move_to_end(client_id)
            self._evict_if_over_capacity_locked()

            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - len(recent),
                reset_at=int(math.ceil(min(recent) + self._window_seconds)),
            )

    def sweep(self, now: float | None = None) -> int:
        if now is None:
            now = self._clock()
        window_start = now - self._window_seconds

        with self._lock:
            idle = [
                client_id
                for client_id, timestamps in self._timestamps_by_client.items()
                if not timestamps or max(timestamps) <= window_start
            ]
            for client_id in idle:
                del self._timestamps_by_client[client_id]
            return len(idle)

    def clear(self) -> None:
        with self._lock:
            self._timestamps_by_client.clear()
            self._evictions = 0

    def stats(self) -> dict[str, int | float | None]:
        with self._lock:
            return {
                "clients": len(self._timestamps_by_client),
                "limit": self._limit,
                "window_seconds": self._window_seconds,
                "max_clients": self._max_clients,
                "evictions": self._evictions,
            }

    def _evict_if_over_capacity_locked(self) -> None:
        if self._max_clients is None:
            return

        while len(self._timestamps_by_client) > self._max_clients:
            self._timestamps_by_client.popitem(last=False)
            self._evictions += 1
