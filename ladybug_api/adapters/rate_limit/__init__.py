"""Rate limiting adapters.

The HTTP layer depends on ``AbstractRateLimiter`` only, so the in-memory
sliding window limiter can later be replaced by a shared store.
"""

from ladybug_api.adapters.rate_limit.base import AbstractRateLimiter, Decision, RateLimitResult
from ladybug_api.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "Decision",
    "InMemorySlidingWindowRateLimiter",
    "RateLimitResult",
]
