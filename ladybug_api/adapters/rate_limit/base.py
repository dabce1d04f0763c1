"""Rate limiter interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Decision(str, Enum):
    """Outcome of an admission check."""

    ADMIT = "admit"
    REJECT = "reject"


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a check-and-record operation.

    Attributes:
        allowed: Whether the request is admitted.
        limit: Max admitted requests per window.
        remaining: Requests still available in the trailing window (0 when rejected).
        reset_at: UNIX epoch seconds when the oldest counted admission leaves the window.
        retry_after_seconds: Suggested wait in seconds when rejected.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None = None

    @property
    def decision(self) -> Decision:
        return Decision.ADMIT if self.allowed else Decision.REJECT


class AbstractRateLimiter(ABC):
    """Interface for per-client rate limiters."""

    @abstractmethod
    def check_and_record(self, client_id: str, now: float | None = None) -> RateLimitResult:
        """Admit or reject a request from ``client_id`` and record it when admitted.

        Never raises: every call resolves to an admit or reject result.

        Args:
            client_id: Client identifier (address or forwarded address).
            now: Evaluation instant in UNIX seconds; defaults to the limiter clock.

        Returns:
            RateLimitResult describing the decision.
        """
        raise NotImplementedError

    @abstractmethod
    def sweep(self, now: float | None = None) -> int:
        """Forget clients with no admissions left in the window; return how many were removed."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Drop all tracked clients."""
        raise NotImplementedError

    @abstractmethod
    def stats(self) -> dict[str, int | float | None]:
        """Return lightweight limiter metrics."""
        raise NotImplementedError
