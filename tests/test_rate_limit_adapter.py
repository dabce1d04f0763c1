"""Unit tests for the in-memory sliding window rate limiter."""

import threading
from unittest.mock import Mock

import pytest

from ladybug_api.adapters.rate_limit import Decision, InMemorySlidingWindowRateLimiter

WINDOW = 15 * 60


def test_admits_up_to_limit_in_same_window() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemorySlidingWindowRateLimiter(limit=3, window_seconds=60, clock=clock)

    assert limiter.check_and_record("k").allowed is True
    assert limiter.check_and_record("k").allowed is True
    result = limiter.check_and_record("k")
    assert result.allowed is True
    assert result.decision is Decision.ADMIT
    assert result.remaining == 0


def test_rejects_when_over_limit() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemorySlidingWindowRateLimiter(limit=2, window_seconds=60, clock=clock)

    assert limiter.check_and_record("k").allowed is True
    assert limiter.check_and_record("k").allowed is True

    rejected = limiter.check_and_record("k")
    assert rejected.allowed is False
    assert rejected.decision is Decision.REJECT
    assert rejected.remaining == 0
    assert rejected.retry_after_seconds == 60
    assert rejected.reset_at == 1060


def test_hundred_requests_then_reject_then_admit_after_window() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=100, window_seconds=WINDOW)
    t0 = 0.0

    for _ in range(100):
        assert limiter.check_and_record("1.2.3.4", now=t0).allowed is True

    assert limiter.check_and_record("1.2.3.4", now=t0).allowed is False
    assert limiter.check_and_record("1.2.3.4", now=t0 + 1).allowed is False
    assert limiter.check_and_record("1.2.3.4", now=t0 + WINDOW + 1).allowed is True


def test_window_slides_instead_of_resetting() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=2, window_seconds=10)

    assert limiter.check_and_record("k", now=0).allowed is True
    assert limiter.check_and_record("k", now=6).allowed is True
    assert limiter.check_and_record("k", now=9).allowed is False

    # Only the t=0 admission has left the window.
    assert limiter.check_and_record("k", now=11).allowed is True
    assert limiter.check_and_record("k", now=12).allowed is False


def test_entry_exactly_at_window_start_no_longer_counts() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=1, window_seconds=10)

    assert limiter.check_and_record("k", now=100).allowed is True
    assert limiter.check_and_record("k", now=109.999).allowed is False
    assert limiter.check_and_record("k", now=110).allowed is True


def test_rejections_do_not_consume_slots() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=2, window_seconds=10)

    limiter.check_and_record("k", now=0)
    limiter.check_and_record("k", now=0)
    for offset in range(1, 10):
        assert limiter.check_and_record("k", now=offset).allowed is False

    result = limiter.check_and_record("k", now=10.5)
    assert result.allowed is True
    assert result.remaining == 1


def test_isolated_by_client() -> None:
    clock = Mock(return_value=1000.0)
    limiter = InMemorySlidingWindowRateLimiter(limit=1, window_seconds=60, clock=clock)

    assert limiter.check_and_record("k1").allowed is True
    assert limiter.check_and_record("k1").allowed is False

    assert limiter.check_and_record("k2").allowed is True


def test_empty_client_id_shares_a_bucket_without_raising() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=1, window_seconds=60)

    assert limiter.check_and_record("", now=0).allowed is True
    assert limiter.check_and_record("", now=1).allowed is False


def test_sweep_forgets_idle_clients_only() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=5, window_seconds=10)
    limiter.check_and_record("idle", now=0)
    limiter.check_and_record("active", now=8)

    assert limiter.sweep(now=15) == 1
    assert len(limiter) == 1
    assert limiter.stats()["clients"] == 1

    # The active client's quota is untouched by the sweep.
    assert limiter.check_and_record("active", now=15).remaining == 3


def test_capacity_evicts_least_recently_admitted_client() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=1, window_seconds=60, max_clients=2)

    limiter.check_and_record("a", now=0)
    limiter.check_and_record("b", now=1)
    limiter.check_and_record("c", now=2)

    assert len(limiter) == 2
    assert limiter.stats()["evictions"] == 1
    # "a" was forgotten, so its quota starts over; "b" is still limited.
    assert limiter.check_and_record("a", now=3).allowed is True
    assert limiter.check_and_record("c", now=3).allowed is False


def test_clear_drops_all_clients() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=1, window_seconds=60)
    limiter.check_and_record("k", now=0)

    limiter.clear()

    assert len(limiter) == 0
    assert limiter.check_and_record("k", now=1).allowed is True


def test_concurrent_checks_never_exceed_limit() -> None:
    limiter = InMemorySlidingWindowRateLimiter(limit=50, window_seconds=60)
    results: list[bool] = []
    results_lock = threading.Lock()

    def _worker() -> None:
        for _ in range(10):
            allowed = limiter.check_and_record("shared").allowed
            with results_lock:
                results.append(allowed)

    threads = [threading.Thread(target=_worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 50
    assert results.count(False) == 150


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0, "window_seconds": 60},
        {"limit": 1, "window_seconds": 0},
        {"limit": 1, "window_seconds": 60, "max_clients": 0},
    ],
)
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        InMemorySlidingWindowRateLimiter(**kwargs)
