from __future__ import annotations

import threading

import pytest

from ladybug_api.utils.response_cache import ResponseCache, build_cache_key
from conftest import FakeClock, build_request


def test_lookup_returns_fresh_payload(clock: FakeClock) -> None:
    cache = ResponseCache(ttl_seconds=300, clock=clock)
    cache.store("/tools/hash?text=a", {"hash": "x"})

    clock.advance(299.9)

    assert cache.lookup("/tools/hash?text=a") == {"hash": "x"}


def test_entry_expires_exactly_at_ttl(clock: FakeClock) -> None:
    cache = ResponseCache(ttl_seconds=300, clock=clock)
    cache.store("k", {"v": 1})

    clock.advance(300)

    assert cache.lookup("k") is None


def test_lookup_with_explicit_instants() -> None:
    cache = ResponseCache(ttl_seconds=300)
    cache.store("/api/info", {"ok": True}, now=0)

    assert cache.lookup("/api/info", now=299) == {"ok": True}
    assert cache.lookup("/api/info", now=301) is None


def test_missing_key_is_a_miss() -> None:
    cache = ResponseCache()

    assert cache.lookup("/nowhere") is None
    assert cache.stats()["misses"] == 1


def test_stale_lookup_does_not_remove_entry(clock: FakeClock) -> None:
    cache = ResponseCache(ttl_seconds=10, clock=clock)
    cache.store("k", "v")
    clock.advance(11)

    assert cache.lookup("k") is None
    assert len(cache) == 1


def test_store_overwrites_and_restarts_freshness(clock: FakeClock) -> None:
    cache = ResponseCache(ttl_seconds=10, clock=clock)
    cache.store("k", "first")
    clock.advance(8)
    cache.store("k", "second")
    clock.advance(8)

    assert cache.lookup("k") == "second"
    assert len(cache) == 1


def test_clear_empties_cache_and_resets_counters() -> None:
    cache = ResponseCache()
    cache.store("a", 1)
    cache.lookup("a")
    cache.lookup("b")

    cache.clear()

    assert len(cache) == 0
    assert cache.lookup("a") is None
    stats = cache.stats()
    assert stats["hits"] == 0
    assert stats["entries"] == 0


def test_sweep_removes_only_stale_entries(clock: FakeClock) -> None:
    cache = ResponseCache(ttl_seconds=10, clock=clock)
    cache.store("old", 1)
    clock.advance(6)
    cache.store("new", 2)
    clock.advance(5)

    assert cache.sweep() == 1
    assert cache.lookup("new") == 2
    assert len(cache) == 1


def test_capacity_evicts_oldest_stored_entry() -> None:
    cache = ResponseCache(ttl_seconds=300, max_entries=2)
    cache.store("a", 1, now=0)
    cache.store("b", 2, now=1)
    cache.store("a", 10, now=2)  # overwrite makes "a" the newest
    cache.store("c", 3, now=3)

    assert cache.lookup("b", now=4) is None
    assert cache.lookup("a", now=4) == 10
    assert cache.lookup("c", now=4) == 3
    assert cache.stats()["evictions"] == 1


def test_full_cache_reclaims_stale_entries_before_evicting_fresh_ones() -> None:
    cache = ResponseCache(ttl_seconds=10, max_entries=2)
    cache.store("fresh", 1, now=5)
    cache.store("stale", 2, now=0)

    cache.store("new", 3, now=12)

    assert cache.lookup("fresh", now=12) == 1
    assert cache.lookup("new", now=12) == 3
    assert len(cache) == 2


def test_stats_counts_hits_and_misses() -> None:
    cache = ResponseCache(ttl_seconds=60, max_entries=10)
    cache.store("k", 1, now=0)
    cache.lookup("k", now=1)
    cache.lookup("k", now=61)

    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["ttl_seconds"] == 60
    assert stats["max_entries"] == 10


def test_concurrent_stores_respect_capacity() -> None:
    cache = ResponseCache(ttl_seconds=60, max_entries=50)

    def _worker(prefix: int) -> None:
        for i in range(100):
            cache.store(f"{prefix}-{i}", i)
            cache.lookup(f"{prefix}-{i}")

    threads = [threading.Thread(target=_worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 50


@pytest.mark.parametrize("kwargs", [{"ttl_seconds": 0}, {"max_entries": 0}])
def test_invalid_constructor_args(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ResponseCache(**kwargs)


class TestBuildCacheKey:
    def test_path_and_raw_query(self) -> None:
        request = build_request("/tools/hash", b"text=hello&algorithm=md5")

        assert build_cache_key(request) == "/tools/hash?text=hello&algorithm=md5"

    def test_parameter_order_is_significant(self) -> None:
        first = build_cache_key(build_request("/tools/hash", b"text=a&algorithm=md5"))
        second = build_cache_key(build_request("/tools/hash", b"algorithm=md5&text=a"))

        assert first != second

    def test_path_only_without_query(self) -> None:
        assert build_cache_key(build_request("/api/info")) == "/api/info"
