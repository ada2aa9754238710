"""ResponseCache and in-memory repository tests."""

import threading

import pytest

from service_host import InMemoryResponseRepository, ResponseCache, ResponseStore


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_cache(clock):
    def _make(ttl=None):
        return ResponseCache(InMemoryResponseRepository.create(), ttl=ttl, clock=clock)

    return _make


def test_repository_satisfies_protocol():
    assert isinstance(InMemoryResponseRepository(), ResponseStore)


def test_miss_then_hit(make_cache):
    cache = make_cache()

    assert cache.get("svc", "k") is None
    cache.put("svc", "k", "value")

    entry = cache.get("svc", "k")
    assert entry is not None
    assert entry.value == "value"


def test_none_is_a_cacheable_value(make_cache):
    cache = make_cache()
    cache.put("svc", "k", None)

    entry = cache.get("svc", "k")
    assert entry is not None
    assert entry.value is None


def test_services_do_not_share_keys(make_cache):
    cache = make_cache()
    cache.put("a", "shared", 1)
    cache.put("b", "shared", 2)

    assert cache.get("a", "shared").value == 1
    assert cache.get("b", "shared").value == 2


def test_keys_of_one_service_are_independent(make_cache):
    cache = make_cache()
    cache.put("svc", "k1", 1)
    cache.put("svc", "k2", 2)

    assert cache.get("svc", "k1").value == 1
    assert cache.get("svc", "k2").value == 2


def test_without_ttl_entries_never_expire(make_cache, clock):
    cache = make_cache()
    cache.put("svc", "k", "value")

    clock.advance(10 ** 9)

    assert cache.get("svc", "k").value == "value"


def test_default_ttl_expires_entries(make_cache, clock):
    cache = make_cache(ttl=20)
    cache.put("svc", "k", "stale")

    clock.advance(19)
    assert cache.get("svc", "k").value == "stale"

    clock.advance(1)
    assert cache.get("svc", "k") is None


def test_entry_ttl_overrides_default(make_cache, clock):
    cache = make_cache(ttl=20)
    cache.put("svc", "short", 1, ttl=5)
    cache.put("svc", "long", 2)

    clock.advance(6)

    assert cache.get("svc", "short") is None
    assert cache.get("svc", "long").value == 2


def test_overwrite_replaces_value_and_resets_age(make_cache, clock):
    cache = make_cache(ttl=10)
    cache.put("svc", "k", "old")

    clock.advance(8)
    cache.put("svc", "k", "new")
    clock.advance(8)

    assert cache.get("svc", "k").value == "new"


def test_expired_entries_are_dropped_lazily(make_cache, clock):
    cache = make_cache(ttl=1)
    cache.put("svc", "k", "value")
    clock.advance(2)

    assert cache.repository.count_all() == 1
    assert cache.get("svc", "k") is None
    assert cache.repository.count_all() == 0


def test_purge_expired(make_cache, clock):
    cache = make_cache(ttl=10)
    cache.put("svc", "old", 1)
    clock.advance(5)
    cache.put("svc", "fresh", 2)
    clock.advance(6)

    assert cache.purge_expired() == 1
    assert cache.get("svc", "fresh").value == 2


def test_stats_and_clear(make_cache):
    cache = make_cache(ttl=30)
    cache.get("svc", "k")
    cache.put("svc", "k", 1)
    cache.get("svc", "k")

    assert cache.get_stats() == {"total_entries": 1, "hits": 1, "misses": 1, "ttl": 30}

    assert cache.clear() == 1
    assert cache.get_stats() == {"total_entries": 0, "hits": 0, "misses": 0, "ttl": 30}


def test_non_positive_ttl_is_rejected():
    with pytest.raises(ValueError):
        ResponseCache(InMemoryResponseRepository(), ttl=0)


def test_create_defaults_to_in_memory_repository():
    cache = ResponseCache.create(ttl=5)

    assert isinstance(cache.repository, InMemoryResponseRepository)
    assert cache.ttl == 5


def test_counters_are_exact_under_concurrent_lookups(make_cache):
    cache = make_cache()
    cache.put("svc", "hit", 1)

    def lookup():
        for _ in range(500):
            cache.get("svc", "hit")
            cache.get("svc", "miss")

    threads = [threading.Thread(target=lookup) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stats = cache.get_stats()
    assert stats["hits"] == 4000
    assert stats["misses"] == 4000
