"""
Tests for the cache repositories.
"""

from fnmatch import fnmatchcase

import pytest
import redis

from distance_matrix.protocols import CacheStore
from distance_matrix.repositories import InMemoryCacheRepository, RedisCacheRepository

PREFIX = "google_distance_matrix_"


class FakeRedis:
    """Minimal stand-in for redis.Redis covering the commands the repository uses."""

    def __init__(self, fail_ping: bool = False) -> None:
        self.store: dict[str, str] = {}
        self.expiries: dict[str, int] = {}
        self.delete_calls: list[tuple[str, ...]] = []
        self.fail_ping = fail_ping

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value
        self.expiries[key] = ex
        return True

    def delete(self, *keys):
        self.delete_calls.append(keys)
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    def scan_iter(self, match=None, count=None):
        for key in list(self.store):
            if match is None or fnmatchcase(key, match):
                yield key

    def ping(self):
        if self.fail_ping:
            raise redis.ConnectionError("connection refused")
        return True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def redis_repository(fake_redis):
    return RedisCacheRepository(redis_client=fake_redis, scan_count=2)


# InMemoryCacheRepository


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_repository(clock):
    return InMemoryCacheRepository(clock=clock)


def test_repositories_satisfy_protocol(memory_repository, redis_repository):
    assert isinstance(memory_repository, CacheStore)
    assert isinstance(redis_repository, CacheStore)


def test_memory_get_set(memory_repository):
    assert memory_repository.get("missing") is None

    memory_repository.set("key", "value", 300)

    assert memory_repository.get("key") == "value"


def test_memory_entry_expires(memory_repository, clock):
    """Test that an entry is gone once its TTL has elapsed."""
    memory_repository.set("key", "value", 300)

    clock.now += 299
    assert memory_repository.get("key") == "value"

    clock.now += 1
    assert memory_repository.get("key") is None
    assert memory_repository.count_all() == 0


def test_memory_delete(memory_repository, clock):
    """Test delete reports whether a live entry was removed."""
    memory_repository.set("key", "value", 300)

    assert memory_repository.delete("key") is True
    assert memory_repository.delete("key") is False

    memory_repository.set("stale", "value", 300)
    clock.now += 600
    assert memory_repository.delete("stale") is False


def test_memory_delete_by_prefix(memory_repository, clock):
    """Test prefix deletion leaves other keys and counts live entries only."""
    memory_repository.set(f"{PREFIX}a", "1", 300)
    memory_repository.set(f"{PREFIX}b", "2", 600)
    memory_repository.set("other_key", "3", 600)
    clock.now += 300

    assert memory_repository.delete_by_prefix(PREFIX) == 1
    assert memory_repository.get(f"{PREFIX}b") is None
    assert memory_repository.get("other_key") == "3"


def test_memory_stats(memory_repository):
    memory_repository.set("a", "1", 300)
    assert memory_repository.health_check() is True
    assert memory_repository.get_stats() == {
        "backend": "memory",
        "total_entries": 1,
        "stored_entries": 1,
        "max_entries": 10000,
    }


def test_memory_expired_entries_are_purged_on_write(memory_repository, clock):
    """Test that keys never read again do not pile up after they expire."""
    for i in range(1000):
        memory_repository.set(f"{PREFIX}{i}", "{}", 300)
        clock.now += 301

    stats = memory_repository.get_stats()
    assert stats["stored_entries"] <= 1
    assert stats["total_entries"] == 0


def test_memory_evicts_least_recently_used(clock):
    """Test that the store never holds more than maxsize entries."""
    repository = InMemoryCacheRepository(maxsize=2, clock=clock)
    repository.set("a", "1", 300)
    repository.set("b", "2", 300)
    assert repository.get("a") == "1"

    repository.set("c", "3", 300)

    assert repository.get("a") == "1"
    assert repository.get("b") is None
    assert repository.get("c") == "3"


# RedisCacheRepository


def test_redis_set_uses_expiry(redis_repository, fake_redis):
    """Test that values are written with SET EX."""
    redis_repository.set(f"{PREFIX}a", "{}", 3600)

    assert fake_redis.store[f"{PREFIX}a"] == "{}"
    assert fake_redis.expiries[f"{PREFIX}a"] == 3600


def test_redis_get_decodes_bytes(redis_repository, fake_redis):
    fake_redis.store["raw"] = b'{"status": "OK"}'

    assert redis_repository.get("raw") == '{"status": "OK"}'
    assert redis_repository.get("missing") is None


def test_redis_delete(redis_repository, fake_redis):
    fake_redis.store["key"] = "value"

    assert redis_repository.delete("key") is True
    assert redis_repository.delete("key") is False


def test_redis_delete_by_prefix_batches(redis_repository, fake_redis):
    """Test prefix deletion in SCAN-sized batches, leaving other keys intact."""
    for i in range(5):
        fake_redis.store[f"{PREFIX}{i}"] = "{}"
    fake_redis.store["session_1"] = "keep"

    deleted = redis_repository.delete_by_prefix(PREFIX)

    assert deleted == 5
    assert fake_redis.store == {"session_1": "keep"}
    assert [len(keys) for keys in fake_redis.delete_calls] == [2, 2, 1]


def test_redis_delete_by_prefix_nothing_to_delete(redis_repository, fake_redis):
    fake_redis.store["session_1"] = "keep"

    assert redis_repository.delete_by_prefix(PREFIX) == 0
    assert fake_redis.delete_calls == []


def test_redis_health_check(fake_redis):
    assert RedisCacheRepository(redis_client=fake_redis).health_check() is True
    assert RedisCacheRepository(redis_client=FakeRedis(fail_ping=True)).health_check() is False


def test_redis_stats(redis_repository, fake_redis):
    fake_redis.store[f"{PREFIX}a"] = "{}"
    fake_redis.store["other"] = "x"

    assert redis_repository.get_stats() == {"backend": "redis", "total_entries": 1}


def test_redis_stats_custom_prefix(redis_repository, fake_redis):
    """Test counting keys of a client that uses its own namespace."""
    fake_redis.store[f"{PREFIX}a"] = "{}"
    fake_redis.store["tenant_a_1"] = "{}"
    fake_redis.store["tenant_a_2"] = "{}"

    assert redis_repository.get_stats("tenant_a_")["total_entries"] == 2
    assert redis_repository.get_stats()["total_entries"] == 1
