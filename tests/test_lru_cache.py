import threading

import pytest

from fastqueue.lru_cache import LRUCache


@pytest.fixture
def cache():
    return LRUCache(2, None)


def test_get_missing_returns_empty_value():
    cache = LRUCache(3, "none")
    assert cache.get("absent") == "none"
    assert cache.key_exists("absent") is False


def test_put_then_get(cache):
    assert cache.put("a", 1) is None
    assert cache.get("a") == 1
    assert cache.key_exists("a") is True


def test_eviction_returns_least_recent_value(cache):
    cache.put("a", 1)
    cache.put("b", 2)
    evicted = cache.put("c", 3)
    assert evicted == 1
    assert cache.key_exists("a") is False
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_get_refreshes_recency(cache):
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    evicted = cache.put("c", 3)
    assert evicted == 2
    assert cache.key_exists("a") is True
    assert cache.key_exists("b") is False


def test_existing_key_keeps_value_and_is_refreshed(cache):
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.put("a", 10) is None
    assert cache.get("a") == 1
    evicted = cache.put("c", 3)
    assert evicted == 2


def test_put_and_get_returns_cached_value(cache):
    assert cache.put_and_get("a", 1) == 1
    assert cache.put_and_get("a", 5) == 1


def test_remove(cache):
    cache.put("a", 1)
    cache.remove("a")
    assert cache.key_exists("a") is False
    assert cache.get("a") is None
    cache.remove("missing")
    assert len(cache) == 0


def test_size_never_exceeds_capacity():
    cache = LRUCache(3, None)
    for i in range(10):
        cache.put(i, str(i))
    assert len(cache) == 3
    assert [cache.key_exists(i) for i in range(7, 10)] == [True, True, True]


def test_find_matching_keys_by_prefix():
    cache = LRUCache(10, None)
    for key in ["queue_a_1", "queue_a_2", "queue_b_1"]:
        cache.put(key, key.upper())
    matches = cache.find_matching_keys("queue_a", lambda prefix, key: key.startswith(prefix))
    assert matches == {"queue_a_1", "queue_a_2"}


def test_concurrent_puts_respect_capacity():
    cache = LRUCache(50, None)

    def worker(offset):
        for i in range(200):
            cache.put(offset * 1000 + i, i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(cache) == 50