"""Tests for the TTL cache: lazy expiry, overwrite, invalidate and clear."""

from app.services.cache import TTLCache


def test_get_returns_value_inside_ttl(clock):
    cache = TTLCache(ttl_seconds=60, clock=clock)
    cache.set("k", [1, 2])
    clock.advance(59.999)
    assert cache.get("k") == [1, 2]


def test_get_expires_at_ttl_boundary(clock):
    cache = TTLCache(ttl_seconds=60, clock=clock)
    cache.set("k", "v")
    clock.advance(60)
    assert cache.get("k") is None


def test_expired_entry_is_evicted_on_read(clock):
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("k", "v")
    clock.advance(11)
    assert cache.get("k") is None
    assert "k" not in cache._store


def test_get_missing_key_returns_none():
    cache = TTLCache()
    assert cache.get("nope") is None


def test_set_overwrites_and_restamps(clock):
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("k", "old")
    clock.advance(8)
    cache.set("k", "new")
    clock.advance(8)
    assert cache.get("k") == "new"


def test_empty_list_is_a_hit(clock):
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("k", [])
    assert cache.get("k") == []


def test_invalidate_and_clear(clock):
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.invalidate("a")
    cache.invalidate("missing")
    assert cache.get("a") is None
    assert cache.get("b") == 2
    cache.clear()
    assert cache.get("b") is None


def test_zero_ttl_never_hits(clock):
    cache = TTLCache(ttl_seconds=0, clock=clock)
    cache.set("k", "v")
    assert cache.get("k") is None
