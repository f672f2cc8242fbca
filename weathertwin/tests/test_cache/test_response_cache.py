"""Tests for the response cache with boundary conditions."""

import pytest

from weathertwin.cache.response_cache import (
    ResponseCache,
    historical_key,
    realtime_key,
)


class TestGetSet:
    def test_miss(self, cache: ResponseCache):
        assert cache.get("realtime:1,2") is None

    def test_hit(self, cache: ResponseCache):
        cache.set("k", {"a": 1}, 60)
        assert cache.get("k") == {"a": 1}

    def test_returns_same_object(self, cache: ResponseCache):
        value = {"a": 1}
        cache.set("k", value, 60)
        assert cache.get("k") is value

    def test_set_replaces(self, cache: ResponseCache, clock):
        cache.set("k", "old", 60)
        clock.advance(30)
        entry = cache.set("k", "new", 60)
        assert cache.get("k") == "new"
        assert len(cache) == 1
        assert entry.inserted_at == clock.now

    def test_non_positive_ttl_rejected(self, cache: ResponseCache):
        with pytest.raises(ValueError):
            cache.set("k", "v", 0)


class TestExpiry:
    def test_fresh_just_before_ttl(self, cache: ResponseCache, clock):
        cache.set("k", "v", 60)
        clock.advance(59.9)
        assert cache.get("k") == "v"

    def test_expired_at_ttl(self, cache: ResponseCache, clock):
        # Exactly ttl seconds old = expired (age < ttl is fresh)
        cache.set("k", "v", 60)
        clock.advance(60)
        assert cache.get("k") is None

    def test_expired_entry_is_removed(self, cache: ResponseCache, clock):
        cache.set("k", "v", 60)
        clock.advance(61)
        cache.get("k")
        assert len(cache) == 0

    def test_independent_ttls(self, cache: ResponseCache, clock):
        cache.set("short", 1, 60)
        cache.set("long", 2, 3600)
        clock.advance(120)
        assert cache.get("short") is None
        assert cache.get("long") == 2
        clock.advance(3480)
        assert cache.get("long") is None

    def test_purge_expired(self, cache: ResponseCache, clock):
        cache.set("a", 1, 60)
        cache.set("b", 2, 3600)
        clock.advance(61)
        assert cache.purge_expired() == 1
        assert len(cache) == 1
        assert "b" in cache
        assert "a" not in cache


class TestDeleteClear:
    def test_delete(self, cache: ResponseCache):
        cache.set("k", "v", 60)
        assert cache.delete("k") is True
        assert cache.delete("k") is False
        assert cache.get("k") is None

    def test_clear(self, cache: ResponseCache):
        cache.set("a", 1, 60)
        cache.set("b", 2, 60)
        cache.clear()
        assert len(cache) == 0


class TestKeys:
    def test_realtime_key(self):
        assert realtime_key("52.52", "13.41") == "realtime:52.52,13.41"

    def test_realtime_key_from_floats(self):
        assert realtime_key(52.52, 13.41) == "realtime:52.52,13.41"

    def test_historical_key(self):
        key = historical_key("52.52", "13.41", "2026-10-01", "2026-10-07")
        assert key == "historical:52.52,13.41,2026-10-01,2026-10-07"

    def test_keys_differ_by_endpoint(self):
        assert realtime_key("1", "2") != historical_key("1", "2", "", "")
