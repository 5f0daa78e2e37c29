"""
Tests for the in-process cache store
"""
from catalog_service.core.redis import MemoryCache, build_cache_store


def test_values_round_trip_as_json(cache):
    cache.set("k", {"translations": {"a": "A"}, "count": 1}, 60)
    assert cache.get("k") == {"translations": {"a": "A"}, "count": 1}


def test_missing_key_is_none(cache):
    assert cache.get("nope") is None


def test_entry_expires(cache, clock):
    cache.set("k", ["en"], 10)

    clock.advance(9)
    assert cache.get("k") == ["en"]

    clock.advance(1)
    assert cache.get("k") is None


def test_delete(cache):
    cache.set("k", "v", 60)
    assert cache.delete("k") is True
    assert cache.get("k") is None


def test_list_keys_by_prefix(cache):
    cache.set("translations_export:en", {}, 60)
    cache.set("translations_export:en:tags:web", {}, 60)
    cache.set("translations_export:en-GB:tags:web", {}, 60)

    assert cache.list_keys("translations_export:en:tags:") == ["translations_export:en:tags:web"]


def test_list_keys_skips_expired(cache, clock):
    cache.set("p:old", {}, 5)
    cache.set("p:new", {}, 50)
    clock.advance(10)

    assert cache.list_keys("p:") == ["p:new"]


def test_list_keys_without_listing_support_is_none(degraded_cache):
    degraded_cache.set("p:a", {}, 60)
    assert degraded_cache.list_keys("p:") is None


def test_memory_backend_selected():
    store = build_cache_store("memory", "redis://unused")
    assert isinstance(store, MemoryCache)
    assert store.is_connected
