"""Tests for flexsvg/caching.py: LRUCache and IdentityCache."""

import gc

import pytest

from flexsvg.caching import IdentityCache, LRUCache
from flexsvg.fonts import FontList
from flexsvg.utils.exceptions import ValidationError


class TestLRUCache:
    """Test bounded LRU behaviour"""

    def test_default_capacity(self) -> None:
        assert LRUCache().max_size == 20

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValidationError):
            LRUCache(max_size=0)

    def test_get_missing_returns_default(self) -> None:
        cache = LRUCache(max_size=2)
        assert cache.get("nope") is None
        assert cache.get("nope", "fallback") == "fallback"

    def test_evicts_least_recently_inserted(self) -> None:
        cache = LRUCache(max_size=3)
        for key in ("a", "b", "c", "d"):
            cache.put(key, key.upper())
        assert "a" not in cache
        assert len(cache) == 3
        assert cache.get("d") == "D"

    def test_access_protects_entry(self) -> None:
        cache = LRUCache(max_size=3)
        for key in ("a", "b", "c"):
            cache.put(key, key)
        assert cache.get("a") == "a"
        cache.put("d", "d")
        assert "a" in cache
        assert "b" not in cache

    def test_updating_existing_key_does_not_evict(self) -> None:
        cache = LRUCache(max_size=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("a", 3)
        assert len(cache) == 2
        assert cache.get("a") == 3
        cache.put("c", 4)
        assert "b" not in cache

    def test_clear_and_delete(self) -> None:
        cache = LRUCache(max_size=2)
        cache.put("a", 1)
        cache.put("b", 2)
        del cache["a"]
        assert "a" not in cache
        cache.clear()
        assert len(cache) == 0


class TestIdentityCache:
    """Test identity-keyed side table"""

    def test_same_object_shares_value(self) -> None:
        cache = IdentityCache()
        owner = [1, 2]
        first = cache.get_or_create(owner, lambda o: object())
        assert cache.get_or_create(owner, lambda o: object()) is first

    def test_equal_but_distinct_objects_do_not_share(self) -> None:
        cache = IdentityCache()
        a, b = [1], [1]
        assert cache.get_or_create(a, lambda o: object()) is not cache.get_or_create(b, lambda o: object())

    def test_forget(self) -> None:
        cache = IdentityCache()
        owner = []
        cache.get_or_create(owner, lambda o: "value")
        assert cache.forget(owner) is True
        assert cache.get(owner) is None
        assert cache.forget(owner) is False

    def test_weakly_referenced_owner_is_dropped(self) -> None:
        cache = IdentityCache()
        owner = FontList()
        cache.get_or_create(owner, lambda o: "value")
        assert len(cache) == 1
        del owner
        gc.collect()
        cache.prune()
        assert len(cache) == 0

    def test_clear(self) -> None:
        cache = IdentityCache()
        cache.get_or_create([], lambda o: 1)
        cache.clear()
        assert len(cache) == 0

    def test_plain_list_owners_are_bounded(self) -> None:
        cache = IdentityCache(max_size=3)
        owners = [[index] for index in range(10)]
        for owner in owners:
            cache.get_or_create(owner, lambda o: o[0])
        assert len(cache) == 3
        assert cache.get(owners[0]) is None
        assert cache.get(owners[-1]) == 9

    def test_recently_used_plain_list_survives(self) -> None:
        cache = IdentityCache(max_size=2)
        a, b, c = [1], [2], [3]
        cache.get_or_create(a, lambda o: "a")
        cache.get_or_create(b, lambda o: "b")
        assert cache.get(a) == "a"
        cache.get_or_create(c, lambda o: "c")
        assert cache.get(a) == "a"
        assert cache.get(b) is None

    def test_forget_plain_list_after_eviction(self) -> None:
        cache = IdentityCache(max_size=1)
        owner = []
        cache.get_or_create(owner, lambda o: "value")
        cache.get_or_create([], lambda o: None)
        assert cache.get(owner) is None
        assert cache.forget(owner) is False
        assert len(cache) == 1
