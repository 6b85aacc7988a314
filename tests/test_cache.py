"""Unit tests for app.core.cache: key format, tag invalidation, read-through and backends."""

import json
import unittest
from unittest.mock import MagicMock, patch

from app.core.cache import (
    CUSTOMERS_TAG,
    PRODUCTS_TAG,
    InMemoryTagCache,
    RedisTagCache,
    build_cache,
    list_cache_key,
)


class TestListCacheKey(unittest.TestCase):
    def test_global_key(self) -> None:
        self.assertEqual(list_cache_key("getAllProducts", 2, 3), "getAllProducts-2-3")

    def test_scoped_key(self) -> None:
        self.assertEqual(list_cache_key("getAllCustomers", 1, 3, scope=7), "getAllCustomers-7-1-3")


class TestInMemoryTagCache(unittest.TestCase):
    def setUp(self) -> None:
        self.cache = InMemoryTagCache()

    def test_miss_returns_none(self) -> None:
        self.assertIsNone(self.cache.get("missing"))

    def test_invalidate_drops_only_entries_under_tag(self) -> None:
        self.cache.set("getAllCustomers-1-1-3", [1], [CUSTOMERS_TAG])
        self.cache.set("getAllCustomers-2-1-3", [2], [CUSTOMERS_TAG])
        self.cache.set("getAllProducts-1-3", [3], [PRODUCTS_TAG])

        self.cache.invalidate_tags([CUSTOMERS_TAG])

        self.assertIsNone(self.cache.get("getAllCustomers-1-1-3"))
        self.assertIsNone(self.cache.get("getAllCustomers-2-1-3"))
        self.assertEqual(self.cache.get("getAllProducts-1-3"), [3])

    def test_invalidating_unknown_tag_is_noop(self) -> None:
        self.cache.invalidate_tags(["nothing"])

    def test_get_or_load_calls_loader_once(self) -> None:
        loader = MagicMock(return_value=[{"id": 1}])
        first = self.cache.get_or_load("k", [PRODUCTS_TAG], loader)
        second = self.cache.get_or_load("k", [PRODUCTS_TAG], loader)
        self.assertEqual(first, second)
        loader.assert_called_once()

    def test_empty_list_is_cached(self) -> None:
        loader = MagicMock(return_value=[])
        self.cache.get_or_load("k", [PRODUCTS_TAG], loader)
        self.cache.get_or_load("k", [PRODUCTS_TAG], loader)
        loader.assert_called_once()

    def test_entries_expire_after_ttl(self) -> None:
        cache = InMemoryTagCache(ttl_seconds=10)
        with patch("app.core.cache.time.monotonic", return_value=100.0):
            cache.set("k", "v", [PRODUCTS_TAG])
        with patch("app.core.cache.time.monotonic", return_value=109.0):
            self.assertEqual(cache.get("k"), "v")
        with patch("app.core.cache.time.monotonic", return_value=110.0):
            self.assertIsNone(cache.get("k"))

    def test_size_is_bounded_by_evicting_oldest(self) -> None:
        cache = InMemoryTagCache(max_entries=3)
        for page in range(1, 11):
            cache.set(list_cache_key("getAllProducts", page, 3), [page], [PRODUCTS_TAG])
        self.assertEqual(len(cache), 3)
        self.assertIsNone(cache.get("getAllProducts-1-3"))
        self.assertEqual(cache.get("getAllProducts-10-3"), [10])
        self.assertEqual(cache._tags[PRODUCTS_TAG], {"getAllProducts-8-3", "getAllProducts-9-3", "getAllProducts-10-3"})

    def test_set_sweeps_expired_entries_and_tag_membership(self) -> None:
        cache = InMemoryTagCache(ttl_seconds=10)
        with patch("app.core.cache.time.monotonic", return_value=100.0):
            cache.set("old-1", 1, [CUSTOMERS_TAG])
            cache.set("old-2", 2, [CUSTOMERS_TAG])
        with patch("app.core.cache.time.monotonic", return_value=200.0):
            cache.set("fresh", 3, [PRODUCTS_TAG])
        self.assertEqual(len(cache), 1)
        self.assertNotIn(CUSTOMERS_TAG, cache._tags)

    def test_overwriting_key_moves_it_between_tags(self) -> None:
        self.cache.set("k", 1, [CUSTOMERS_TAG])
        self.cache.set("k", 2, [PRODUCTS_TAG])
        self.cache.invalidate_tags([CUSTOMERS_TAG])
        self.assertEqual(self.cache.get("k"), 2)


class TestRedisTagCache(unittest.TestCase):
    def setUp(self) -> None:
        self.client = MagicMock()
        self.pipe = self.client.pipeline.return_value
        self.cache = RedisTagCache(self.client, prefix="test", ttl_seconds=60)

    def test_set_stores_json_and_tag_membership(self) -> None:
        self.cache.set("getAllProducts-1-3", [{"id": 1}], [PRODUCTS_TAG])
        self.pipe.set.assert_called_once_with("test:entry:getAllProducts-1-3", json.dumps([{"id": 1}]), ex=60)
        self.pipe.sadd.assert_called_once_with("test:tag:productsCache", "test:entry:getAllProducts-1-3")
        self.pipe.expire.assert_called_once_with("test:tag:productsCache", 60)
        self.pipe.execute.assert_called_once()

    def test_zero_ttl_means_no_expiry(self) -> None:
        cache = RedisTagCache(self.client, prefix="test", ttl_seconds=0)
        cache.set("k", 1, [])
        self.pipe.set.assert_called_once_with("test:entry:k", "1", ex=None)
        self.pipe.expire.assert_not_called()

    def test_get_decodes_json(self) -> None:
        self.client.get.return_value = '[{"id": 1}]'
        self.assertEqual(self.cache.get("k"), [{"id": 1}])
        self.client.get.assert_called_once_with("test:entry:k")

    def test_get_miss(self) -> None:
        self.client.get.return_value = None
        self.assertIsNone(self.cache.get("k"))

    def test_invalidate_deletes_members_and_tag_set(self) -> None:
        self.client.smembers.return_value = {"test:entry:a"}
        self.cache.invalidate_tags([CUSTOMERS_TAG])
        self.client.smembers.assert_called_once_with("test:tag:customersCache")
        self.client.delete.assert_called_once_with("test:entry:a", "test:tag:customersCache")


class TestBuildCache(unittest.TestCase):
    def test_memory_backend(self) -> None:
        settings = MagicMock()
        settings.CACHE_BACKEND = "memory"
        settings.CACHE_TTL_SECONDS = 0
        settings.CACHE_MAX_ENTRIES = 16
        self.assertIsInstance(build_cache(settings), InMemoryTagCache)

    def test_redis_backend_uses_url(self) -> None:
        settings = MagicMock()
        settings.CACHE_BACKEND = "redis"
        settings.REDIS_URL = "redis://cache:6379/1"
        settings.CACHE_KEY_PREFIX = "bilemo"
        settings.CACHE_TTL_SECONDS = 30
        with patch("app.core.cache.redis.Redis.from_url") as from_url:
            cache = build_cache(settings)
        from_url.assert_called_once_with("redis://cache:6379/1", decode_responses=True)
        self.assertIsInstance(cache, RedisTagCache)


if __name__ == "__main__":
    unittest.main()
