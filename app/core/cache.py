"""
Tag-invalidated read-through cache for list endpoints.

Entries are grouped under tags (one per resource type). A write to the
resource drops every entry under its tag; individual keys are never
invalidated on their own. Values must be JSON-serialisable.
"""

import json
import logging
import threading
import time
from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import Any

import redis

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

CUSTOMERS_TAG = "customersCache"
PRODUCTS_TAG = "productsCache"


def list_cache_key(operation: str, page: int, limit: int, scope: str | int | None = None) -> str:
    """Build "<operation>-<page>-<limit>", or "<operation>-<scope>-<page>-<limit>" when scoped."""
    if scope is None:
        return f"{operation}-{page}-{limit}"
    return f"{operation}-{scope}-{page}-{limit}"


class TagCache:
    """Interface shared by the cache backends."""

    def get(self, key: str) -> Any | None:
        raise NotImplementedError

    def set(self, key: str, value: Any, tags: Iterable[str]) -> None:
        raise NotImplementedError

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        raise NotImplementedError

    def get_or_load(self, key: str, tags: Iterable[str], loader: Callable[[], Any]) -> Any:
        """Return the cached value for key, or compute it with loader and store it under tags."""
        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache hit: key=%s", key)
            return cached
        logger.debug("Cache miss: key=%s", key)
        value = loader()
        self.set(key, value, tags)
        return value


class InMemoryTagCache(TagCache):
    """
    Process-local backend. Used in development and tests.

    Holds at most max_entries entries: each set() first sweeps expired entries,
    then evicts the oldest ones. Tag membership is pruned along with entries.
    """

    def __init__(self, ttl_seconds: int = 0, max_entries: int = 1024) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        # Insertion-ordered: the first key is the oldest entry.
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._entry_tags: dict[str, set[str]] = {}
        self._tags: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _drop(self, key: str) -> None:
        self._entries.pop(key, None)
        for tag in self._entry_tags.pop(key, set()):
            members = self._tags.get(tag)
            if members is not None:
                members.discard(key)
                if not members:
                    del self._tags[tag]

    def _sweep(self, now: float) -> None:
        expired = [k for k, (_, exp) in self._entries.items() if exp is not None and now >= exp]
        for key in expired:
            self._drop(key)
        while len(self._entries) >= self._max_entries:
            self._drop(next(iter(self._entries)))

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and time.monotonic() >= expires_at:
                self._drop(key)
                return None
            return value

    def set(self, key: str, value: Any, tags: Iterable[str]) -> None:
        now = time.monotonic()
        expires_at = now + self._ttl if self._ttl else None
        tags = set(tags)
        with self._lock:
            self._drop(key)
            self._sweep(now)
            self._entries[key] = (value, expires_at)
            self._entry_tags[key] = tags
            for tag in tags:
                self._tags.setdefault(tag, set()).add(key)

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        with self._lock:
            for tag in tags:
                keys = list(self._tags.get(tag, ()))
                for key in keys:
                    self._drop(key)
                self._tags.pop(tag, None)
                logger.info("Cache tag invalidated: tag=%s, entries=%s", tag, len(keys))


class RedisTagCache(TagCache):
    """
    Redis backend. Values are stored as JSON strings under "<prefix>:entry:<key>";
    each tag is a Redis set "<prefix>:tag:<tag>" holding the entry keys it covers.
    With a TTL, the tag set expires together with its newest member.
    """

    def __init__(self, client: redis.Redis, prefix: str = "bilemo", ttl_seconds: int = 0) -> None:
        self._redis = client
        self._prefix = prefix
        self._ttl = ttl_seconds

    def _entry_key(self, key: str) -> str:
        return f"{self._prefix}:entry:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self._prefix}:tag:{tag}"

    def get(self, key: str) -> Any | None:
        data = self._redis.get(self._entry_key(key))
        if data is None:
            return None
        return json.loads(data)

    def set(self, key: str, value: Any, tags: Iterable[str]) -> None:
        entry_key = self._entry_key(key)
        pipe = self._redis.pipeline()
        pipe.set(entry_key, json.dumps(value), ex=self._ttl or None)
        for tag in tags:
            tag_key = self._tag_key(tag)
            pipe.sadd(tag_key, entry_key)
            if self._ttl:
                pipe.expire(tag_key, self._ttl)
        pipe.execute()

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        for tag in tags:
            tag_key = self._tag_key(tag)
            members = self._redis.smembers(tag_key)
            self._redis.delete(*members, tag_key)
            logger.info("Cache tag invalidated: tag=%s, entries=%s", tag, len(members))


def build_cache(settings: Settings) -> TagCache:
    """Instantiate the backend selected by CACHE_BACKEND."""
    if settings.CACHE_BACKEND == "redis":
        client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
        return RedisTagCache(client, prefix=settings.CACHE_KEY_PREFIX, ttl_seconds=settings.CACHE_TTL_SECONDS)
    return InMemoryTagCache(ttl_seconds=settings.CACHE_TTL_SECONDS, max_entries=settings.CACHE_MAX_ENTRIES)


@lru_cache
def get_cache() -> TagCache:
    """Dependency returning the process-wide cache backend."""
    return build_cache(get_settings())
