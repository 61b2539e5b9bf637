"""
Cache Utility Module

Tagged key-value caches. Every entry may carry tags; flushing a tag drops
every entry registered under it in one call. Two backends are provided:

- ``MemoryTaggedCache`` — in-process LRU with optional TTL
- ``RedisTaggedCache``  — shared Redis store, tags kept as Redis sets

Backends raise ``CacheError`` when the store is unreachable; deciding
whether a failure is fatal is left to the caller.
"""

import json
import logging
import time
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.config import Settings, settings
from app.exceptions import CacheError
from app.utils.metrics import REDIS_CONNECTED, record_cache_hit, record_cache_miss

logger = logging.getLogger(__name__)


class TaggedCache(Protocol):
    """Interface the language mode cache consumes."""

    async def has(self, key: str) -> bool: ...

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, tags: list[str] | None = None, ttl: int | None = None) -> None: ...

    async def flush_by_tag(self, tag: str) -> int: ...

    async def clear(self) -> None: ...


class MemoryTaggedCache:
    """
    In-memory LRU cache with tag index.

    Used when no Redis URL is configured and in tests. Only shared within
    one worker process.
    """

    def __init__(self, max_size: int = 1000, default_ttl: int | None = None):
        self._cache: OrderedDict = OrderedDict()
        self._tags: dict[str, set[str]] = {}
        self._max_size = max_size
        self._default_ttl = default_ttl

    def _expired(self, key: str) -> bool:
        _, expiry, _ = self._cache[key]
        return expiry is not None and datetime.now(timezone.utc) > expiry

    def _drop(self, key: str) -> None:
        _, _, tags = self._cache.pop(key)
        for tag in tags:
            keys = self._tags.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._tags[tag]

    async def has(self, key: str) -> bool:
        if key not in self._cache:
            return False
        if self._expired(key):
            self._drop(key)
            return False
        return True

    async def get(self, key: str) -> Any | None:
        """Get value and move to end (most recently used)."""
        if not await self.has(key):
            record_cache_miss("memory")
            return None
        self._cache.move_to_end(key)
        record_cache_hit("memory")
        return self._cache[key][0]

    async def set(self, key: str, value: Any, tags: list[str] | None = None, ttl: int | None = None) -> None:
        ttl = ttl or self._default_ttl
        expiry = datetime.now(timezone.utc) + timedelta(seconds=ttl) if ttl else None

        if key in self._cache:
            self._drop(key)
        tag_set = frozenset(tags or ())
        self._cache[key] = (value, expiry, tag_set)
        for tag in tag_set:
            self._tags.setdefault(tag, set()).add(key)

        # Evict oldest if over capacity
        while len(self._cache) > self._max_size:
            self._drop(next(iter(self._cache)))

    async def flush_by_tag(self, tag: str) -> int:
        keys = list(self._tags.get(tag, ()))
        for key in keys:
            self._drop(key)
        if keys:
            logger.debug("Cache FLUSH TAG: %s (%d keys)", tag, len(keys))
        return len(keys)

    async def clear(self) -> None:
        self._cache.clear()
        self._tags.clear()

    def __len__(self) -> int:
        return len(self._cache)


class RedisTaggedCache:
    """
    Redis-backed tagged cache shared by all workers.

    Values are stored JSON-encoded under ``<namespace>:<key>``; each tag is a
    Redis set ``<namespace>:tag:<tag>`` listing the keys registered under it.
    """

    RECONNECT_COOLDOWN = 30  # seconds between connect attempts while Redis is down

    def __init__(
        self,
        url: str | None = None,
        client: redis.Redis | None = None,
        namespace: str = "lms",
        default_ttl: int | None = None,
    ):
        if client is None and url is None:
            raise ValueError("RedisTaggedCache needs either a url or a client")
        self._url = url
        self._redis: redis.Redis | None = client
        self._namespace = namespace
        self._default_ttl = default_ttl
        self._enabled = True
        self._last_connect_attempt: float = 0  # timestamp of last failed connect; enables the retry cooldown

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self._namespace}:tag:{tag}"

    async def connect(self) -> None:
        """
        Establish the Redis connection pool (no-op if already connected).

        A failed attempt disables the backend until ``RECONNECT_COOLDOWN``
        seconds have passed and is raised as ``CacheError``.
        """
        if self._redis is not None:
            return

        self._last_connect_attempt = time.time()
        try:
            self._redis = redis.Redis.from_url(self._url, decode_responses=True)
            await self._redis.ping()
            REDIS_CONNECTED.set(1)
            self._enabled = True
            logger.info("Cache: Successfully connected to Redis")
        except RedisError as e:
            REDIS_CONNECTED.set(0)
            self._redis = None
            self._enabled = False
            raise CacheError(f"Failed to connect to Redis: {e}", operation="connect") from e

    async def disconnect(self) -> None:
        """Close Redis connection"""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            REDIS_CONNECTED.set(0)
            logger.info("Cache: Disconnected from Redis")

    async def _maybe_retry_connect(self) -> None:
        """Re-attempt connection after the cooldown to allow self-healing."""
        if not self._enabled and time.time() - self._last_connect_attempt >= self.RECONNECT_COOLDOWN:
            logger.info("Cache: retrying Redis connection after cooldown...")
            self._redis = None
            self._enabled = True  # reset so connect() proceeds
            await self.connect()

    async def _client(self, operation: str) -> redis.Redis:
        await self._maybe_retry_connect()
        if not self._enabled:
            raise CacheError("Redis unavailable, waiting for reconnect cooldown", operation=operation)
        if self._redis is None:
            await self.connect()
        return self._redis

    async def has(self, key: str) -> bool:
        client = await self._client("has")
        try:
            return bool(await client.exists(self._key(key)))
        except RedisError as e:
            raise CacheError(f"Cache has error for {key}: {e}", operation="has") from e

    async def get(self, key: str) -> Any | None:
        client = await self._client("get")
        try:
            data = await client.get(self._key(key))
        except RedisError as e:
            raise CacheError(f"Cache get error for {key}: {e}", operation="get") from e
        if data is None:
            logger.debug("Cache MISS: %s", key)
            record_cache_miss("redis")
            return None
        try:
            value = json.loads(data)
        except ValueError as e:
            raise CacheError(f"Cache decode error for {key}: {e}", operation="get") from e
        logger.debug("Cache HIT: %s", key)
        record_cache_hit("redis")
        return value

    async def set(self, key: str, value: Any, tags: list[str] | None = None, ttl: int | None = None) -> None:
        client = await self._client("set")
        ttl = ttl or self._default_ttl
        serialized = json.dumps(value, default=str)
        try:
            async with client.pipeline(transaction=True) as pipe:
                if ttl:
                    pipe.setex(self._key(key), ttl, serialized)
                else:
                    pipe.set(self._key(key), serialized)
                for tag in tags or ():
                    pipe.sadd(self._tag_key(tag), key)
                await pipe.execute()
        except RedisError as e:
            raise CacheError(f"Cache set error for {key}: {e}", operation="set") from e
        logger.debug("Cache SET: %s (TTL: %ss, tags: %s)", key, ttl, tags)

    async def flush_by_tag(self, tag: str) -> int:
        client = await self._client("flush_by_tag")
        tag_key = self._tag_key(tag)
        try:
            keys = await client.smembers(tag_key)
            async with client.pipeline(transaction=True) as pipe:
                if keys:
                    pipe.delete(*(self._key(key) for key in keys))
                pipe.delete(tag_key)
                await pipe.execute()
        except RedisError as e:
            raise CacheError(f"Cache flush error for tag {tag}: {e}", operation="flush_by_tag") from e
        logger.info("Cache FLUSH TAG: %s (%d keys)", tag, len(keys))
        return len(keys)

    async def clear(self) -> None:
        client = await self._client("clear")
        try:
            keys = [key async for key in client.scan_iter(match=f"{self._namespace}:*")]
            if keys:
                await client.delete(*keys)
        except RedisError as e:
            raise CacheError(f"Cache clear error: {e}", operation="clear") from e


def build_cache(config: Settings = settings) -> TaggedCache:
    """Pick the cache backend for the configured environment."""
    if config.redis_url:
        return RedisTaggedCache(url=config.redis_url, default_ttl=config.cache_ttl)
    return MemoryTaggedCache(max_size=config.cache_max_size, default_ttl=config.cache_ttl)
