"""Redis-backed tagged cache for list payloads shared across processes.

Each entry is a string key with SETEX; each tag is a Redis set of the keys
carrying it, expiring no earlier than its longest-lived member so tag sets
do not outgrow a read-only workload. Invalidation unions the tag sets and
unlinks the keys and the sets. Tag set TTLs use EXPIRE NX/GT (Redis 7+).
When Redis is unavailable the cache degrades to compute-through (payloads
are always computed, nothing is stored) and logs a warning.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable

import redis.asyncio as redis

from bookapi.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

TAG_KEY_PREFIX = "cache-tag:"


def tag_key(tag: str) -> str:
    """Redis key of the set holding the keys tagged with tag."""
    return f"{TAG_KEY_PREFIX}{tag}"


class RedisTaggedCache:
    """Async Redis tagged cache. Call connect() at startup and disconnect() at shutdown."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI; treated as connected.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        password = (
            self.settings.redis_password.get_secret_value()
            if self.settings.redis_password
            else None
        )
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: int,
        tags: Iterable[str],
        compute: Callable[[], Awaitable[str]],
    ) -> str:
        """Return the cached payload for key, or await compute and store it with tags.

        Redis errors are logged and treated as a miss; compute errors propagate.
        Entries with ttl_seconds <= 0 are not stored.
        """
        tag_list = sorted(set(tags))
        if not self.is_available() or self.redis is None:
            return await compute()
        try:
            cached = await self.redis.get(key)
        except redis.RedisError:
            logger.warning("Cache get unavailable for key %s", key, exc_info=True)
            cached = None
        if cached is not None:
            logger.debug("Cache HIT: %s", key)
            return cached
        logger.debug("Cache MISS: %s", key)

        payload = await compute()
        if ttl_seconds <= 0:
            return payload
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.setex(key, ttl_seconds, payload)
                for tag in tag_list:
                    pipe.sadd(tag_key(tag), key)
                    # NX sets the TTL on a new set; GT only ever extends it.
                    pipe.expire(tag_key(tag), ttl_seconds, nx=True)
                    pipe.expire(tag_key(tag), ttl_seconds, gt=True)
                await pipe.execute()
            logger.debug("Cache SET: %s (TTL: %ss, tags: %s)", key, ttl_seconds, tag_list)
        except redis.RedisError:
            logger.warning("Cache set unavailable for key %s", key, exc_info=True)
        return payload

    async def invalidate_tags(self, tags: Iterable[str]) -> None:
        """Unlink every key in the given tag sets, then the tag sets themselves.

        SUNION and UNLINK are not atomic: an entry stored between them is
        dropped from its tag set without being unlinked, so it stays readable
        until its own TTL runs out. That staleness is bounded by the entry TTL.
        """
        tag_keys = [tag_key(tag) for tag in sorted(set(tags))]
        if not tag_keys or not self.is_available() or self.redis is None:
            return
        try:
            keys = await self.redis.sunion(tag_keys)
            async with self.redis.pipeline(transaction=False) as pipe:
                if keys:
                    pipe.unlink(*keys)
                pipe.unlink(*tag_keys)
                await pipe.execute()
            logger.info("Cache INVALIDATE: %s (%s keys)", tag_keys, len(keys))
        except redis.RedisError:
            # Entries that survive expire within their TTL.
            logger.exception("Cache invalidate error for %s", tag_keys)
