"""Cache: tagged response cache backends and key utilities.

Used by list endpoints (read-through) and mutation endpoints (tag
invalidation). The backend is chosen by settings.cache_backend; key format
is in keys.py (DRY).
"""

from bookapi.application.interfaces.services import ITaggedCache
from bookapi.core.config import Settings
from bookapi.infrastructure.cache.keys import build_list_key
from bookapi.infrastructure.cache.memory_cache import CacheEntry, InMemoryTaggedCache
from bookapi.infrastructure.cache.redis_cache import RedisTaggedCache


def create_cache(settings: Settings) -> ITaggedCache:
    """Build the configured cache backend (Redis connects later, in lifespan)."""
    if settings.cache_backend == "redis":
        return RedisTaggedCache(settings=settings)
    return InMemoryTaggedCache()


__all__ = [
    "CacheEntry",
    "InMemoryTaggedCache",
    "RedisTaggedCache",
    "build_list_key",
    "create_cache",
]
