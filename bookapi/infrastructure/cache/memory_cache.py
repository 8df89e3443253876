"""In-process tagged cache for serialized list payloads.

Entries are keyed by string and carry a set of tags and an expiry. Expiry is
lazy: an expired entry is dropped when looked up, and every store also
evicts entries whose expiry has passed (tracked in a min-heap), so memory
stays bounded by what was stored within one TTL. Tag invalidation removes
every entry carrying the tag and bumps the tag's generation, so a compute that
started before the invalidation is returned to its caller but not stored.

Shared by all requests of one process (app.state.cache); relies on the
single-threaded event loop, no locks.
"""

from __future__ import annotations

import heapq
import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Stored payload with its tags and absolute expiry (clock seconds)."""

    payload: str
    tags: frozenset[str]
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class InMemoryTaggedCache:
    """Read-through cache with TTL and tag-based bulk invalidation."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty cache.

        Args:
            clock: Monotonic time source in seconds (injectable for tests).
        """
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._keys_by_tag: dict[str, set[str]] = {}
        self._generations: dict[str, int] = {}
        self._expiry_heap: list[tuple[float, str]] = []

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key) if isinstance(key, str) else None
        return entry is not None and not entry.is_expired(self._clock())

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: int,
        tags: Iterable[str],
        compute: Callable[[], Awaitable[str]],
    ) -> str:
        """Return the live payload for key, or await compute once and store it.

        Args:
            key: Cache key (see bookapi.infrastructure.cache.keys).
            ttl_seconds: Lifetime of a newly stored entry; <= 0 expires at once.
            tags: Invalidation tags for a newly stored entry.
            compute: Async producer of the payload; its errors propagate and
                nothing is stored.

        Returns:
            Cached or freshly computed payload.
        """
        tag_set = frozenset(tags)
        entry = self._entries.get(key)
        if entry is not None:
            if not entry.is_expired(self._clock()):
                logger.debug("Cache HIT: %s", key)
                return entry.payload
            self._discard(key)
        logger.debug("Cache MISS: %s", key)

        generations = self._generation_snapshot(tag_set)
        payload = await compute()
        if self._generation_snapshot(tag_set) != generations:
            logger.debug("Cache SKIP: %s (tag invalidated during compute)", key)
            return payload

        now = self._clock()
        self._evict_expired(now)
        self._discard(key)
        expires_at = now + ttl_seconds
        self._entries[key] = CacheEntry(payload=payload, tags=tag_set, expires_at=expires_at)
        heapq.heappush(self._expiry_heap, (expires_at, key))
        for tag in tag_set:
            self._keys_by_tag.setdefault(tag, set()).add(key)
        logger.debug("Cache SET: %s (TTL: %ss, tags: %s)", key, ttl_seconds, sorted(tag_set))
        return payload

    async def invalidate_tags(self, tags: Iterable[str]) -> None:
        """Remove every entry whose tags intersect tags, regardless of expiry.

        Args:
            tags: Tags to invalidate; unknown tags are a no-op.
        """
        tag_set = set(tags)
        removed = 0
        for tag in tag_set:
            self._generations[tag] = self._generations.get(tag, 0) + 1
            for key in self._keys_by_tag.pop(tag, set()):
                if self._discard(key):
                    removed += 1
        logger.info("Cache INVALIDATE: %s (%s entries)", sorted(tag_set), removed)

    def _evict_expired(self, now: float) -> None:
        """Drop every entry whose expiry has passed."""
        evicted = 0
        while self._expiry_heap and self._expiry_heap[0][0] <= now:
            expires_at, key = heapq.heappop(self._expiry_heap)
            entry = self._entries.get(key)
            # Heap items for keys re-stored or invalidated since are stale.
            if entry is not None and entry.expires_at == expires_at:
                self._discard(key)
                evicted += 1
        if evicted:
            logger.debug("Cache EVICT: %s expired entries", evicted)

    def _generation_snapshot(self, tags: frozenset[str]) -> tuple[int, ...]:
        return tuple(self._generations.get(tag, 0) for tag in sorted(tags))

    def _discard(self, key: str) -> bool:
        """Remove key and its tag index entries. Returns True if it was present."""
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        for tag in entry.tags:
            keys = self._keys_by_tag.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._keys_by_tag[tag]
        return True
