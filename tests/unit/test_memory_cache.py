"""InMemoryTaggedCache: read-through, TTL expiry and tag invalidation."""

import asyncio

import pytest

from bookapi.infrastructure.cache import InMemoryTaggedCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class CountingCompute:
    """Async payload producer that counts its invocations."""

    def __init__(self, payload: str = "[]") -> None:
        self.payload = payload
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        return self.payload


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryTaggedCache:
    return InMemoryTaggedCache(clock=clock)


async def test_hit_avoids_recompute(cache: InMemoryTaggedCache) -> None:
    compute = CountingCompute("payload")
    first = await cache.get_or_compute("k", 60, {"t"}, compute)
    second = await cache.get_or_compute("k", 60, {"t"}, compute)
    assert first == second == "payload"
    assert compute.calls == 1


async def test_invalidation_is_tag_scoped(cache: InMemoryTaggedCache) -> None:
    """Invalidating tag A leaves entries tagged only B untouched."""
    a = CountingCompute("a")
    b = CountingCompute("b")
    await cache.get_or_compute("ka", 60, {"A"}, a)
    await cache.get_or_compute("kb", 60, {"B"}, b)

    await cache.invalidate_tags({"A"})

    assert "ka" not in cache
    assert "kb" in cache
    await cache.get_or_compute("kb", 60, {"B"}, b)
    assert b.calls == 1


async def test_entry_with_any_invalidated_tag_is_removed(cache: InMemoryTaggedCache) -> None:
    await cache.get_or_compute("k", 60, {"A", "B"}, CountingCompute())
    await cache.invalidate_tags(["B"])
    assert "k" not in cache
    assert len(cache) == 0


async def test_fresh_after_invalidation(cache: InMemoryTaggedCache) -> None:
    """After invalidation the next read recomputes and sees the new payload."""
    await cache.get_or_compute("k", 60, {"t"}, CountingCompute("old"))
    await cache.invalidate_tags({"t"})
    fresh = CountingCompute("new")
    assert await cache.get_or_compute("k", 60, {"t"}, fresh) == "new"
    assert fresh.calls == 1


async def test_entry_expires_after_ttl(cache: InMemoryTaggedCache, clock: FakeClock) -> None:
    compute = CountingCompute()
    await cache.get_or_compute("k", 60, {"t"}, compute)
    clock.now += 59
    await cache.get_or_compute("k", 60, {"t"}, compute)
    assert compute.calls == 1

    clock.now += 1
    assert "k" not in cache
    await cache.get_or_compute("k", 60, {"t"}, compute)
    assert compute.calls == 2


async def test_zero_ttl_is_always_a_miss(cache: InMemoryTaggedCache) -> None:
    compute = CountingCompute()
    await cache.get_or_compute("k", 0, {"t"}, compute)
    await cache.get_or_compute("k", 0, {"t"}, compute)
    assert compute.calls == 2


async def test_compute_failure_is_not_cached(cache: InMemoryTaggedCache) -> None:
    """A failing compute propagates unchanged and leaves no entry behind."""

    async def failing() -> str:
        raise RuntimeError("store down")

    with pytest.raises(RuntimeError, match="store down"):
        await cache.get_or_compute("k", 60, {"t"}, failing)
    assert "k" not in cache

    compute = CountingCompute("ok")
    assert await cache.get_or_compute("k", 60, {"t"}, compute) == "ok"
    assert compute.calls == 1


async def test_invalidate_unknown_tag_is_noop(cache: InMemoryTaggedCache) -> None:
    await cache.get_or_compute("k", 60, {"t"}, CountingCompute())
    await cache.invalidate_tags({"unknown"})
    assert "k" in cache


async def test_invalidation_during_compute_skips_store(cache: InMemoryTaggedCache) -> None:
    """A payload computed across an invalidation is returned but not cached."""
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow() -> str:
        started.set()
        await release.wait()
        return "stale"

    task = asyncio.create_task(cache.get_or_compute("k", 60, {"t"}, slow))
    await started.wait()
    await cache.invalidate_tags({"t"})
    release.set()

    assert await task == "stale"
    assert "k" not in cache


async def test_invalidation_of_other_tag_during_compute_still_stores(
    cache: InMemoryTaggedCache,
) -> None:
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow() -> str:
        started.set()
        await release.wait()
        return "payload"

    task = asyncio.create_task(cache.get_or_compute("k", 60, {"t"}, slow))
    await started.wait()
    await cache.invalidate_tags({"other"})
    release.set()

    assert await task == "payload"
    assert "k" in cache


async def test_invalidate_accepts_generator(cache: InMemoryTaggedCache) -> None:
    await cache.get_or_compute("k", 60, {"t"}, CountingCompute())
    await cache.invalidate_tags(tag for tag in ["t"])
    assert "k" not in cache


async def test_store_evicts_expired_entries(
    cache: InMemoryTaggedCache, clock: FakeClock
) -> None:
    """Entries nobody reads again are dropped on a later store, not kept forever."""
    for page in range(1, 1001):
        await cache.get_or_compute(f"authors-{page}-3", 60, {"authorsCache"}, CountingCompute())
    clock.now += 3600

    await cache.get_or_compute("authors-1-5", 60, {"authorsCache"}, CountingCompute())

    assert len(cache._entries) == 1
    assert cache._keys_by_tag == {"authorsCache": {"authors-1-5"}}
    assert len(cache) == 1


async def test_eviction_skips_entries_stored_again(
    cache: InMemoryTaggedCache, clock: FakeClock
) -> None:
    await cache.get_or_compute("old", 10, {"t"}, CountingCompute())
    await cache.get_or_compute("live", 100, {"t"}, CountingCompute())
    clock.now += 5
    await cache.invalidate_tags({"t"})
    await cache.get_or_compute("old", 10, {"t"}, CountingCompute())
    clock.now += 6

    await cache.get_or_compute("other", 10, {"u"}, CountingCompute())

    assert "old" in cache
    assert "other" in cache
    assert "live" not in cache


async def test_len_ignores_expired_entries(
    cache: InMemoryTaggedCache, clock: FakeClock
) -> None:
    await cache.get_or_compute("k1", 10, {"t"}, CountingCompute())
    await cache.get_or_compute("k2", 60, {"t"}, CountingCompute())
    assert len(cache) == 2

    clock.now += 10

    assert len(cache) == 1
    assert "k1" not in cache
    assert "k2" in cache
