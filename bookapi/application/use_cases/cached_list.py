"""Cached paginated list reads.

One generic endpoint serves every resource list: the policy names the list,
its invalidation tag, its default page size, its serialization groups and
whether the payload (and so the cache key) depends on the API version.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from bookapi.application.interfaces.repositories import IResourceRepository
from bookapi.application.interfaces.services import ISerializer, ITaggedCache
from bookapi.core.constants import (
    AUTHORS_CACHE_TAG,
    AUTHORS_DEFAULT_LIMIT,
    AUTHORS_GROUP,
    AUTHORS_LIST_NAME,
    DEFAULT_PAGE,
    USERS_CACHE_TAG,
    USERS_DEFAULT_LIMIT,
    USERS_GROUP,
    USERS_LIST_NAME,
)

logger = logging.getLogger(__name__)

# (list_name, page, limit, version) -> key; see bookapi.infrastructure.cache.keys
KeyBuilder = Callable[[str, int, int, str | None], str]


@dataclass(frozen=True)
class ListCachePolicy:
    """Caching shape of one resource list."""

    list_name: str
    tag: str
    default_limit: int
    groups: tuple[str, ...]
    versioned: bool = False
    ttl_seconds: int = 60


AUTHORS_LIST_POLICY = ListCachePolicy(
    list_name=AUTHORS_LIST_NAME,
    tag=AUTHORS_CACHE_TAG,
    default_limit=AUTHORS_DEFAULT_LIMIT,
    groups=(AUTHORS_GROUP,),
)

# Only the users list varies by API version.
USERS_LIST_POLICY = ListCachePolicy(
    list_name=USERS_LIST_NAME,
    tag=USERS_CACHE_TAG,
    default_limit=USERS_DEFAULT_LIMIT,
    groups=(USERS_GROUP,),
    versioned=True,
)


class CachedListEndpoint:
    """Serve one page of a resource list through the tagged cache."""

    def __init__(
        self,
        policy: ListCachePolicy,
        repository: IResourceRepository,
        serializer: ISerializer,
        cache: ITaggedCache,
        key_builder: KeyBuilder,
    ) -> None:
        self.policy = policy
        self.repository = repository
        self.serializer = serializer
        self.cache = cache
        self.key_builder = key_builder

    def resolve_pagination(self, page: int | None, limit: int | None) -> tuple[int, int]:
        """Apply defaults: page 1, limit from the policy."""
        return (
            page if page is not None else DEFAULT_PAGE,
            limit if limit is not None else self.policy.default_limit,
        )

    def cache_key(self, page: int, limit: int, version: str | None) -> str:
        return self.key_builder(
            self.policy.list_name,
            page,
            limit,
            version if self.policy.versioned else None,
        )

    async def handle(
        self,
        page: int | None = None,
        limit: int | None = None,
        version: str | None = None,
    ) -> str:
        """Return the serialized page, from cache or freshly computed.

        Args:
            page: Requested page (None for default).
            limit: Requested page size (None for the policy default).
            version: Resolved API version; ignored for unversioned lists.

        Returns:
            JSON payload of the page.
        """
        page, limit = self.resolve_pagination(page, limit)
        serialization_version = version if self.policy.versioned else None
        key = self.cache_key(page, limit, version)

        async def compute() -> str:
            items = await self.repository.find_all_with_pagination(page, limit)
            logger.debug("Loaded %s %s for page %s", len(items), self.policy.list_name, page)
            return self.serializer.serialize(
                items, self.policy.groups, serialization_version
            )

        return await self.cache.get_or_compute(
            key, self.policy.ttl_seconds, {self.policy.tag}, compute
        )
