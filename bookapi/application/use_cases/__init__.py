"""Use cases: cached list reads and invalidating writes."""

from bookapi.application.use_cases.cached_list import (
    AUTHORS_LIST_POLICY,
    USERS_LIST_POLICY,
    CachedListEndpoint,
    ListCachePolicy,
)
from bookapi.application.use_cases.resource_writer import ResourceWriter

__all__ = [
    "AUTHORS_LIST_POLICY",
    "USERS_LIST_POLICY",
    "CachedListEndpoint",
    "ListCachePolicy",
    "ResourceWriter",
]
