"""Service interfaces (ports) for the application layer.

Protocols define contracts for the cache, serializer and validator
collaborators (DIP). Implementations live in bookapi.infrastructure and
bookapi.application.services.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from pydantic import BaseModel

    from bookapi.application.dtos.violation import Violation

PayloadT = TypeVar("PayloadT", bound="BaseModel")


class ITaggedCache(Protocol):
    """Read-through cache of serialized payloads with tag-based invalidation."""

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: int,
        tags: Iterable[str],
        compute: Callable[[], Awaitable[str]],
    ) -> str:
        """Return the live payload for key, or await compute, store and return it.

        compute errors propagate and nothing is stored.
        """

    async def invalidate_tags(self, tags: Iterable[str]) -> None:
        """Remove every entry carrying any of tags. Idempotent."""


class ISerializer(Protocol):
    """JSON serializer filtered by groups and API version."""

    def serialize(
        self,
        value: Any,
        groups: Iterable[str],
        version: str | None = None,
    ) -> str:
        """Render value (entity, sequence of entities or model) to JSON."""

    def deserialize(self, content: str | bytes, target: type[PayloadT]) -> PayloadT:
        """Decode JSON content into target. Raises DeserializationException."""


class IValidator(Protocol):
    """Entity validator."""

    def validate(self, entity: Any) -> list[Violation]:
        """Return violations; an empty list means the entity is valid."""
