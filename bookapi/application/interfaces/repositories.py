"""Repository interfaces (ports) for the application layer.

Protocols define the store contract that infrastructure repositories fulfill
(DIP). Use cases depend on these, never on SQLAlchemy directly.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol


class IResourceRepository(Protocol):
    """Protocol for a paginated resource store (authors, users)."""

    async def find_all_with_pagination(self, page: int, limit: int) -> Sequence[Any]:
        """Return the page-th slice of size limit, ordered by id (page starts at 1)."""

    async def get_by_id(self, entity_id: int) -> Any | None:
        """Return a single entity by primary key, or None."""

    def persist(self, entity: Any) -> None:
        """Stage a new or modified entity for the next flush."""

    async def remove(self, entity: Any) -> None:
        """Stage an entity for deletion on the next flush."""

    async def flush(self) -> None:
        """Commit staged writes. Raises StoreException on failure."""


class IUserRepository(IResourceRepository, Protocol):
    """User store: adds lookup by the login identifier."""

    async def get_by_email(self, email: str) -> Any | None:
        """Return the user with this email, or None."""
