"""Resource mutations with cache invalidation.

Every successful write is committed (repository flush) and then the
resource's list tag is invalidated, both before the caller gets control
back. Rejected writes (validation) never touch the store or the cache.
"""

from __future__ import annotations

import logging
from typing import Any

from bookapi.application.interfaces.repositories import IResourceRepository
from bookapi.application.interfaces.services import ITaggedCache, IValidator
from bookapi.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)


class ResourceWriter:
    """Create, update and delete one resource type, invalidating its list tag."""

    def __init__(
        self,
        repository: IResourceRepository,
        validator: IValidator,
        cache: ITaggedCache,
        tag: str,
    ) -> None:
        self.repository = repository
        self.validator = validator
        self.cache = cache
        self.tag = tag

    async def create(self, entity: Any) -> Any:
        """Validate, persist and commit a new entity; returns it with its id set."""
        await self._save(entity)
        return entity

    async def update(self, entity: Any) -> None:
        """Validate and commit changes already applied to a loaded entity."""
        await self._save(entity)

    async def delete(self, entity: Any) -> None:
        """Remove and commit, then invalidate."""
        await self.repository.remove(entity)
        await self.repository.flush()
        await self._invalidate()

    async def _save(self, entity: Any) -> None:
        violations = self.validator.validate(entity)
        if violations:
            raise ValidationException(violations)
        self.repository.persist(entity)
        await self.repository.flush()
        await self._invalidate()

    async def _invalidate(self) -> None:
        await self.cache.invalidate_tags({self.tag})
        logger.debug("Invalidated cache tag %s", self.tag)
