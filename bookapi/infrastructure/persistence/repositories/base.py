"""Base repository: paginated reads and staged writes committed by flush()."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookapi.domain.exceptions import StoreException
from bookapi.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)


class BaseRepository[ModelType: Base]:
    """Base repository with get_by_id, find_all_with_pagination, persist, remove, flush.

    Writes are staged on the session and committed by flush(), which is the
    point after which the write is durable.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def find_all_with_pagination(self, page: int, limit: int) -> list[ModelType]:
        """Return the page-th slice (1-based) of size limit, ordered by id."""
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .order_by(model.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all())

    def persist(self, obj: ModelType) -> None:
        """Stage a new or modified record for the next flush."""
        self.db.add(obj)

    async def remove(self, obj: ModelType) -> None:
        """Stage a record for deletion on the next flush."""
        await self.db.delete(obj)

    async def flush(self) -> None:
        """Commit staged writes.

        Raises:
            StoreException: On constraint violation or connectivity loss
                (the session is rolled back first).
        """
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning("Store flush failed for %s: %s", self.model.__name__, e)
            raise StoreException("flush", str(e)) from e
