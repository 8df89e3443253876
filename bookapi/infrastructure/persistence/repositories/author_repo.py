"""Author repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from bookapi.infrastructure.persistence.models.author import Author
from bookapi.infrastructure.persistence.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    """Author repository (paginated list, detail, writes)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Author)
