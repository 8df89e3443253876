"""User repository with lookup by login identifier (email)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookapi.infrastructure.persistence.models.user import User
from bookapi.infrastructure.persistence.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository. get_by_email backs login_check."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
