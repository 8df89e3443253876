"""SQLAlchemy repositories implementing the application store ports."""

from bookapi.infrastructure.persistence.repositories.author_repo import AuthorRepository
from bookapi.infrastructure.persistence.repositories.base import BaseRepository
from bookapi.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = ["AuthorRepository", "BaseRepository", "UserRepository"]
