"""ORM models. Importing this package registers every table on Base.metadata."""

from bookapi.infrastructure.persistence.models.author import Author
from bookapi.infrastructure.persistence.models.user import User

__all__ = ["Author", "User"]
