"""User ORM model for authentication."""

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookapi.infrastructure.persistence.database import Base
from bookapi.infrastructure.persistence.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    """User model. Table: app_user. email is unique; password holds the bcrypt hash."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(180), nullable=False, unique=True)
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    password: Mapped[str] = mapped_column(String, nullable=False)
