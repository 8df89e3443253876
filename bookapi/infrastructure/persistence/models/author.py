"""Author ORM model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookapi.infrastructure.persistence.database import Base
from bookapi.infrastructure.persistence.models.mixins import TimestampMixin


class Author(TimestampMixin, Base):
    """Author model. Table: author."""

    __tablename__ = "author"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
