"""Author API schemas: request payload, validation constraints and projection."""

from pydantic import BaseModel, ConfigDict, Field

from bookapi.core.constants import AUTHORS_GROUP
from bookapi.infrastructure.serialization.exposure import exposed


class AuthorPayload(BaseModel):
    """Request body for creating or replacing an author.

    Fields are optional so that missing values surface as validation
    violations (400) rather than decoding errors.
    """

    first_name: str | None = None
    last_name: str | None = None


class AuthorConstraints(BaseModel):
    """Validation rules applied to Author entities before they are persisted."""

    model_config = ConfigDict(from_attributes=True)

    first_name: str | None = Field(default=None, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)


class AuthorView(BaseModel):
    """Author projection (group getAuthors)."""

    model_config = ConfigDict(from_attributes=True)

    id: int = exposed(AUTHORS_GROUP)
    first_name: str | None = exposed(AUTHORS_GROUP)
    last_name: str = exposed(AUTHORS_GROUP)
