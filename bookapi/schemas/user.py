"""User API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from bookapi.core.constants import USERS_GROUP
from bookapi.infrastructure.serialization.exposure import exposed


class UserPayload(BaseModel):
    """Request body for register and update (plain-text password)."""

    email: str | None = None
    password: str | None = None


class UserConstraints(BaseModel):
    """Validation rules applied to User entities (password is already hashed)."""

    model_config = ConfigDict(from_attributes=True)

    email: EmailStr
    password: str = Field(..., min_length=1)
    roles: list[str] = Field(..., min_length=1)


class UserView(BaseModel):
    """User projection (group getUsers). roles are exposed from API version 2.0."""

    model_config = ConfigDict(from_attributes=True)

    id: int = exposed(USERS_GROUP)
    email: str = exposed(USERS_GROUP)
    roles: list[str] = exposed(USERS_GROUP, since="2.0")
