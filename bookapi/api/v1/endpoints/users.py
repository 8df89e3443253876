"""Users API: versioned cached list, detail, public registration and mutations.

The users list and detail are serialized for the API version requested in
the Accept header; the list cache key carries that version. Mounted without
prefix because registration lives at /register.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from bookapi.api.v1.dependencies import (
    get_api_version,
    get_password_hasher,
    get_serializer,
    get_user_list_endpoint,
    get_user_repo,
    get_user_writer,
    require_role,
)
from bookapi.application.dtos.principal import Principal
from bookapi.application.use_cases.cached_list import CachedListEndpoint
from bookapi.application.use_cases.resource_writer import ResourceWriter
from bookapi.core.constants import (
    MAX_LIMIT,
    MAX_PAGE,
    ROLE_ADMIN,
    ROLE_USER,
    USERS_GROUP,
)
from bookapi.domain.exceptions import ResourceNotFoundException
from bookapi.infrastructure.persistence.models import User
from bookapi.infrastructure.persistence.repositories import UserRepository
from bookapi.infrastructure.security.password import PasswordHasher
from bookapi.infrastructure.serialization import Serializer
from bookapi.schemas.user import UserPayload

router = APIRouter()

JSON = "application/json"

require_user_update = require_role(
    ROLE_USER, "You do not have sufficient rights to edit a user"
)
require_admin_delete = require_role(
    ROLE_ADMIN, "You do not have sufficient rights to delete a user"
)


def _hash_or_empty(hasher: PasswordHasher, password: str | None) -> str:
    # An empty value is left for the validator to reject.
    return hasher.hash(password) if password else ""


async def _get_user_or_404(repo: UserRepository, user_id: int) -> User:
    user = await repo.get_by_id(user_id)
    if user is None:
        raise ResourceNotFoundException("user", user_id)
    return user


@router.get("/users")
async def list_users(
    endpoint: Annotated[CachedListEndpoint, Depends(get_user_list_endpoint)],
    version: Annotated[str, Depends(get_api_version)],
    page: Annotated[int | None, Query(ge=1, le=MAX_PAGE)] = None,
    limit: Annotated[int | None, Query(ge=1, le=MAX_LIMIT)] = None,
) -> Response:
    """Return one page of users (default page 1, limit 100), cached per API version."""
    payload = await endpoint.handle(page=page, limit=limit, version=version)
    return Response(content=payload, media_type=JSON)


@router.get("/users/{user_id}", name="user_detail")
async def get_user(
    user_id: int,
    repo: Annotated[UserRepository, Depends(get_user_repo)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
    version: Annotated[str, Depends(get_api_version)],
) -> Response:
    """Return a single user for the requested API version. Not cached."""
    user = await _get_user_or_404(repo, user_id)
    return Response(
        content=serializer.serialize(user, [USERS_GROUP], version),
        media_type=JSON,
    )


@router.post("/register", status_code=201)
async def register(
    request: Request,
    writer: Annotated[ResourceWriter, Depends(get_user_writer)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> Response:
    """Register a user (public). Always granted ROLE_USER; password is stored hashed."""
    payload = serializer.deserialize(await request.body(), UserPayload)
    user = User(
        email=payload.email,
        roles=[ROLE_USER],
        password=_hash_or_empty(hasher, payload.password),
    )
    user = await writer.create(user)
    return Response(
        content=serializer.serialize(user, [USERS_GROUP]),
        status_code=201,
        media_type=JSON,
        headers={"Location": str(request.url_for("user_detail", user_id=user.id))},
    )


@router.put("/users/{user_id}", status_code=204)
async def update_user(
    principal: Annotated[Principal, Depends(require_user_update)],
    user_id: int,
    request: Request,
    repo: Annotated[UserRepository, Depends(get_user_repo)],
    writer: Annotated[ResourceWriter, Depends(get_user_writer)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> Response:
    """Replace a user's email and password (ROLE_USER)."""
    user = await _get_user_or_404(repo, user_id)
    payload = serializer.deserialize(await request.body(), UserPayload)
    user.email = payload.email  # type: ignore[assignment]
    user.password = _hash_or_empty(hasher, payload.password)
    await writer.update(user)
    return Response(status_code=204)


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    principal: Annotated[Principal, Depends(require_admin_delete)],
    user_id: int,
    repo: Annotated[UserRepository, Depends(get_user_repo)],
    writer: Annotated[ResourceWriter, Depends(get_user_writer)],
) -> Response:
    """Delete a user (ROLE_ADMIN)."""
    user = await _get_user_or_404(repo, user_id)
    await writer.delete(user)
    return Response(status_code=204)
