"""Authors API: cached paginated list, detail, and admin-only mutations.

List reads go through the tagged cache (tag authorsCache); every successful
mutation invalidates that tag before the response is sent.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from bookapi.api.v1.dependencies import (
    get_author_list_endpoint,
    get_author_repo,
    get_author_writer,
    get_serializer,
    require_role,
)
from bookapi.application.dtos.principal import Principal
from bookapi.application.use_cases.cached_list import CachedListEndpoint
from bookapi.application.use_cases.resource_writer import ResourceWriter
from bookapi.core.constants import AUTHORS_GROUP, MAX_LIMIT, MAX_PAGE, ROLE_ADMIN
from bookapi.domain.exceptions import ResourceNotFoundException
from bookapi.infrastructure.persistence.models import Author
from bookapi.infrastructure.persistence.repositories import AuthorRepository
from bookapi.infrastructure.serialization import Serializer
from bookapi.schemas.author import AuthorPayload

router = APIRouter()

JSON = "application/json"

require_admin_create = require_role(
    ROLE_ADMIN, "You do not have sufficient rights to create an author"
)
require_admin_update = require_role(
    ROLE_ADMIN, "You do not have sufficient rights to edit an author"
)
require_admin_delete = require_role(
    ROLE_ADMIN, "You do not have sufficient rights to delete an author"
)


async def _get_author_or_404(repo: AuthorRepository, author_id: int) -> Author:
    author = await repo.get_by_id(author_id)
    if author is None:
        raise ResourceNotFoundException("author", author_id)
    return author


@router.get("")
async def list_authors(
    endpoint: Annotated[CachedListEndpoint, Depends(get_author_list_endpoint)],
    page: Annotated[int | None, Query(ge=1, le=MAX_PAGE)] = None,
    limit: Annotated[int | None, Query(ge=1, le=MAX_LIMIT)] = None,
) -> Response:
    """Return one page of authors (default page 1, limit 3), cached for 60s."""
    payload = await endpoint.handle(page=page, limit=limit)
    return Response(content=payload, media_type=JSON)


@router.get("/{author_id}", name="author_detail")
async def get_author(
    author_id: int,
    repo: Annotated[AuthorRepository, Depends(get_author_repo)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
) -> Response:
    """Return a single author. Not cached."""
    author = await _get_author_or_404(repo, author_id)
    return Response(
        content=serializer.serialize(author, [AUTHORS_GROUP]),
        media_type=JSON,
    )


@router.post("", status_code=201)
async def create_author(
    principal: Annotated[Principal, Depends(require_admin_create)],
    request: Request,
    writer: Annotated[ResourceWriter, Depends(get_author_writer)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
) -> Response:
    """Create an author (ROLE_ADMIN). Returns 201 with a Location header."""
    payload = serializer.deserialize(await request.body(), AuthorPayload)
    author = await writer.create(
        Author(first_name=payload.first_name, last_name=payload.last_name)
    )
    return Response(
        content=serializer.serialize(author, [AUTHORS_GROUP]),
        status_code=201,
        media_type=JSON,
        headers={"Location": str(request.url_for("author_detail", author_id=author.id))},
    )


@router.put("/{author_id}", status_code=204)
async def update_author(
    principal: Annotated[Principal, Depends(require_admin_update)],
    author_id: int,
    request: Request,
    repo: Annotated[AuthorRepository, Depends(get_author_repo)],
    writer: Annotated[ResourceWriter, Depends(get_author_writer)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
) -> Response:
    """Replace an author's names (ROLE_ADMIN)."""
    author = await _get_author_or_404(repo, author_id)
    payload = serializer.deserialize(await request.body(), AuthorPayload)
    author.first_name = payload.first_name
    author.last_name = payload.last_name  # type: ignore[assignment]
    await writer.update(author)
    return Response(status_code=204)


@router.delete("/{author_id}", status_code=204)
async def delete_author(
    principal: Annotated[Principal, Depends(require_admin_delete)],
    author_id: int,
    repo: Annotated[AuthorRepository, Depends(get_author_repo)],
    writer: Annotated[ResourceWriter, Depends(get_author_writer)],
) -> Response:
    """Delete an author (ROLE_ADMIN)."""
    author = await _get_author_or_404(repo, author_id)
    await writer.delete(author)
    return Response(status_code=204)
