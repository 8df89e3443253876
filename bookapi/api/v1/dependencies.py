"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories, the shared tagged
cache and the application use cases. Routes depend only on these providers,
never on infrastructure constructors directly; tests swap them through
app.dependency_overrides.
"""

from __future__ import annotations

from dataclasses import replace
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bookapi.application.dtos.principal import Principal
from bookapi.application.interfaces.services import ITaggedCache
from bookapi.application.services.authorization_service import AuthorizationService
from bookapi.application.services.validator import Validator
from bookapi.application.use_cases.cached_list import (
    AUTHORS_LIST_POLICY,
    USERS_LIST_POLICY,
    CachedListEndpoint,
)
from bookapi.application.use_cases.resource_writer import ResourceWriter
from bookapi.core.config import get_settings
from bookapi.core.constants import AUTHORS_CACHE_TAG, USERS_CACHE_TAG
from bookapi.domain.exceptions import AuthenticationException
from bookapi.infrastructure.cache.keys import build_list_key
from bookapi.infrastructure.persistence.database import get_db
from bookapi.infrastructure.persistence.models import Author, User
from bookapi.infrastructure.persistence.repositories import (
    AuthorRepository,
    UserRepository,
)
from bookapi.infrastructure.security.jwt import decode_token
from bookapi.infrastructure.security.password import PasswordHasher
from bookapi.infrastructure.serialization import Serializer
from bookapi.infrastructure.versioning import VersionResolver
from bookapi.schemas.author import AuthorConstraints, AuthorView
from bookapi.schemas.user import UserConstraints, UserView

_http_bearer = HTTPBearer(auto_error=False)


# ---- Shared services ----


def get_cache(request: Request) -> ITaggedCache:
    """Process-wide tagged cache created in create_app()."""
    return request.app.state.cache


@lru_cache
def get_version_resolver() -> VersionResolver:
    return VersionResolver(get_settings().api_default_version)


def get_api_version(
    request: Request,
    resolver: Annotated[VersionResolver, Depends(get_version_resolver)],
) -> str:
    """API version requested through the Accept header (version= parameter)."""
    return resolver.resolve(request.headers.get("accept"))


@lru_cache
def get_serializer() -> Serializer:
    """Serializer with the entity -> projection registry."""
    return Serializer({Author: AuthorView, User: UserView})


@lru_cache
def get_validator() -> Validator:
    """Validator with the entity -> constraints registry."""
    return Validator({Author: AuthorConstraints, User: UserConstraints})


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache
def get_authorization_service() -> AuthorizationService:
    return AuthorizationService()


# ---- Repositories ----


async def get_author_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorRepository:
    return AuthorRepository(db)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    return UserRepository(db)


# ---- Use cases ----


def get_author_list_endpoint(
    repo: Annotated[AuthorRepository, Depends(get_author_repo)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
    cache: Annotated[ITaggedCache, Depends(get_cache)],
) -> CachedListEndpoint:
    policy = replace(AUTHORS_LIST_POLICY, ttl_seconds=get_settings().cache_ttl_lists)
    return CachedListEndpoint(policy, repo, serializer, cache, build_list_key)


def get_user_list_endpoint(
    repo: Annotated[UserRepository, Depends(get_user_repo)],
    serializer: Annotated[Serializer, Depends(get_serializer)],
    cache: Annotated[ITaggedCache, Depends(get_cache)],
) -> CachedListEndpoint:
    policy = replace(USERS_LIST_POLICY, ttl_seconds=get_settings().cache_ttl_lists)
    return CachedListEndpoint(policy, repo, serializer, cache, build_list_key)


def get_author_writer(
    repo: Annotated[AuthorRepository, Depends(get_author_repo)],
    validator: Annotated[Validator, Depends(get_validator)],
    cache: Annotated[ITaggedCache, Depends(get_cache)],
) -> ResourceWriter:
    """Author mutations; invalidates the authors list tag."""
    return ResourceWriter(repo, validator, cache, AUTHORS_CACHE_TAG)


def get_user_writer(
    repo: Annotated[UserRepository, Depends(get_user_repo)],
    validator: Annotated[Validator, Depends(get_validator)],
    cache: Annotated[ITaggedCache, Depends(get_cache)],
) -> ResourceWriter:
    """User mutations; invalidates the users list tag."""
    return ResourceWriter(repo, validator, cache, USERS_CACHE_TAG)


# ---- Authentication / authorization ----


async def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> dict[str, Any]:
    """Return the decoded bearer token claims; raise 401 if missing or invalid."""
    if credentials is None:
        raise AuthenticationException("Missing bearer token")
    try:
        return decode_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException() from e


async def get_current_principal(
    claims: Annotated[dict[str, Any], Depends(get_token_claims)],
) -> Principal:
    return Principal.from_claims(claims)


def require_role(role: str, message: str):
    """Dependency factory: require a valid token whose roles grant role (403 with message otherwise)."""

    async def _require(
        principal: Annotated[Principal, Depends(get_current_principal)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal:
        auth_svc.require_role(principal, role, message)
        return principal

    return _require
