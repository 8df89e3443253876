"""Pytest configuration and fixtures for bookapi.

HTTP tests run against create_app() with the repository and password hasher
dependencies overridden: repositories are in-memory fakes that record every
store call, and each test gets a fresh InMemoryTaggedCache. No database or
Redis is needed.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("CACHE_BACKEND", "memory")

from collections.abc import AsyncIterator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from bookapi.api.v1.dependencies import (  # noqa: E402
    get_author_repo,
    get_password_hasher,
    get_user_repo,
)
from bookapi.core.config import get_settings  # noqa: E402
from bookapi.core.constants import ROLE_ADMIN, ROLE_USER  # noqa: E402
from bookapi.infrastructure.cache import InMemoryTaggedCache  # noqa: E402
from bookapi.infrastructure.persistence.models import User  # noqa: E402
from bookapi.infrastructure.security.jwt import create_access_token  # noqa: E402
from bookapi.infrastructure.security.password import PasswordHasher  # noqa: E402
from bookapi.main import create_app  # noqa: E402

# Lowest bcrypt cost: keeps hashing fast in tests.
_TEST_HASHER = PasswordHasher(rounds=4)


class FakeRepository:
    """In-memory store double. calls records every store interaction in order."""

    def __init__(self) -> None:
        self.items: dict[int, Any] = {}
        self.calls: list[tuple[Any, ...]] = []
        self._staged: list[Any] = []
        self._removed: list[Any] = []
        self._next_id = 1

    def seed(self, obj: Any) -> Any:
        """Insert obj directly (not recorded as a call); assigns an id if missing."""
        if obj.id is None:
            obj.id = self._next_id
        self._next_id = max(self._next_id, obj.id + 1)
        self.items[obj.id] = obj
        return obj

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    async def find_all_with_pagination(self, page: int, limit: int) -> list[Any]:
        self.calls.append(("find_all_with_pagination", page, limit))
        ordered = [self.items[k] for k in sorted(self.items)]
        start = (page - 1) * limit
        return ordered[start : start + limit]

    async def get_by_id(self, entity_id: int) -> Any | None:
        self.calls.append(("get_by_id", entity_id))
        return self.items.get(entity_id)

    def persist(self, obj: Any) -> None:
        self.calls.append(("persist", obj))
        self._staged.append(obj)

    async def remove(self, obj: Any) -> None:
        self.calls.append(("remove", obj))
        self._removed.append(obj)

    async def flush(self) -> None:
        self.calls.append(("flush",))
        for obj in self._staged:
            self.seed(obj)
        for obj in self._removed:
            self.items.pop(obj.id, None)
        self._staged.clear()
        self._removed.clear()


class FakeUserRepository(FakeRepository):
    async def get_by_email(self, email: str) -> User | None:
        self.calls.append(("get_by_email", email))
        return next((u for u in self.items.values() if u.email == email), None)


def bearer(username: str, roles: list[str], sub: str = "1") -> dict[str, str]:
    """Authorization header for a token with the given identity."""
    token = create_access_token({"sub": sub, "username": username, "roles": roles})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def cache() -> InMemoryTaggedCache:
    return InMemoryTaggedCache()


@pytest.fixture
def author_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def app(
    cache: InMemoryTaggedCache,
    author_repo: FakeRepository,
    user_repo: FakeUserRepository,
) -> FastAPI:
    """Application wired to the fake repositories and the per-test cache."""
    get_settings.cache_clear()
    application = create_app()
    application.state.cache = cache
    application.dependency_overrides[get_author_repo] = lambda: author_repo
    application.dependency_overrides[get_user_repo] = lambda: user_repo
    application.dependency_overrides[get_password_hasher] = lambda: _TEST_HASHER
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def hasher() -> PasswordHasher:
    return _TEST_HASHER


@pytest.fixture
def token_headers():
    """Factory: Authorization header for (username, roles, sub)."""
    return bearer


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer("admin@example.com", [ROLE_ADMIN])


@pytest.fixture
def user_headers() -> dict[str, str]:
    return bearer("user@example.com", [ROLE_USER], sub="2")
