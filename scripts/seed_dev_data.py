"""Seed dev data: one admin, one regular user and a handful of authors.

Usage:
    python -m scripts.seed_dev_data [admin_password]

If admin_password is omitted, a random one is printed. Existing users (by
email) are left untouched, so the script can be re-run.
Requires: DATABASE_URL. Tables are created if missing.
"""

from __future__ import annotations

import asyncio
import secrets
import sys

from bookapi.core.config import get_settings
from bookapi.core.constants import ROLE_ADMIN, ROLE_USER
from bookapi.infrastructure.persistence import database
from bookapi.infrastructure.persistence.models import Author, User
from bookapi.infrastructure.persistence.repositories import (
    AuthorRepository,
    UserRepository,
)
from bookapi.infrastructure.security.password import PasswordHasher

AUTHORS = [
    ("Victor", "Hugo"),
    ("Albert", "Camus"),
    ("Simone", "de Beauvoir"),
    ("Marguerite", "Yourcenar"),
    (None, "Voltaire"),
]


async def _ensure_user(
    repo: UserRepository,
    hasher: PasswordHasher,
    email: str,
    password: str,
    roles: list[str],
) -> bool:
    if await repo.get_by_email(email) is not None:
        print(f"User exists: {email}")
        return False
    repo.persist(User(email=email, roles=roles, password=hasher.hash(password)))
    print(f"Created user: {email} {roles}")
    return True


async def main() -> None:
    """Create tables, then seed users and authors."""
    admin_password = sys.argv[1] if len(sys.argv) > 1 else secrets.token_urlsafe(12)

    get_settings()
    await database.create_tables()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    hasher = PasswordHasher()
    async with database.AsyncSessionLocal() as session:
        user_repo = UserRepository(session)
        author_repo = AuthorRepository(session)
        created_admin = await _ensure_user(
            user_repo, hasher, "admin@bookapi.local", admin_password, [ROLE_ADMIN]
        )
        await _ensure_user(user_repo, hasher, "user@bookapi.local", "password", [ROLE_USER])
        if not await author_repo.find_all_with_pagination(1, 1):
            for first_name, last_name in AUTHORS:
                author_repo.persist(Author(first_name=first_name, last_name=last_name))
            print(f"Created {len(AUTHORS)} authors")
        await user_repo.flush()

    if created_admin:
        print(f"Admin password: {admin_password}")
    if database.engine is not None:
        await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
