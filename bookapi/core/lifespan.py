"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring of infrastructure (cache
connection, optional table creation, DB engine dispose).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bookapi.core.config import get_settings
from bookapi.infrastructure.cache import RedisTaggedCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: Redis connect (redis backend), table creation (when enabled).
    Shutdown: Redis disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    cache = getattr(app.state, "cache", None)
    if isinstance(cache, RedisTaggedCache):
        await cache.connect()

    if settings.database_create_tables:
        from bookapi.infrastructure.persistence.database import create_tables

        await create_tables()

    yield

    # ---- Shutdown ----
    if isinstance(cache, RedisTaggedCache):
        await cache.disconnect()
        logger.info("Cache disconnected")

    from bookapi.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
