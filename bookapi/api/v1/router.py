"""API v1 router aggregation.

Includes all endpoint modules. All routes use dependencies from
bookapi.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from bookapi.api.v1.endpoints import auth, authors, decode, health, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(decode.router, tags=["auth"])
api_router.include_router(authors.router, prefix="/authors", tags=["authors"])
api_router.include_router(users.router, tags=["users"])
