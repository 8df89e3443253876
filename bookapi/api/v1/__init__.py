"""API version 1."""

from bookapi.api.v1.router import api_router

__all__ = ["api_router"]
