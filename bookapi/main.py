"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, middleware, the shared
response cache and routers. See bookapi.core.lifespan and
bookapi.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookapi.api.v1 import api_router
from bookapi.core.config import get_settings
from bookapi.core.exception_handlers import register_exception_handlers
from bookapi.core.lifespan import create_lifespan
from bookapi.infrastructure.cache import create_cache
from bookapi.middleware import RequestIDMiddleware
from bookapi.shared.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    # One cache per process, shared by every request.
    app.state.cache = create_cache(settings)

    register_exception_handlers(app)

    # Middleware: first added = innermost. Request ID wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
