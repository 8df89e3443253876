"""HTTP middleware. Applied in bookapi.main."""

from bookapi.middleware.request_id import RequestIDMiddleware, request_id_ctx

__all__ = ["RequestIDMiddleware", "request_id_ctx"]
