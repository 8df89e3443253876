"""Request ID middleware.

Each request gets an ID: the client's X-Request-ID when it is a safe token,
otherwise a fresh UUID. The ID is echoed on the response, stored in
scope["state"] and exposed to log records through request_id_ctx.
Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from contextvars import ContextVar
from typing import Callable

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(rf"^[A-Za-z0-9_-]{{1,{REQUEST_ID_MAX_LENGTH}}}$")

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def sanitize_request_id(raw: str | None) -> str:
    """Return raw (stripped) if it is a safe token, else a new UUID."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.match(candidate):
        return candidate
    return str(uuid.uuid4())


def _header_value(headers: list[tuple[bytes, bytes]], name: bytes) -> str | None:
    for key, value in headers:
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app so every HTTP request and response carries a request ID."""
    raw_name = header_name.lower().encode("latin-1")

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(_header_value(scope.get("headers", []), raw_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_ctx.set(request_id)

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (raw_name, request_id.encode("latin-1")),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_request_id)
        finally:
            request_id_ctx.reset(token)

    return asgi_app
