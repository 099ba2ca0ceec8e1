"""ASGI middleware for the stackprobe API.

Two middlewares registered in order (outermost → innermost):
  1. RequestIdMiddleware: injects or forwards X-Request-ID and stores it in a ContextVar
  2. SecurityHeadersMiddleware: adds API security response headers

The ContextVar `_request_id_var` is the single source of truth for the
current request ID. The logging layer reads it so every log line emitted
while a detection runs carries the ID of the request that triggered it.
"""

import uuid
from contextvars import ContextVar
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Swagger UI and ReDoc load scripts from a CDN.
_INTERACTIVE_DOCS = ("/docs", "/redoc")


def get_request_id() -> str:
    """Return the current request's ID, or an empty string outside a request."""
    return _request_id_var.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Read or generate X-Request-ID and make it available for the request lifetime.

    A client-supplied ID is reused; otherwise a fresh UUID4 is generated.
    The ID is always echoed back in the response header.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        token = _request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            _request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach security headers suited to a JSON-only API.

    Responses are never rendered as pages, so the policy forbids every
    subresource and framing, and detection results are not cached by
    intermediaries.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        if not request.url.path.startswith(_INTERACTIVE_DOCS):
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cache-Control"] = "no-store"
        return response
