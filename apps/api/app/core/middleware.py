"""ASGI middleware for the PerfPilot API.

Registered in `create_app()` in this order (outermost first):
  1. CORSMiddleware           (FastAPI built-in)
  2. SlowAPIMiddleware        (rate limiting)
  3. SecurityHeadersMiddleware
  4. RequestContextMiddleware

`RequestContextMiddleware` binds two ContextVars read by the logging
layer: the request ID for every request and, on the analyze endpoints, a
fresh analysis ID. Both are echoed back as response headers so a client
can quote them when reporting a bad result.
"""

import uuid
from contextvars import ContextVar
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

ANALYZE_PATH_PREFIX = "/analyze"
HISTORY_PATH_PREFIX = "/history"

REQUEST_ID_HEADER = "X-Request-ID"
ANALYSIS_ID_HEADER = "X-Analysis-ID"

SECURITY_HEADERS = {
    # Analysis output echoes user-submitted code
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-XSS-Protection": "0",
}

_request_id_var: ContextVar[str] = ContextVar("request_id", default="")
_analysis_id_var: ContextVar[str] = ContextVar("analysis_id", default="")


def get_request_id() -> str:
    """Return the current request's ID, or an empty string outside a request."""
    return _request_id_var.get()


def get_analysis_id() -> str:
    """Return the current analysis ID, or an empty string outside /analyze."""
    return _analysis_id_var.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request and analysis IDs for the duration of a request."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        analysis_id = ""
        if request.url.path.startswith(ANALYZE_PATH_PREFIX):
            analysis_id = str(uuid.uuid4())

        request_token = _request_id_var.set(request_id)
        analysis_token = _analysis_id_var.set(analysis_id)
        try:
            response = await call_next(request)
        finally:
            _analysis_id_var.reset(analysis_token)
            _request_id_var.reset(request_token)

        response.headers[REQUEST_ID_HEADER] = request_id
        if analysis_id:
            response.headers[ANALYSIS_ID_HEADER] = analysis_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add SECURITY_HEADERS to every response without overriding route headers.

    Saved history holds user results, so /history responses are also
    marked `Cache-Control: no-store`.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if request.url.path.startswith(HISTORY_PATH_PREFIX):
            response.headers.setdefault("Cache-Control", "no-store")
        return response
