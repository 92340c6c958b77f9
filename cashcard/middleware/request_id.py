"""
Cash Card Service — Request ID Middleware
===========================================

What:  Tags each request with a correlation ID and echoes it in the response.
How:   Reuses the caller's X-Request-ID header when present, otherwise
       generates a short UUID. The ID is stored in a ContextVar (for loggers
       and exception handlers) and on request.state (for handlers).

A caller reporting a failed card operation can quote the X-Request-ID from
the response, which matches every server log line for that request.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# ContextVar: coroutine-local, so concurrent requests never see each other's ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """First 8 hex chars of a UUID4; short enough to read in logs."""
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns X-Request-ID to every request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
