"""
Cash Card Service — Request Logging Middleware
================================================

What:  One access-log line per HTTP request.
How:   Measures the time spent in the rest of the stack, then logs method,
       path, status, duration, request ID, client IP and the authenticated
       username (or "-" when the request never authenticated).

Log line:
    GET /cashcards 200 3.2ms [a1b2c3d4] user=Bob from 127.0.0.1

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Never logged: request bodies, the Authorization header, passwords.
/health is skipped; probes hit it every few seconds.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cashcard.middleware.request_id import request_id_var

logger = logging.getLogger("cashcard.access")

SKIPPED_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured access log for every request except health probes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        # set by get_current_principal once credentials check out
        username = getattr(request.state, "username", None) or "-"

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            username,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "username": username,
                "client_ip": client_ip,
            },
        )

        return response
