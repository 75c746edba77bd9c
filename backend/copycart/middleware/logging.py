"""
CopyCart Backend — Request Logging Middleware
===============================================

What:  One access-log line per request with status and duration.
How:   Times the downstream call and logs at ERROR for 5xx, WARNING for 4xx,
       INFO otherwise. Bodies are never logged; product copy and chat
       questions stay out of the access log.

Log line:
    POST /ai/chat 200 2345.6ms [a1b2c3d4] from 127.0.0.1
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from copycart.middleware.request_id import request_id_var

logger = logging.getLogger("copycart.access")

SKIPPED_PATHS = frozenset({"/health"})


def access_log_level(status: int) -> int:
    """Access lines for 5xx are errors, 4xx warnings, everything else info."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration, request ID and client IP.

    /health is skipped; probes hit it every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.log(
            access_log_level(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            request.client.host if request.client else "unknown",
        )
        return response
