"""
FlyBook Backend: Access Log Middleware
========================================

What:  One log line per API call on the "flybook.access" logger.
How:   Times the downstream call and logs the matched route template
       (/flights/{flight_id}, not the concrete id) with the status and
       duration. The request ID comes from RequestIDLogFilter.

Query strings and bodies are never logged; GET /health is skipped.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("flybook.access")

UNLOGGED_PATHS = frozenset({"/health"})


def route_label(request: Request) -> str:
    """The route template that served the request, or the raw path if none matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log: 5xx at ERROR, 4xx at WARNING, the rest at INFO."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d (%.1fms)",
            request.method,
            route_label(request),
            response.status_code,
            duration_ms,
        )
        return response
