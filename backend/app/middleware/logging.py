"""
MoodLog Backend — Request Logging Middleware
==============================================

What:  One access log line per request: method, route, status, duration,
       request id and client IP.
When:  Runs inside RequestIDMiddleware so the request id is already set.

Privacy:
    Request bodies are never logged. They carry passwords (/register, /login)
    and journal text (/jlog). Query strings are not logged either.

    The path is logged as its route template (/mood/{user_id},
    /jentry/{entry_id}), never as the concrete URL, so user ids and journal
    entry ids stay out of the access log. Requests that match no route are
    logged as "<unmatched>".
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("moodlog.access")

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """Path template of the route that served `request` (set by the router)."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request at a level chosen by its status:
        5xx → ERROR, 4xx → WARNING, otherwise INFO.
    /health is skipped (probes run every few seconds).
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        route = route_template(request)
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
