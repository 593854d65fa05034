"""
RecipeShare Backend - Access Log Middleware
===========================================

What:  One access line per API request on the "recipeshare.access" logger.
How:   Timed around call_next; the record level follows the status code.
       The health endpoints are polled by the frontend and are not logged.

Record fields (also passed as `extra`, so formatters can pick them up):
    method       HTTP verb
    path         the concrete URL path, e.g. /api/recipe/3
    route        the matched route template, e.g. /api/recipe/{recipe_id};
                 the raw path when nothing matched (404s)
    status       response status code
    duration_ms  wall time inside the app, rounded to 0.01 ms
    request_id   X-Request-ID of the request
    client_ip    peer address, "unknown" under test transports

Query strings and bodies are never logged, so column lists, cuisine filters
and recipe or user payloads stay out of the logs.

Example line:
    GET /api/recipe/3 (/api/recipe/{recipe_id}) -> 404 in 4.2ms rid=9f2c... ip=127.0.0.1
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from recipeshare.middleware.request_id import request_id_var

logger = logging.getLogger("recipeshare.access")

QUIET_PATHS = frozenset({"/api/check-db-connection", "/api/test"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        # The router stores the matched route on the shared scope
        route = getattr(request.scope.get("route"), "path", path)
        fields = {
            "method": request.method,
            "path": path,
            "route": route,
            "status": response.status_code,
            "duration_ms": duration_ms,
            "request_id": request_id_var.get("") or getattr(request.state, "request_id", ""),
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(fields["status"]),
            "%(method)s %(path)s (%(route)s) -> %(status)d in %(duration_ms).1fms "
            "rid=%(request_id)s ip=%(client_ip)s",
            fields,
            extra=fields,
        )
        return response
