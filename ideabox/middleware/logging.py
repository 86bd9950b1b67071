"""
Idea Box API: Access Log Middleware
===================================

Writes one line per request to the "ideabox.access" logger, at a level taken
from the status class (5xx ERROR, 4xx WARNING, else INFO).

Besides the concrete path, the line carries the matched route template, so
`GET /boxes/3/ideas/9` and `GET /boxes/4/ideas/1` aggregate under
`/boxes/{box_id}/ideas/{idea_id}`. Box and idea IDs go into `extra`.

    2026-01-15T12:00:00 [INFO] ideabox.access: POST /boxes 201 3.4ms [a1b2c3d4]
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ideabox.middleware.request_id import request_id_var

logger = logging.getLogger("ideabox.access")

# Probed every few seconds by orchestrators
SKIPPED_PATHS = {"/health"}


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def _route_fields(request: Request) -> Dict[str, Any]:
    # Filled in by the router once the request has been matched
    route = request.scope.get("route")
    fields: Dict[str, Any] = {"route": getattr(route, "path", None)}
    for key in ("box_id", "idea_id"):
        if key in request.path_params:
            fields[key] = request.path_params[key]
    return fields


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the box and idea endpoints."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        extra = {
            "request_id": rid,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "client_ip": request.client.host if request.client else None,
        }
        extra.update(_route_fields(request))

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            extra=extra,
        )
        return response
