"""
Product Catalog Backend: Request Logging Middleware
===================================================

What:  One access log line for every catalog request.
How:   Times the request, then logs the route, status, duration, request
       ID and client IP on the `catalog.access` logger.

Log line:
    PUT /products/{id} 200 12.4ms [a1b2c3d4] from 127.0.0.1

Product IDs and stored file names are folded into route labels
(`/products/{id}`, `/uploads/*`) so lines group by endpoint. The raw path
is still attached to the record as `path`.

Served uploads that succeed are logged at DEBUG; a catalog page can pull
many images per view. Request bodies and file contents are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("catalog.access")

PRODUCTS_PATH = "/products"


def route_label(path: str, upload_prefix: str = "/uploads") -> str:
    """Collapse a request path to the endpoint it hits."""
    upload_prefix = upload_prefix.rstrip("/")
    if upload_prefix and path.startswith(upload_prefix + "/"):
        return f"{upload_prefix}/*"

    head, sep, rest = path.partition(PRODUCTS_PATH + "/")
    if not head and sep and rest and "/" not in rest.rstrip("/"):
        return f"{PRODUCTS_PATH}/{{id}}"

    return path


def level_for(status: int, is_upload: bool = False) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if is_upload:
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs route, status and duration of each request.

    Level by status: 5xx → ERROR, 4xx → WARNING, otherwise INFO (DEBUG
    for served uploads). GET /health is not logged.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        settings = getattr(request.app.state, "settings", None)
        upload_prefix = settings.upload_url_prefix if settings is not None else "/uploads"
        route = route_label(path, upload_prefix)

        # request.client is None under some ASGI test transports
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            level_for(status, is_upload=route.endswith("/*")),
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
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
