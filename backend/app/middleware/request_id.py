"""
Product Catalog Backend: Request ID Middleware
==============================================

What:  Assigns an ID to each incoming request and adds it to the response.
How:   Accepts the client's X-Request-ID when it is a short token of
       letters, digits, dots, dashes and underscores; anything else is
       replaced by an 8-character UUID prefix. The ID goes into a
       ContextVar and request.state.
Who:   Read by the access logger and by every exception handler, which put
       it in the error body.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up in log lines and JSON error bodies
VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accepted_request_id(header_value: Optional[str]) -> str:
    """The client's request ID if it is well formed, else a fresh one."""
    if header_value and VALID_REQUEST_ID.fullmatch(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with a correlation ID.

    The ID is echoed in the X-Request-ID response header, including on
    error responses produced by the global exception handlers.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accepted_request_id(request.headers.get(REQUEST_ID_HEADER))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid

        return response
