"""
Smart Tourism Backend — Request ID Middleware
===============================================

What:  Tags every request with a short correlation ID and echoes it back.
How:   Reuses the client's X-Request-ID header when it looks like an ID
       (1-64 letters, digits, '-' or '_'), otherwise generates one. The ID is
       stored in a ContextVar for the loggers and exception handlers, and on
       request.state for route handlers. The ContextVar is reset once the
       response is produced.
When:  Outermost application middleware (runs before logging).

A client-supplied ID ends up in log lines and a response header, so
anything with spaces, newlines or unbounded length is replaced.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: str) -> str:
    """The client's ID when well-formed, else a fresh 8-character hex ID."""
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
