"""
MoodLog Backend — Request ID Middleware
=========================================

What:  Assigns a short correlation id to each request and returns it in the
       X-Request-ID response header.
Why:   Error logs from the exception handlers, the Gemini proxy and the access
       log line of the same request share the id, so a client-reported id
       finds all of them.
How:   Reuses a client-sent X-Request-ID when it looks like an id, otherwise
       generates one; stores it in a ContextVar (coroutine-local) and on
       request.state.

Client-supplied ids are echoed into every log line of the request, so only
short tokens of letters, digits, '.', '_' and '-' are accepted. Anything else
(newlines, very long values) is replaced by a generated id.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_client_id(value: Optional[str]) -> Optional[str]:
    """Return the client's id if it is safe to log, else None."""
    if value and _CLIENT_ID_PATTERN.fullmatch(value):
        return value
    return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request id to the context, request state and response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_client_id(request.headers.get("X-Request-ID")) or new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
