"""Request IDs for tying log lines and error responses to one request."""

import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from structlog.contextvars import bind_contextvars, clear_contextvars

CORRELATION_HEADER = "X-Request-ID"


def normalize_request_id(value: str | None) -> str | None:
    """Return ``value`` in canonical UUID form, or None if it is not a UUID.

    The caller's text is never echoed; braces, ``urn:uuid:`` prefixes and
    upper case are rendered back as the lowercase hyphenated form.
    """
    if not value:
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Attach a request ID to every request.

    A valid incoming ``X-Request-ID`` is reused; otherwise a fresh UUID4 is
    generated. The ID is stored on ``request.state``, bound into the structlog
    context for the duration of the request and returned in the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_contextvars()

        request_id = normalize_request_id(
            request.headers.get(CORRELATION_HEADER)
        ) or str(uuid.uuid4())
        bind_contextvars(correlation_id=request_id)
        request.state.correlation_id = request_id

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = request_id
        return response
