"""
Middleware for request ID tracking.

Every request gets an ID that is attached to all log records emitted while
the request is handled and echoed back to the client.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

# Context variable for storing request ID per request
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


class CorrelationIDMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    """
    Middleware to add request IDs to requests.

    This middleware:
    - Reuses the inbound X-Request-ID header or generates a new UUID hex
    - Truncates inbound IDs to MAX_REQUEST_ID_LENGTH characters
    - Stores the ID in request.state.request_id and in a context variable
    - Adds the ID to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process request and add request ID.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            Response with X-Request-ID header added.
        """
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        rid = rid[:MAX_REQUEST_ID_LENGTH]

        request.state.request_id = rid
        token = correlation_id.set(rid)
        try:
            response = await call_next(request)
        finally:
            correlation_id.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response


def get_correlation_id() -> str:
    """
    Get the request ID for the current request context.

    Returns:
        The request ID string, or empty string if not set.
    """
    return correlation_id.get()
