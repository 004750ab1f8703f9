"""
Middleware for request access logging and structured log context.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from quotes_api.logging import clear_log_context, logger, set_log_context
from quotes_api.settings import app_settings


class LoggingContextMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    """
    Middleware to inject contextual fields into structured logs.

    This middleware:
    - Adds endpoint and method to log context
    - Emits one access log line per request with status and duration
    - Skips the access line for LOG_EXCLUDED_PATHS
    - Clears log context after request completes
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process request and inject logging context.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            Response from the endpoint.
        """
        path = request.url.path
        set_log_context(endpoint=path, method=request.method)
        started = time.perf_counter()

        try:
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - started) * 1000, 2)

            if path not in app_settings.LOG_EXCLUDED_PATHS:
                logger.info(
                    f"{request.method} {path} {response.status_code} {duration_ms}ms",
                    extra={
                        "status_code": response.status_code,
                        "duration_ms": duration_ms,
                    },
                )
            return response
        finally:
            clear_log_context()
