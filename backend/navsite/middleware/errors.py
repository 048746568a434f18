"""
Catch-all error middleware.

Turns any exception that escaped the route and the application exception
handlers into ``{"error": "Internal Server Error"}`` with status 500.
Registered innermost, so the response still passes back out through the
request ID and CORS middleware.
"""

from typing import Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from navsite.core.exceptions import GENERIC_ERROR_MESSAGE
from navsite.core.logging_config import get_logger


logger = get_logger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Last resort error handler. Internals never reach the client.

    Example:
        app.add_middleware(UnhandledErrorMiddleware)  # register first
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled exception",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "request_id": getattr(request.state, "request_id", None),
                    "exception_type": type(exc).__name__,
                },
                exc_info=exc,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": GENERIC_ERROR_MESSAGE},
            )
