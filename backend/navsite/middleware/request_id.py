"""
Request ID middleware for correlation tracking.

Every request gets a correlation ID:
- Reads X-Request-ID header from client (if provided)
- Generates UUID if header is missing
- Stores in request.state for access by other middleware/routes
- Echoes it in the response headers
"""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add request ID correlation to all requests.

    Example:
        app.add_middleware(RequestIDMiddleware)

    Usage in routes:
        @app.get("/example")
        async def example(request: Request):
            logger.info("Processing", extra={"request_id": request.state.request_id})
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        return response
