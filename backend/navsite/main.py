"""
Navigation Site API - FastAPI Application Entry Point

This module initializes the FastAPI application with middleware,
exception handlers, routes, and lifecycle event handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from navsite import __version__
from navsite.api import auth, categories, health, projects
from navsite.core.config import settings
from navsite.core.database import close_db, init_db
from navsite.core.exceptions import GENERIC_ERROR_MESSAGE, NavSiteError, StorageFault
from navsite.core.logging_config import get_logger, setup_logging
from navsite.middleware.errors import UnhandledErrorMiddleware
from navsite.middleware.logging import LoggingMiddleware
from navsite.middleware.request_id import RequestIDMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up logging
        - Create the key-value table

    Shutdown:
        - Dispose of database connections
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    await init_db()
    logger.info("Application started", extra={"version": __version__})

    yield

    await close_db()


app = FastAPI(
    title=settings.project_name,
    version=__version__,
    description="Bookmark navigation site backend with single-admin authentication",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Exception handlers
@app.exception_handler(NavSiteError)
async def navsite_error_handler(request: Request, exc: NavSiteError) -> JSONResponse:
    """Convert application errors into ``{"error": message}`` responses."""
    if isinstance(exc, StorageFault):
        logger.error(
            f"Storage fault: {exc.message}",
            extra={
                "path": request.url.path,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": GENERIC_ERROR_MESSAGE},
        )

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors: 400 instead of 422."""
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {detail}"},
    )


# Configure middleware
# Note: Middleware is executed in reverse order of registration
# (last registered = first executed)

# Catch-all for unexpected errors (innermost, so CORS still applies)
app.add_middleware(UnhandledErrorMiddleware)

# Logging middleware (runs after RequestID to access request_id)
app.add_middleware(LoggingMiddleware)

# Request ID middleware (sets correlation ID)
app.add_middleware(RequestIDMiddleware)

# CORS middleware (outermost: answers preflight requests without routing)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)


app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
app.include_router(projects.router, prefix=settings.api_prefix, tags=["projects"])
app.include_router(categories.router, prefix=settings.api_prefix, tags=["categories"])


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns basic API information.
    """
    return {
        "message": settings.project_name,
        "version": __version__,
        "docs": "/docs",
    }
