"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory
   - create_app() returns a configured app
   - Tests pass their own Settings and Database

2. Lifespan Events
   - startup: create tables when AUTO_CREATE_TABLES is set
   - shutdown: dispose the database engine

3. Error Format
   - Every failure is rendered as {"error": "<message>"}
   - Internal details are logged, never returned
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookreviews import __version__
from bookreviews.config import Settings, get_settings
from bookreviews.database import Database
from bookreviews.exceptions import BookReviewsError, InternalError
from bookreviews.routers import auth_router, books_router, reviews_router, search_router
from bookreviews.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    """Turn the first validation problem into a one-line message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    ctx = first.get("ctx") or {}
    if first.get("type") == "value_error" and "error" in ctx:
        # Messages raised by our own validators are already user-facing
        return str(ctx["error"])

    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if not loc:
        if first.get("type") == "missing":
            return "Request body is required"
        return first.get("msg", "Invalid request")
    return f"{loc[-1]}: {first.get('msg', 'invalid value')}"


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    # ----- STARTUP -----
    logger.info(f"Starting {app_settings.app_name}...")
    logger.info(f"Environment: {app_settings.environment}, database: {database!r}")

    if app_settings.auto_create_tables:
        database.create_tables()
        logger.info("Database tables ensured")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {app_settings.app_name}...")
    database.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the cached environment settings
        database: Store handle; built from settings when not given

    ``settings`` is stored on ``app.state`` and read per request for the
    token signing key and lifetime, the duplicate-book policy, CORS, the
    API prefix and the health report. Rate-limit tiers and the limiter's
    enabled flag are bound when the route decorators run at import, and
    logging is configured at import, so those always follow the
    environment settings.

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    database = database or Database.from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Reviews API

Users sign up, add books, and post one review per book.

### Features
- **Books**: Add, list (filter by author/genre) and view books with their reviews
- **Reviews**: Create, update and delete your own reviews
- **Search**: Find books by title or author, best rated first

### Authentication
Send `Authorization: Bearer <token>` using the token returned by
`/signup` or `/login`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookReviewsError)
    async def app_error_handler(request: Request, exc: BookReviewsError) -> JSONResponse:
        """Render service errors with their own status and message."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed or incomplete input is a 400, not FastAPI's default 422."""
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Routing errors (unknown path, wrong method) in the same error format."""
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error while hiding details from users.
        """
        logger.error(f"Database error: {exc}", exc_info=True)
        error = InternalError()
        return _error(error.status_code, error.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all: details go to the log, never to the client."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        error = InternalError()
        return _error(error.status_code, error.message)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    api_prefix = settings.api_prefix

    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(books_router, prefix=api_prefix)
    app.include_router(reviews_router, prefix=api_prefix)
    app.include_router(search_router, prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the database is reachable.",
    )
    def health_check(request: Request) -> dict:
        """
        Health check endpoint for load balancers and monitoring.

        The status is "degraded" when the database does not answer.
        """
        database_ok = request.app.state.database.ping()
        return {
            "status": "healthy" if database_ok else "degraded",
            "app": settings.app_name,
            "version": settings.api_version,
            "database": "connected" if database_ok else "unavailable",
            "rateLimiting": {
                "enabled": settings.rate_limit_enabled,
                "defaultLimit": settings.rate_limit_default,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookreviews.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookreviews.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookreviews.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
