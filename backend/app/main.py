"""
FastAPI application entry point.

Uses structured logging from core.logging module.
Includes configuration validation and security headers.
"""

import time

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers

from core.cache import cache
from core.db import db
from core.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .middleware.security import SecurityHeadersMiddleware
from .routers import initialize as initialize_router
from .routers import profiles as profiles_router
from .routers import skill_categories as skill_categories_router
from .routers import skills as skills_router


class RequestSizeLimitMiddleware:
    """
    ASGI middleware that caps request body size.

    A declared Content-Length over the cap is rejected before the app runs.
    Bodies without one (chunked uploads) are counted as they are received,
    and reading past the cap raises a 413 HTTPException.
    """

    def __init__(self, app, max_size_mb: int = 1):
        self.app = app
        self.max_size = max_size_mb * 1024 * 1024
        self.max_size_mb = max_size_mb

    @property
    def error_message(self) -> str:
        return f"Request too large. Maximum request size is {self.max_size_mb}MB"

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            response = JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"success": False, "error": self.error_message},
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_size:
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=self.error_message,
                    )
            return message

        await self.app(scope, limited_receive, send)


# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = get_logger("api")


def validate_config_on_startup() -> None:
    """
    Log configuration problems; errors are fatal in production.

    Raises:
        RuntimeError: Configuration errors while ENV=production
    """
    errors, warnings = settings.validate_production_config()
    for warning in warnings:
        logger.warning("config_warning", message=warning)
    for error in errors:
        logger.error("config_error", message=error)

    if errors and settings.is_production:
        raise RuntimeError("Invalid production configuration: " + "; ".join(errors))
    logger.info("config_validation_complete", errors=len(errors), warnings=len(warnings))


def check_database_health(max_retries: int = 3, retry_delay: float = 2.0) -> bool:
    """
    Check database connectivity with retry logic.

    Args:
        max_retries: Maximum number of connection attempts
        retry_delay: Seconds to wait between retries

    Returns:
        True if database is reachable

    Raises:
        RuntimeError: If database is unreachable after all retries
    """
    for attempt in range(max_retries):
        result = db.health_check()
        if result["healthy"]:
            logger.info("database_health_check_passed", attempt=attempt + 1, latency_ms=result["latency_ms"])
            return True

        logger.warning(
            "database_health_check_failed",
            attempt=attempt + 1,
            max_retries=max_retries,
            error=result["error"],
        )
        if attempt < max_retries - 1:
            time.sleep(retry_delay * (attempt + 1))  # Linear backoff

    raise RuntimeError(
        f"Database unreachable after {max_retries} attempts. "
        "Check DATABASE_URL configuration and database server status."
    )


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    # Request size limit middleware (configurable via MAX_REQUEST_SIZE_MB)
    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=settings.max_request_size_mb)

    app.add_middleware(SecurityHeadersMiddleware)

    # GZip compression for responses > 500 bytes
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # CORS middleware - restricted to the methods and headers the API uses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Request ID middleware, added last so it wraps everything else
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        logger.info("app_startup", app_name=settings.app_name, env=settings.env)

        validate_config_on_startup()

        # Initialize database
        db.initialize(settings.database_url)

        # Verify database connectivity with retry
        check_database_health(max_retries=3, retry_delay=2.0)

        # Production schemas are managed by Alembic
        if not settings.is_production:
            db.create_all_tables()
            logger.info("database_tables_ensured")

        # Initialize cache
        cache.initialize()
        if cache.is_available:
            logger.info("cache_initialized", redis_host=settings.redis_host)
        else:
            logger.warning("cache_unavailable")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown."""
        logger.info("app_shutdown")
        db.reset()

    @app.get("/health", tags=["health"])
    def health_check():
        """
        Liveness check endpoint.

        Returns minimal information to avoid exposing infrastructure details.
        Use /health/ready for readiness checks.
        """
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        Returns 200 if the database answers, 503 otherwise. The cache is
        optional and reported but never makes the service unready.
        """
        checks = {
            "database": db.health_check()["healthy"],
            "cache": cache.is_available,
        }

        if not checks["database"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )

        return {"status": "ready", "checks": checks}

    # Register routers under the API prefix (/api/*)
    api_prefix = settings.api_prefix
    app.include_router(profiles_router.router, prefix=api_prefix)
    app.include_router(skills_router.router, prefix=api_prefix)
    app.include_router(skill_categories_router.router, prefix=api_prefix)
    app.include_router(initialize_router.router, prefix=api_prefix)

    return app


app = create_app()
