"""
FastAPI application entry point.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

import logging
import traceback
from contextlib import asynccontextmanager

import sentry_sdk
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .core.database import create_goal_store
from .dependencies import SettingsDep, StoreDep
from .exceptions import GoalTrackerError
from .middleware import LoggingMiddleware, SecurityHeadersMiddleware
from .models.error_response import ErrorResponse
from .routes.analytics import router as analytics_router
from .routes.goals import router as goals_router
from .services.goal_store import GoalStore
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


# ============================================================================
# Global Exception Handlers
# ============================================================================


def _error_response(
    request: Request,
    status_code: int,
    body: ErrorResponse,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    settings: Settings = request.app.state.settings
    if settings.LEGACY_ERROR_STATUS:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if not settings.DEBUG:
        body.detail = None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def goal_tracker_error_handler(request: Request, exc: GoalTrackerError) -> JSONResponse:
    """
    Convert application errors into the standard error body.

    5xx errors are logged with a traceback and reported to Sentry; 4xx
    errors are logged at WARNING.
    """
    log_context = {
        "error_code": exc.code,
        "status_code": exc.status_code,
        "detail": exc.detail,
        "path": request.url.path,
        "method": request.method,
    }

    if exc.status_code >= 500:
        logger.error(
            f"GoalTrackerError [500-level]: {exc.code} - {exc.message}",
            exc_info=exc,
            extra=log_context,
        )
        sentry_sdk.capture_exception(exc)
    else:
        logger.warning(f"GoalTrackerError: {exc.code} - {exc.message}", extra=log_context)

    return _error_response(
        request,
        exc.status_code,
        ErrorResponse(error=exc.message, code=exc.code, detail=exc.detail),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Reformat request validation failures as VALIDATION_ERROR responses.
    """
    errors = exc.errors()

    missing = [str(e["loc"][-1]) for e in errors if e.get("type") == "missing"]
    if missing:
        message = f"Missing required field(s): {', '.join(missing)}"
    elif len(errors) == 1:
        field = " -> ".join(str(loc) for loc in errors[0]["loc"])
        message = f"Validation error in field '{field}': {errors[0]['msg']}"
    else:
        message = f"Request validation failed with {len(errors)} error(s)"

    logger.info(f"Validation error: {message}", extra={"path": request.url.path})

    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(error=message, code="VALIDATION_ERROR", detail=str(errors)),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Keep framework-level HTTP errors (unknown route, wrong method) in the
    standard error body.
    """
    return _error_response(
        request,
        exc.status_code,
        ErrorResponse(error=str(exc.detail), code="HTTP_ERROR"),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Safety net for unexpected errors. Never leaks internals to the client.
    """
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={
            "exception_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
            "traceback": "".join(traceback.format_exception(exc)),
        },
    )
    sentry_sdk.capture_exception(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="An internal server error occurred. Please try again later.",
            code="INTERNAL_SERVER_ERROR",
        ).model_dump(exclude_none=True),
    )


# ============================================================================
# Application Lifespan
# ============================================================================


def _init_sentry(settings: Settings) -> None:
    if not settings.SENTRY_DSN.strip():
        logger.warning("Sentry DSN not configured - error tracking disabled")
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        sample_rate=1.0,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        release=settings.APP_VERSION,
    )
    logger.info(
        "Sentry error tracking initialized",
        extra={"environment": settings.ENVIRONMENT, "release": settings.APP_VERSION},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    configure_logging(settings)
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    _init_sentry(settings)

    if app.state.goal_store is None:
        app.state.goal_store = create_goal_store(settings)
    store: GoalStore = app.state.goal_store
    await store.connect()

    yield

    logger.info("Shutting down application...")
    await store.disconnect()
    logger.info("Shutdown complete")


def create_app(settings: Settings | None = None, store: GoalStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (defaults to environment settings)
        store: Goal store to use; when None one is built from settings at startup
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.goal_store = store

    app.add_exception_handler(GoalTrackerError, goal_tracker_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_middleware(SecurityHeadersMiddleware, environment=settings.ENVIRONMENT)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    @app.get("/")
    async def root(settings: SettingsDep) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    @app.get("/health")
    async def health(store: StoreDep):
        """Report whether the goal store answers."""
        if not await store.ping():
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "db": "disconnected"},
            )
        return {"status": "healthy", "db": "connected"}

    app.include_router(goals_router)
    app.include_router(analytics_router)

    app.mount("/metrics", make_asgi_app())

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
