"""
Custom middleware.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .utils.metrics import REQUEST_COUNTER, REQUEST_LATENCY

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging with structured JSON logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        method = request.method
        # Use the route template so goal ids do not explode label cardinality
        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)

        logger.info(
            "HTTP request processed",
            extra={
                "method": method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time_ms": round(duration * 1000, 2),
            },
        )

        REQUEST_COUNTER.labels(method=method, path=path).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration)

        response.headers["X-Process-Time"] = str(duration)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers."""

    def __init__(self, app: ASGIApp, environment: str = "development") -> None:
        super().__init__(app)
        self.environment = environment

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if self.environment == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
