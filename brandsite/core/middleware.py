"""Middleware for correlation IDs, request logging and CORS."""
import json
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Correlation ID Middleware
# =============================================================================

CORRELATION_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle correlation IDs for request tracing.

    - Extracts X-Request-ID from incoming requests
    - Generates a new ID if not present
    - Adds the ID to response headers
    - Makes the ID available in request state
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER)
        if not correlation_id:
            correlation_id = str(uuid.uuid4())

        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response


def get_correlation_id(request: Request) -> str:
    """Get correlation ID from request state."""
    return getattr(request.state, "correlation_id", str(uuid.uuid4()))


# =============================================================================
# CORS Middleware
# =============================================================================


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """
    Stamp the fixed CORS headers on every response.

    OPTIONS is answered uniformly with ``200 {}`` for any path, whether or
    not the request carries preflight headers, so it never reaches routing.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            response = Response(
                content=json.dumps({}),
                status_code=200,
                media_type="application/json",
            )
        else:
            response = await call_next(request)

        response.headers.update(settings.cors_headers)
        return response


# =============================================================================
# Request Logging Middleware
# =============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all requests with correlation IDs and timing.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        correlation_id = getattr(request.state, "correlation_id", "unknown")

        logger.info(
            f"Handling {request.method} {request.url.path}",
            correlation_id=correlation_id,
            client_ip=request.client.host if request.client else "unknown",
        )

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            "Request completed",
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        return response
