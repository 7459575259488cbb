"""FastAPI application for the Brand Site API."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from brandsite.core.config import settings
from brandsite.core.init_db import create_tables
from brandsite.core.logging import logger
from brandsite.core.middleware import (
    CorrelationIdMiddleware,
    CorsHeadersMiddleware,
    RequestLoggingMiddleware,
)

# Import routers
from brandsite.modules.config.routes import router as config_router
from brandsite.modules.users.routes import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    # Startup
    logger.info("Starting Brand Site API...")
    await create_tables()
    logger.info("Database tables created/verified")

    yield

    # Shutdown
    logger.info("Shutting down Brand Site API...")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PLATFORM_VERSION,
    description="Brand, project and page configuration plus per-user settings",
    lifespan=lifespan,
)

# Add custom middleware (order matters - first added = last executed)
# Fixed CORS headers and uniform OPTIONS handling
app.add_middleware(CorsHeadersMiddleware)
# Request logging (logs to stdout)
app.add_middleware(RequestLoggingMiddleware)
# Correlation ID (must be first to generate ID for other middleware)
app.add_middleware(CorrelationIdMiddleware)

# Include routers
# Tiers are enforced per route: public reads, require_user, require_admin
app.include_router(config_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)

# Prometheus metrics instrumentation
if settings.MONITORING_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"error": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a 400."""
    logger.warning("Invalid request body", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "message": str(exc.errors()[:1])},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled error: {exc}", path=request.url.path, method=request.method)

    # Raised past the middleware stack, so the CORS headers are added here
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
        headers=settings.cors_headers,
    )


def run():
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("brandsite.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
