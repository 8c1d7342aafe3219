"""
POI Claim - FastAPI application entry point.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from poiclaim import __version__
from poiclaim.config import settings
from poiclaim.services import build_services

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[
    f"{settings.rate_limit_requests}/{settings.rate_limit_window_seconds}seconds"
])


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID", f"req_{int(start_time * 1000)}")

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            f"{request.method} {request.url.path} [{request_id}] "
            f"status={response.status_code} time={process_time:.3f}s"
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build services and run the expiry sweeper for the app's lifetime."""
    logger.info("Starting POI claim service...")

    services = build_services(settings)
    app.state.services = services
    services.sweeper.start()

    logger.info(
        f"POI claim service started with {len(services.catalog)} POIs "
        f"(channel: {services.channel.channel_name}, "
        f"proximity: {'on' if services.interpreter.proximity else 'off'})"
    )

    yield

    logger.info("Shutting down POI claim service...")
    await services.close()
    logger.info("POI claim service shutdown complete")


app = FastAPI(
    title="POI Claim",
    description="Claim arbitration for DayZ points of interest via in-game chat",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    openapi_url="/openapi.json" if not settings.is_production else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Request logging middleware
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "message": "Too many requests. Please try again later.",
            "retry_after": exc.detail,
        },
        headers={"Retry-After": str(exc.detail)},
    )


@app.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """
    Health check endpoint.

    Reports active claims and whether the expiry sweeper is running.
    """
    services = getattr(request.app.state, "services", None)
    health_status: dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }

    if services is None:
        health_status["status"] = "starting"
        return health_status

    health_status["active_claims"] = len(services.registry)
    health_status["sweeper_running"] = services.sweeper.running
    if not services.sweeper.running:
        health_status["status"] = "degraded"

    return health_status


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "name": "POI Claim",
        "description": "Claim arbitration for DayZ points of interest",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.exception(f"Unhandled exception: {exc}")

    if settings.is_production:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred.",
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc),
            "type": type(exc).__name__,
        },
    )


# Import and include routers
from poiclaim.api.routes import claims_router, webhook_router

app.include_router(webhook_router)
app.include_router(claims_router, prefix="/api/v1")


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
