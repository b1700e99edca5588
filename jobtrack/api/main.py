"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, jobtrack.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from jobtrack.configs import get_settings
from jobtrack.observability.logger import configure_logging
from jobtrack.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import health_router, jobs_router, services_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup", extra={"environment": settings.environment})

    yield

    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="jobtrack",
        description="Job progress tracking over an append-only event log",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(jobs_router, prefix="/api/v1")
    app.include_router(services_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "jobtrack.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
