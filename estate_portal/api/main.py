"""
FastAPI application with assembled routers.

Initializes the FastAPI app with all API routers, error mapping and
observability middleware, and configures the uvicorn server.

Dependencies: fastapi, estate_portal.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from estate_portal.api.deps.dependencies import get_service_cache
from estate_portal.api.routers.router_utils import (
    portal_exception_handler,
    request_validation_handler,
)
from estate_portal.configs import get_settings
from estate_portal.core.exceptions import EstatePortalException
from estate_portal.observability import configure_logging
from estate_portal.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    admin_router,
    auth_router,
    health_router,
    listings_router,
    properties_router,
    reports_router,
    trackers_router,
    users_router,
)

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup warms the service cache; shutdown cancels every live tracker
    and closes outbound clients.
    """
    logger = logging.getLogger("uvicorn")

    # Startup
    cache = get_service_cache()
    _ = cache.registry
    _ = cache.sessions
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    live = len(cache.registry)
    await cache.aclose()
    logger.info(f"Service cache cleared ({live} trackers cancelled)")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Estate Portal API",
        description="Property listings, moderation and AI report tracking",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(EstatePortalException, portal_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(properties_router, prefix="/api/v1")
    app.include_router(trackers_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")
    app.include_router(listings_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    uvicorn.run(
        "estate_portal.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
