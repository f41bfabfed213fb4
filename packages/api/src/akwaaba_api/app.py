"""
FastAPI application factory.

Run with:
    uvicorn akwaaba_api.app:app --reload --port 8000
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from akwaaba_shared.config import settings
from akwaaba_shared.logging import configure_logging

from akwaaba_api import __version__
from akwaaba_api.errors import install_exception_handlers
from akwaaba_api.middleware.logging import LoggingMiddleware
from akwaaba_api.middleware.rate_limit import RateLimitMiddleware
from akwaaba_api.middleware.security_headers import SecurityHeadersMiddleware
from akwaaba_api.routers.api import api_router
from akwaaba_api.routers.health import router as health_router

logger = structlog.get_logger()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Akwaaba Homes API",
        description="Property listings, agent verification and moderation for Akwaaba Homes",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Custom middleware (order matters: last added = first executed)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(LoggingMiddleware)

    install_exception_handlers(app)

    # Routers
    app.include_router(health_router)
    app.include_router(api_router)

    logger.info("app_created", cors_origins=settings.cors_origins_list)
    return app


app = create_app()
