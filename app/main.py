"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (classify, normalize, format)
- Middleware (security headers, request time, dev access log)
- Rate limiting
- Logging configuration
- The tour repository

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.core.config import Settings, settings
from app.infrastructure.tours.tour_repository import SqlTourRepository, build_engine
from app.interfaces.health import router as health_router
from app.interfaces.tours.router import router as tours_router
from app.shared.errors.formatter import DeploymentMode, ErrorResponseFormatter
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import configure_logging
from app.shared.request_context import AccessLogMiddleware, RequestTimeMiddleware
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import build_limiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the tour store, release it on shutdown."""
    app.state.tour_repository.create_schema()
    yield
    app.state.engine.dispose()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and middleware.
    This is the composition root of the application.

    Args:
        app_settings: Settings to build the app from. Defaults to the
            environment-loaded settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level)
    formatter = ErrorResponseFormatter(app_settings.deployment_mode)
    logger.info(
        "Starting %s in %s mode", app_settings.project_name, formatter.mode.value
    )

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # --- Persistence ---
    engine = build_engine(app_settings.database_url)
    app.state.engine = engine
    app.state.tour_repository = SqlTourRepository(engine=engine)

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(app_settings)

    # --- Error Handlers ---
    # Registered first: its catch-all middleware must be the innermost one
    register_error_handlers(app, formatter)

    # --- Middleware ---
    app.add_middleware(RequestTimeMiddleware)
    if formatter.mode is DeploymentMode.DEVELOPMENT:
        app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        SecurityHeadersMiddleware,
        enable_hsts=formatter.mode is DeploymentMode.PRODUCTION,
    )

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(tours_router, prefix="/api/v1")

    return app


app = create_app()
