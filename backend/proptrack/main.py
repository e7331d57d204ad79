"""Property Desk API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PropertyDeskError → {"message": ...} responses
    - CORS configured from settings (not hardcoded)
    - Database manager created on startup, stored on app.state, disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory so tests and scripts build isolated instances
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proptrack.api.error_handlers import register_error_handlers
from proptrack.api.routes import health, properties
from proptrack.config import Settings, get_settings
from proptrack.infrastructure.database import DatabaseSessionManager
from proptrack.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Property Desk API started")
    yield
    logger.info("Property Desk API shutting down")
    await app.state.db_manager.close()
    app.state.db_manager = None


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Property Desk API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(properties.api_router)
    app.include_router(properties.router)

    register_error_handlers(app)
    return app


app = create_app()
