"""FastAPI application entry point — wires everything together.

Usage:
    python -m hub.main

The database engine, session factory and service container are created in
the lifespan and hung on ``app.state``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from hub.api import api_router, register_error_handlers
from hub.config import Settings, settings
from hub.db.engine import db_lifespan
from hub.services.container import HubServices

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)

# ── FastAPI lifespan ─────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle."""
    app_settings: Settings = app.state.settings
    logger.info("Starting hub (env=%s)", app_settings.environment)

    async with db_lifespan(app_settings) as (engine, session_factory):
        app.state.engine = engine
        app.state.session_factory = session_factory
        app.state.services = HubServices.from_settings(app_settings)
        logger.info("Database initialized")
        try:
            yield
        finally:
            logger.info("Shutting down hub...")

    logger.info("Hub shutdown complete")


# ── FastAPI app ──────────────────────────────────────────────────────


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(
        title="Hub API",
        description="Quotes, contacts, organisations, leads and websites",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "environment": app_settings.environment}

    return app


app = create_app()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "hub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
