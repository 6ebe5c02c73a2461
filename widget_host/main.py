"""
Cart widget host FastAPI application.

Entry point for the local debug host.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from widget_host.config import settings
from widget_host.routes import widget as widget_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Configures logging on startup. Session state lives in process memory and
    is dropped on shutdown.
    """
    logging.basicConfig(
        level=settings.log_level_number,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Cart widget host started (environment=%s)", settings.ENVIRONMENT)

    yield

    logger.info("Cart widget host stopped")


app = FastAPI(
    title="Cart Widget Host",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(widget_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
