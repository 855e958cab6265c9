"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the catalog and builds the visitor registry
  - CORS middleware
  - Global exception handlers (SDK ValueError → 409/400/500, KeyError → 404)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``clinic-booking-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinic_booking.catalog import CatalogStore
from clinic_booking.interfaces import BookingHandoff, LoggingBookingHandoff

from clinic_booking_server.config import ServerSettings, load_settings
from clinic_booking_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from clinic_booking_server.registry import VisitorRegistry
from clinic_booking_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup.

    Startup:
      1. Load the YAML catalog into a ``CatalogStore``
      2. Build the per-visitor ``VisitorRegistry``
      3. Stash them on ``app.state`` for dependency injection
    """
    settings: ServerSettings = app.state.settings

    store = CatalogStore(catalog_dir=settings.catalog_dir)
    store.load()
    logger.info("CatalogStore loaded successfully")

    app.state.store = store
    app.state.registry = VisitorRegistry(
        store,
        handoff=app.state.handoff,
        max_visitors=settings.max_visitors,
    )

    yield

    logger.info("Shutting down with %d tracked visitors", len(app.state.registry))


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(
    settings: ServerSettings | None = None,
    handoff: BookingHandoff | None = None,
) -> FastAPI:
    """Build and return the configured FastAPI application.

    ``handoff`` receives every confirmed booking; defaults to
    :class:`LoggingBookingHandoff`.
    """
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Clinic Booking API Server",
        description="REST API for the dental consultation and appointment booking wizards",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings and hand-off so the lifespan handler can read them
    app.state.settings = settings
    app.state.handoff = handoff or LoggingBookingHandoff()

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies the catalog is loaded."""
        store: CatalogStore | None = getattr(app.state, "store", None)
        if store is None or not store.services:
            return {"status": "error", "detail": "catalog not loaded"}
        return {"status": "ok", "services": len(store.services), "doctors": len(store.doctors)}

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``clinic-booking-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
