"""FastAPI dependency injection — provides the store and per-visitor orchestrator."""

from fastapi import Depends, Header, HTTPException, Request

from clinic_booking.catalog import CatalogStore
from clinic_booking.orchestrator import BookingOrchestrator

from clinic_booking_server.registry import VisitorRegistry


def get_store(request: Request) -> CatalogStore:
    """Return the CatalogStore singleton from ``app.state``."""
    return request.app.state.store


def get_registry(request: Request) -> VisitorRegistry:
    """Return the VisitorRegistry singleton from ``app.state``."""
    return request.app.state.registry


async def get_visitor_id(
    x_visitor_id: str | None = Header(None, alias="X-Visitor-ID"),
) -> str:
    """Extract the visitor identity from the ``X-Visitor-ID`` header.

    Returns 401 if the header is missing, since wizard state is per visitor.
    """
    if not x_visitor_id:
        raise HTTPException(status_code=401, detail="X-Visitor-ID header is required")
    return x_visitor_id


async def get_orchestrator(
    visitor_id: str = Depends(get_visitor_id),
    registry: VisitorRegistry = Depends(get_registry),
) -> BookingOrchestrator:
    """Return the calling visitor's orchestrator."""
    return registry.get(visitor_id)
