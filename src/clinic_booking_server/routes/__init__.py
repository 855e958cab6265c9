"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from clinic_booking_server.routes.appointment import router as appointment_router
from clinic_booking_server.routes.consultation import router as consultation_router
from clinic_booking_server.routes.overlay import router as overlay_router
from clinic_booking_server.routes.reference import router as reference_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(consultation_router, prefix=API_PREFIX)
    app.include_router(appointment_router, prefix=API_PREFIX)
    app.include_router(overlay_router, prefix=API_PREFIX)
    app.include_router(reference_router, prefix=API_PREFIX)
