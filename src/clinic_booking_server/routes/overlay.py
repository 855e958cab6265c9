"""Overlay endpoints — page-level state and the doctor profile card."""

from fastapi import APIRouter, Depends

from clinic_booking.models.step import AppointmentView
from clinic_booking.orchestrator import BookingOrchestrator, OverlayState

from clinic_booking_server.dependencies import get_orchestrator

router = APIRouter(tags=["overlay"])


@router.get("/overlay")
async def get_overlay(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> OverlayState:
    """Which overlay is showing and what the next booking will be seeded with."""
    return orchestrator.state()


@router.post("/overlay/close")
async def close_overlay(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> OverlayState:
    orchestrator.close_overlay()
    return orchestrator.state()


@router.post("/doctors/{name}/profile")
async def show_profile(
    name: str,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> OverlayState:
    """Show a doctor's profile card; unknown names map to 404."""
    orchestrator.show_doctor_profile(name)
    return orchestrator.state()


@router.post("/doctors/{name}/book")
async def book_with_doctor(
    name: str,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> AppointmentView:
    """Open the wizard at step 1 with this doctor already chosen."""
    orchestrator.on_doctor_picked(name)
    return orchestrator.appointment.snapshot()
