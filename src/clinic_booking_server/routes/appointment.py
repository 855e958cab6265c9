"""Appointment endpoints — drive the four-step booking wizard.

Gate failures are returned as 200 responses with ``accepted: false`` so the
front end can keep its Next / Confirm buttons disabled.  A confirmed
booking is handed to the server's booking hand-off.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from clinic_booking.models.booking import Prefill
from clinic_booking.models.step import (
    AppointmentView,
    BookingResult,
    StepValidation,
    TransitionResult,
)
from clinic_booking.orchestrator import BookingOrchestrator, OverlayState

from clinic_booking_server.dependencies import get_orchestrator

router = APIRouter(prefix="/appointment", tags=["appointment"])


class OpenAppointmentRequest(BaseModel):
    """Body for POST /appointment/open.  All fields are optional."""
    prefill_service: str | None = None
    prefill_doctor: str | None = None
    start_at_step2: bool = False


class SetFieldRequest(BaseModel):
    """Body for PUT /appointment/fields."""
    field: str
    value: str


@router.post("/open")
async def open_appointment(
    body: OpenAppointmentRequest | None = None,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> AppointmentView:
    """Open the wizard, seeded from the prefill in this request only."""
    body = body or OpenAppointmentRequest()
    orchestrator.open_booking(
        Prefill(
            service=body.prefill_service,
            doctor=body.prefill_doctor,
            start_at_step2=body.start_at_step2,
        )
    )
    return orchestrator.appointment.snapshot()


@router.get("")
async def get_appointment(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> AppointmentView:
    return orchestrator.appointment.snapshot()


@router.put("/fields")
async def set_field(
    body: SetFieldRequest,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> StepValidation:
    """Write one draft field; returns the current step's gate status."""
    return orchestrator.appointment.set_field(body.field, body.value)


@router.post("/next")
async def next_step(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> TransitionResult:
    return orchestrator.appointment.next()


@router.post("/back")
async def previous_step(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> TransitionResult:
    return orchestrator.appointment.back()


@router.post("/confirm")
async def confirm(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> BookingResult:
    return orchestrator.appointment.confirm()


@router.post("/close")
async def close_appointment(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> OverlayState:
    """Cancel the booking; the draft is discarded."""
    orchestrator.close_overlay()
    return orchestrator.state()
