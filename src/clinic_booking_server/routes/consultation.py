"""Consultation endpoints — drive the triage questionnaire.

Completing the questionnaire hands the recommendation to the visitor's
orchestrator, which opens the appointment wizard at step 2 with the
resolved service and doctor; the response carries both.
"""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from clinic_booking.models.step import (
    AppointmentView,
    CompletionResult,
    ConsultationView,
    TransitionResult,
)
from clinic_booking.orchestrator import BookingOrchestrator, OverlayState

from clinic_booking_server.dependencies import get_orchestrator

router = APIRouter(prefix="/consultation", tags=["consultation"])


class AnswerRequest(BaseModel):
    """Body for POST /consultation/answer.

    ``step`` is the step the client was showing; stale writes get 409.
    """
    step: int
    value: Literal["yes", "no"]


class CompleteResponse(BaseModel):
    result: CompletionResult
    appointment: AppointmentView | None = None


@router.post("/open")
async def open_consultation(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> ConsultationView:
    """Open the questionnaire at step 1, closing any other overlay."""
    orchestrator.open_consultation()
    return orchestrator.consultation.snapshot()


@router.get("")
async def get_consultation(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> ConsultationView:
    return orchestrator.consultation.snapshot()


@router.post("/answer")
async def answer(
    body: AnswerRequest,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> ConsultationView:
    return orchestrator.consultation.answer(body.step, body.value)


@router.post("/next")
async def next_step(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> TransitionResult:
    return orchestrator.consultation.next()


@router.post("/back")
async def previous_step(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> TransitionResult:
    return orchestrator.consultation.back()


@router.post("/complete")
async def complete(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> CompleteResponse:
    """Finish the questionnaire.

    On success the appointment wizard is already open and prefilled.
    """
    result = orchestrator.consultation.complete()
    if not result.accepted:
        return CompleteResponse(result=result)
    return CompleteResponse(result=result, appointment=orchestrator.appointment.snapshot())


@router.post("/close")
async def close_consultation(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> OverlayState:
    """Cancel the questionnaire without a recommendation."""
    orchestrator.close_overlay()
    return orchestrator.state()
