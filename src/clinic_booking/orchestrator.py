"""BookingOrchestrator — page-level coordination of the booking overlays.

Owns which overlay is visible and what the appointment wizard is seeded
with.  It is the only place the two wizards meet:

    consultation.complete()
        -> on_consultation_complete(recommendation)
        -> resolve_service -> resolve_doctor
        -> appointment.open(service, doctor, start_at_step2=True)

    doctor profile "Book with this doctor"
        -> on_doctor_picked(name)
        -> appointment.open(prefill_doctor=name)

    appointment.confirm()
        -> handoff.submit(draft)

Only one overlay is active at a time; opening one closes whichever was
active before.  Prefill is passed explicitly into ``appointment.open`` and
cleared whenever the overlay closes.
"""

from __future__ import annotations

import enum
import logging

from pydantic import BaseModel

from clinic_booking.appointment import AppointmentWizard
from clinic_booking.catalog import CatalogStore, default_store
from clinic_booking.consultation import ConsultationWizard
from clinic_booking.interfaces import BookingHandoff, LoggingBookingHandoff
from clinic_booking.models.booking import BookingDraft, Prefill
from clinic_booking.models.recommendation import Recommendation
from clinic_booking.resolver import resolve_doctor, resolve_service

logger = logging.getLogger(__name__)


class ActiveOverlay(str, enum.Enum):
    """Which modal the page is currently showing."""

    NONE = "none"
    CONSULTATION = "consultation"
    APPOINTMENT = "appointment"
    DOCTOR_PROFILE = "doctor_profile"


class OverlayState(BaseModel):
    """Public view of the page-level state."""

    active: ActiveOverlay
    pending_prefill: Prefill
    selected_doctor: str | None = None
    last_recommendation: Recommendation | None = None


class BookingOrchestrator:
    """Wires the consultation wizard, the resolver and the appointment wizard.

    Args:
        store: a loaded :class:`CatalogStore`; defaults to the packaged catalog
        handoff: receives confirmed bookings; defaults to
            :class:`LoggingBookingHandoff`
    """

    def __init__(
        self,
        store: CatalogStore | None = None,
        handoff: BookingHandoff | None = None,
    ) -> None:
        self._store = store or default_store()
        self.handoff = handoff or LoggingBookingHandoff()
        self.consultation = ConsultationWizard(self._store, on_complete=self.on_consultation_complete)
        self.appointment = AppointmentWizard(self._store, on_confirm=self._on_booking_confirmed)

        self.active = ActiveOverlay.NONE
        self.pending_prefill = Prefill()
        self.selected_doctor: str | None = None
        self.last_recommendation: Recommendation | None = None

    # ==================================================================
    # Entry points
    # ==================================================================

    def open_consultation(self) -> None:
        """Show the consultation questionnaire from step 1."""
        self._close_active()
        self.consultation.open()
        self.active = ActiveOverlay.CONSULTATION

    def open_booking(self, prefill: Prefill | None = None) -> None:
        """Open the appointment wizard.

        The plain "Book Appointment" button passes no prefill.
        """
        self.pending_prefill = prefill or Prefill()
        self._open_appointment()

    def show_doctor_profile(self, name: str) -> None:
        """Show a doctor's profile card.

        Raises:
            KeyError: if ``name`` is not on the roster.
        """
        self._store.get_doctor(name)
        self._close_active()
        self.selected_doctor = name
        self.active = ActiveOverlay.DOCTOR_PROFILE

    def close_overlay(self) -> None:
        """Close whatever is showing and drop any pending prefill."""
        self._close_active()
        self.active = ActiveOverlay.NONE
        self.pending_prefill = Prefill()
        self.selected_doctor = None

    # ==================================================================
    # Callbacks
    # ==================================================================

    def on_consultation_complete(self, recommendation: Recommendation) -> None:
        """Seed the appointment wizard from a recommendation and skip step 1."""
        service = resolve_service(recommendation, store=self._store)
        doctor = resolve_doctor(service, store=self._store)
        logger.info(
            "Recommendation %r resolved to %s with %s",
            recommendation.service_title,
            service,
            doctor,
        )
        self.last_recommendation = recommendation
        self.pending_prefill = Prefill(service=service, doctor=doctor, start_at_step2=True)
        self._open_appointment()

    def on_doctor_picked(self, name: str) -> None:
        """Open the wizard at step 1 with the chosen doctor preselected."""
        if not self._store.is_known_doctor(name):
            logger.warning("Booking requested for unknown doctor %r", name)
        self.pending_prefill = Prefill(doctor=name)
        self._open_appointment()

    def _on_booking_confirmed(self, booking: BookingDraft) -> None:
        self.active = ActiveOverlay.NONE
        self.pending_prefill = Prefill()
        self.handoff.submit(booking)

    # ==================================================================
    # Views
    # ==================================================================

    def state(self) -> OverlayState:
        return OverlayState(
            active=self.active,
            pending_prefill=self.pending_prefill,
            selected_doctor=self.selected_doctor,
            last_recommendation=self.last_recommendation,
        )

    # ==================================================================
    # Internal helpers
    # ==================================================================

    def _open_appointment(self) -> None:
        self._close_active()
        prefill = self.pending_prefill
        self.appointment.open(
            prefill_service=prefill.service,
            prefill_doctor=prefill.doctor,
            start_at_step2=prefill.start_at_step2,
        )
        self.active = ActiveOverlay.APPOINTMENT

    def _close_active(self) -> None:
        if self.active is ActiveOverlay.CONSULTATION:
            self.consultation.close()
        elif self.active is ActiveOverlay.APPOINTMENT:
            self.appointment.close()
        self.selected_doctor = None
