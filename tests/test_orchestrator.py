"""BookingOrchestrator tests — the consultation -> appointment hand-off.

Exercises the page-level wiring end to end: a completed questionnaire
opens the appointment wizard at step 2 with the resolved service and
doctor, a doctor profile opens it at step 1, and a confirmed booking
reaches the hand-off.
"""

import pytest

from clinic_booking.interfaces import LoggingBookingHandoff
from clinic_booking.models.booking import BookingDraft, PaymentMethod, Prefill
from clinic_booking.models.recommendation import Urgency
from clinic_booking.orchestrator import ActiveOverlay, BookingOrchestrator


@pytest.fixture
def handoff():
    return LoggingBookingHandoff()


@pytest.fixture
def orchestrator(store, handoff):
    return BookingOrchestrator(store, handoff=handoff)


def _complete_consultation(orchestrator, values):
    consultation = orchestrator.consultation
    for step, value in enumerate(values, start=1):
        consultation.answer(step, value)
        if step < 4:
            consultation.next()
    return consultation.complete()


def _book(appointment, date="2025-06-01", time="10:00 AM"):
    """Fill steps 2-4 of an already-seeded wizard and confirm."""
    appointment.set_field("date", date)
    appointment.set_field("time", time)
    assert appointment.next().accepted
    appointment.set_field("first_name", "Maria")
    appointment.set_field("last_name", "Lopez")
    appointment.set_field("email", "maria@example.com")
    appointment.set_field("phone", "+63 912 345 6789")
    assert appointment.next().accepted
    appointment.set_field("payment", "online")
    return appointment.confirm()


# =====================================================================
# Consultation -> appointment
# =====================================================================


class TestConsultationHandoff:

    def test_emergency_opens_extraction_at_step_two(self, orchestrator):
        orchestrator.open_consultation()
        assert orchestrator.active is ActiveOverlay.CONSULTATION

        result = _complete_consultation(orchestrator, ["yes", "no", "yes", "no"])

        assert result.accepted is True
        assert result.recommendation.service_title == "Emergency Consultation"
        assert result.recommendation.urgency is Urgency.URGENT

        assert orchestrator.active is ActiveOverlay.APPOINTMENT
        assert orchestrator.consultation.is_open is False
        appointment = orchestrator.appointment
        assert appointment.is_open is True
        assert appointment.draft.step == 2
        assert appointment.draft.service == "Tooth Extraction"
        assert appointment.draft.doctor == "Dr. Angela Cruz"
        assert orchestrator.last_recommendation == result.recommendation

    @pytest.mark.parametrize(
        "values, service, doctor",
        [
            (["no", "no", "no", "yes"], "Cosmetic Dentistry", "Dr. Patricia Reyes"),
            (["no", "yes", "no", "no"], "Teeth Cleaning", "Dr. Angela Cruz"),
            (["yes", "no", "no", "no"], "Teeth Cleaning", "Dr. Angela Cruz"),
            (["no", "no", "no", "no"], "Teeth Cleaning", "Dr. Angela Cruz"),
        ],
    )
    def test_prefill_for_each_branch(self, orchestrator, values, service, doctor):
        orchestrator.open_consultation()
        _complete_consultation(orchestrator, values)
        draft = orchestrator.appointment.draft
        assert (draft.step, draft.service, draft.doctor) == (2, service, doctor)

    def test_consultation_restarts_fresh(self, orchestrator):
        orchestrator.open_consultation()
        _complete_consultation(orchestrator, ["yes", "yes", "yes", "yes"])
        orchestrator.open_consultation()
        assert orchestrator.consultation.step == 1
        assert orchestrator.consultation.answers.pain_present.value == "unanswered"
        assert orchestrator.appointment.is_open is False

    def test_cancelled_consultation_opens_nothing(self, orchestrator):
        orchestrator.open_consultation()
        orchestrator.consultation.answer(1, "yes")
        orchestrator.close_overlay()
        assert orchestrator.active is ActiveOverlay.NONE
        assert orchestrator.appointment.is_open is False
        assert orchestrator.last_recommendation is None


# =====================================================================
# Doctor profile -> appointment
# =====================================================================


class TestDoctorProfile:

    def test_show_profile(self, orchestrator):
        orchestrator.show_doctor_profile("Dr. Miguel Santos")
        state = orchestrator.state()
        assert state.active is ActiveOverlay.DOCTOR_PROFILE
        assert state.selected_doctor == "Dr. Miguel Santos"

    def test_unknown_profile_raises(self, orchestrator):
        with pytest.raises(KeyError):
            orchestrator.show_doctor_profile("Dr. Nobody")
        assert orchestrator.active is ActiveOverlay.NONE

    def test_pick_opens_step_one_with_doctor(self, orchestrator):
        orchestrator.show_doctor_profile("Dr. Miguel Santos")
        orchestrator.on_doctor_picked("Dr. Miguel Santos")
        draft = orchestrator.appointment.draft
        assert orchestrator.active is ActiveOverlay.APPOINTMENT
        assert draft.step == 1
        assert draft.service == ""
        assert draft.doctor == "Dr. Miguel Santos"
        assert orchestrator.state().selected_doctor is None


# =====================================================================
# Plain booking and confirmation
# =====================================================================


class TestBooking:

    def test_plain_booking_has_no_prefill(self, orchestrator):
        orchestrator.open_booking()
        assert orchestrator.appointment.draft == BookingDraft()
        assert orchestrator.pending_prefill == Prefill()

    def test_full_flow_reaches_handoff(self, orchestrator, handoff):
        orchestrator.open_consultation()
        _complete_consultation(orchestrator, ["yes", "no", "yes", "no"])
        result = _book(orchestrator.appointment)

        assert result.accepted is True
        assert handoff.submitted == [result.booking]
        booking = handoff.submitted[0]
        assert booking.service == "Tooth Extraction"
        assert booking.doctor == "Dr. Angela Cruz"
        assert booking.time == "10:00 AM"
        assert booking.payment is PaymentMethod.ONLINE

        state = orchestrator.state()
        assert state.active is ActiveOverlay.NONE
        assert state.pending_prefill == Prefill()

    def test_booking_after_prefill_starts_clean(self, orchestrator):
        orchestrator.open_consultation()
        _complete_consultation(orchestrator, ["no", "no", "no", "yes"])
        orchestrator.close_overlay()
        orchestrator.open_booking()
        assert orchestrator.appointment.draft == BookingDraft()

    def test_rejected_confirm_does_not_reach_handoff(self, orchestrator, handoff):
        orchestrator.open_booking(Prefill(service="Teeth Cleaning", doctor="Dr. Angela Cruz"))
        assert orchestrator.appointment.confirm().accepted is False
        assert handoff.submitted == []
        assert orchestrator.active is ActiveOverlay.APPOINTMENT


def test_one_overlay_at_a_time(orchestrator):
    orchestrator.open_booking()
    orchestrator.appointment.set_field("service", "Teeth Cleaning")
    orchestrator.open_consultation()
    assert orchestrator.active is ActiveOverlay.CONSULTATION
    assert orchestrator.appointment.is_open is False
    assert orchestrator.appointment.draft.service == ""
