"""HTTP adapter tests — drive the wizards through the FastAPI routes.

Each test gets a fresh application (and therefore a fresh visitor
registry); visitors are told apart by the ``X-Visitor-ID`` header.
"""

import pytest
from fastapi.testclient import TestClient

from clinic_booking.interfaces import LoggingBookingHandoff
from clinic_booking_server.app import create_app
from clinic_booking_server.config import ServerSettings

API = "/api/v1"
ALICE = {"X-Visitor-ID": "alice"}
BOB = {"X-Visitor-ID": "bob"}


@pytest.fixture
def handoff():
    return LoggingBookingHandoff()


@pytest.fixture
def client(handoff):
    app = create_app(ServerSettings(max_visitors=10), handoff=handoff)
    with TestClient(app) as c:
        yield c


def _answer(client, step, value, headers=ALICE):
    resp = client.post(f"{API}/consultation/answer", json={"step": step, "value": value}, headers=headers)
    assert resp.status_code == 200
    return resp.json()


def _set(client, field, value, headers=ALICE):
    resp = client.put(f"{API}/appointment/fields", json={"field": field, "value": value}, headers=headers)
    assert resp.status_code == 200
    return resp.json()


# =====================================================================
# Health and reference data
# =====================================================================


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "services": 4, "doctors": 3}


class TestReference:

    def test_services(self, client):
        titles = [s["title"] for s in client.get(f"{API}/reference/services").json()]
        assert titles == [
            "Teeth Cleaning",
            "Tooth Extraction",
            "Braces & Alignment",
            "Cosmetic Dentistry",
        ]

    def test_doctor_profile(self, client):
        resp = client.get(f"{API}/reference/doctors/Dr. Miguel Santos")
        assert resp.status_code == 200
        assert resp.json()["role"] == "Orthodontist"

    def test_unknown_doctor_404(self, client):
        resp = client.get(f"{API}/reference/doctors/Dr. Nobody")
        assert resp.status_code == 404

    def test_time_slots_same_for_any_date(self, client):
        a = client.get(f"{API}/reference/time-slots", params={"date": "2025-06-01"}).json()
        b = client.get(f"{API}/reference/time-slots", params={"date": "2030-01-15"}).json()
        assert a == b
        assert len(a) == 6

    def test_urgency_levels(self, client):
        ids = [u["id"] for u in client.get(f"{API}/reference/urgency-levels").json()]
        assert ids == ["routine", "soon", "urgent"]


# =====================================================================
# Visitor identity
# =====================================================================


def test_missing_visitor_header_401(client):
    resp = client.post(f"{API}/consultation/open")
    assert resp.status_code == 401


def test_visitors_are_isolated(client):
    client.post(f"{API}/consultation/open", headers=ALICE)
    _answer(client, 1, "yes")
    bob_view = client.get(f"{API}/consultation", headers=BOB).json()
    assert bob_view["is_open"] is False
    assert bob_view["answer"] == "unanswered"


# =====================================================================
# Consultation
# =====================================================================


class TestConsultation:

    def test_closed_wizard_409(self, client):
        resp = client.post(f"{API}/consultation/answer", json={"step": 1, "value": "yes"}, headers=ALICE)
        assert resp.status_code == 409

    def test_stale_step_409(self, client):
        client.post(f"{API}/consultation/open", headers=ALICE)
        resp = client.post(f"{API}/consultation/answer", json={"step": 3, "value": "yes"}, headers=ALICE)
        assert resp.status_code == 409

    def test_invalid_answer_value_422(self, client):
        client.post(f"{API}/consultation/open", headers=ALICE)
        resp = client.post(f"{API}/consultation/answer", json={"step": 1, "value": "maybe"}, headers=ALICE)
        assert resp.status_code == 422

    def test_next_rejected_is_200(self, client):
        client.post(f"{API}/consultation/open", headers=ALICE)
        resp = client.post(f"{API}/consultation/next", headers=ALICE)
        assert resp.status_code == 200
        assert resp.json()["accepted"] is False

    def test_complete_opens_prefilled_appointment(self, client):
        client.post(f"{API}/consultation/open", headers=ALICE)
        for step, value in enumerate(["yes", "no", "yes", "no"], start=1):
            view = _answer(client, step, value)
            if step < 4:
                assert client.post(f"{API}/consultation/next", headers=ALICE).json()["accepted"]
        assert view["recommendation"]["urgency"] == "urgent"

        body = client.post(f"{API}/consultation/complete", headers=ALICE).json()
        assert body["result"]["accepted"] is True
        assert body["result"]["recommendation"]["service_title"] == "Emergency Consultation"
        appointment = body["appointment"]
        assert appointment["step"] == 2
        assert appointment["draft"]["service"] == "Tooth Extraction"
        assert appointment["draft"]["doctor"] == "Dr. Angela Cruz"

        overlay = client.get(f"{API}/overlay", headers=ALICE).json()
        assert overlay["active"] == "appointment"


# =====================================================================
# Appointment
# =====================================================================


class TestAppointment:

    def test_full_booking(self, client, handoff):
        view = client.post(f"{API}/appointment/open", headers=ALICE).json()
        assert view["step"] == 1
        assert view["step_name"] == "Service"

        _set(client, "service", "Braces & Alignment")
        assert _set(client, "doctor", "Dr. Miguel Santos")["can_advance"] is True
        assert client.post(f"{API}/appointment/next", headers=ALICE).json()["step"] == 2

        _set(client, "date", "2025-06-01")
        assert len(client.get(f"{API}/appointment", headers=ALICE).json()["time_slots"]) == 6
        _set(client, "time", "02:00 PM")
        client.post(f"{API}/appointment/next", headers=ALICE)

        for field, value in [
            ("first_name", "Maria"),
            ("last_name", "Lopez"),
            ("email", "maria@example.com"),
            ("phone", "+63 912 345 6789"),
        ]:
            _set(client, field, value)
        assert client.post(f"{API}/appointment/next", headers=ALICE).json()["step"] == 4

        rejected = client.post(f"{API}/appointment/confirm", headers=ALICE).json()
        assert rejected["accepted"] is False
        assert rejected["missing"] == ["payment"]

        _set(client, "payment", "clinic")
        result = client.post(f"{API}/appointment/confirm", headers=ALICE).json()
        assert result["accepted"] is True
        assert result["booking"]["payment"] == "clinic"
        assert len(handoff.submitted) == 1
        assert handoff.submitted[0].time == "02:00 PM"

    def test_open_with_prefill(self, client):
        view = client.post(
            f"{API}/appointment/open",
            json={"prefill_service": "Cosmetic Dentistry", "start_at_step2": True},
            headers=ALICE,
        ).json()
        assert view["step"] == 2
        assert view["draft"]["service"] == "Cosmetic Dentistry"
        assert view["draft"]["doctor"] == ""

    def test_unknown_field_400(self, client):
        client.post(f"{API}/appointment/open", headers=ALICE)
        resp = client.put(f"{API}/appointment/fields", json={"field": "step", "value": "4"}, headers=ALICE)
        assert resp.status_code == 400

    def test_unoffered_time_400(self, client):
        client.post(f"{API}/appointment/open", headers=ALICE)
        _set(client, "date", "2025-06-01")
        resp = client.put(f"{API}/appointment/fields", json={"field": "time", "value": "07:00 AM"}, headers=ALICE)
        assert resp.status_code == 400

    def test_close_discards_draft(self, client):
        client.post(f"{API}/appointment/open", headers=ALICE)
        _set(client, "service", "Teeth Cleaning")
        state = client.post(f"{API}/appointment/close", headers=ALICE).json()
        assert state["active"] == "none"
        view = client.get(f"{API}/appointment", headers=ALICE).json()
        assert view["is_open"] is False
        assert view["draft"]["service"] == ""


# =====================================================================
# Overlay
# =====================================================================


def test_book_from_doctor_profile(client):
    state = client.post(f"{API}/doctors/Dr. Patricia Reyes/profile", headers=ALICE).json()
    assert state["active"] == "doctor_profile"
    assert state["selected_doctor"] == "Dr. Patricia Reyes"

    view = client.post(f"{API}/doctors/Dr. Patricia Reyes/book", headers=ALICE).json()
    assert view["step"] == 1
    assert view["draft"]["doctor"] == "Dr. Patricia Reyes"


def test_unknown_profile_404(client):
    resp = client.post(f"{API}/doctors/Dr. Nobody/profile", headers=ALICE)
    assert resp.status_code == 404
