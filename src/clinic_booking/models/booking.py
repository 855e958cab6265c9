"""Booking draft models — the state accumulated by the appointment wizard.

The draft is owned by a single :class:`AppointmentWizard`; no other
component mutates it.  Every text field starts empty and the payment
method starts ``unset``.  ``step`` is range-checked on every assignment so
an out-of-range step fails loudly instead of being clamped.
"""

import enum

from pydantic import BaseModel, ConfigDict, Field

from clinic_booking.constants import APPOINTMENT_REQUIRED_FIELDS, FIRST_STEP, STEP_COUNT


class PaymentMethod(str, enum.Enum):
    """How the patient intends to pay."""

    UNSET = "unset"
    CLINIC = "clinic"
    ONLINE = "online"


class Prefill(BaseModel):
    """Caller-supplied seed values for opening the appointment wizard."""

    model_config = ConfigDict(frozen=True)

    service: str | None = None
    doctor: str | None = None
    start_at_step2: bool = False


class BookingDraft(BaseModel):
    """Accumulated appointment form data across the wizard's four steps."""

    model_config = ConfigDict(validate_assignment=True)

    step: int = Field(default=FIRST_STEP, ge=FIRST_STEP, le=STEP_COUNT)

    # Step 1
    service: str = ""
    doctor: str = ""

    # Step 2
    date: str = ""
    time: str = ""

    # Step 3
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    notes: str = ""

    # Step 4
    payment: PaymentMethod = PaymentMethod.UNSET

    def missing_for(self, step: int) -> list[str]:
        """Required fields of ``step`` that are still empty, in form order."""
        if step not in APPOINTMENT_REQUIRED_FIELDS:
            raise ValueError(f"Invalid step: {step}")
        return [name for name in APPOINTMENT_REQUIRED_FIELDS[step] if not getattr(self, name)]

    def summary(self) -> dict[str, str]:
        """Appointment summary shown for review before payment."""
        return {
            "service": self.service or "-",
            "doctor": self.doctor or "-",
            "date": self.date or "-",
            "time": self.time or "-",
        }
