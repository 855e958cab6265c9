"""AppointmentWizard — the four-step booking form state machine.

Steps and their forward gates:

    1  Service     service and doctor chosen
    2  Date & Time date and time chosen
    3  Details     first_name, last_name, email, phone filled (presence only)
    4  Payment     no forward step; confirm() needs a payment method

Seeding rule, applied on every open, confirm and close:

    step    = 2 if start_at_step2 else 1
    service = prefill service or ""
    doctor  = prefill doctor or ""
    every other field empty, payment unset, no time slots offered

Choosing a date clears the chosen time and re-offers the static slot
fixture.  The fixture is the same for every date; there is no availability
check.
"""

from __future__ import annotations

import logging
from typing import Callable

from clinic_booking.catalog import CatalogStore, default_store
from clinic_booking.constants import (
    APPOINTMENT_EDITABLE_FIELDS,
    APPOINTMENT_STEP_NAMES,
    FIRST_STEP,
    STEP_COUNT,
)
from clinic_booking.models.booking import BookingDraft, PaymentMethod, Prefill
from clinic_booking.models.step import (
    AppointmentView,
    BookingResult,
    StepValidation,
    TransitionResult,
)

logger = logging.getLogger(__name__)


class AppointmentWizard:
    """Step state machine for the appointment booking form.

    Args:
        store: a loaded :class:`CatalogStore`; defaults to the packaged catalog
        on_confirm: optional callback receiving the confirmed draft
    """

    def __init__(
        self,
        store: CatalogStore | None = None,
        on_confirm: Callable[[BookingDraft], None] | None = None,
    ) -> None:
        self._store = store or default_store()
        self._on_confirm = on_confirm
        self.is_open = False
        self.prefill = Prefill()
        self.draft = BookingDraft()
        self.time_slots: list[str] = []

    # ==================================================================
    # Lifecycle
    # ==================================================================

    def open(
        self,
        prefill_service: str | None = None,
        prefill_doctor: str | None = None,
        start_at_step2: bool = False,
    ) -> AppointmentView:
        """Open the wizard, seeding it from the prefill given to this call.

        Prefill is not carried over from earlier opens: omitted values open
        the wizard with empty fields.
        """
        self.prefill = Prefill(
            service=prefill_service or None,
            doctor=prefill_doctor or None,
            start_at_step2=start_at_step2,
        )
        self._seed()
        self.is_open = True
        logger.debug(
            "Appointment opened at step %d (service=%r, doctor=%r)",
            self.draft.step,
            self.draft.service,
            self.draft.doctor,
        )
        return self.snapshot()

    def close(self) -> None:
        """Discard the draft without emitting it.  Safe to call repeatedly."""
        self._seed()
        self.is_open = False
        logger.debug("Appointment closed")

    def _seed(self) -> None:
        """Reset the draft to the open-time state for the current prefill."""
        self.draft = BookingDraft(
            step=2 if self.prefill.start_at_step2 else FIRST_STEP,
            service=self.prefill.service or "",
            doctor=self.prefill.doctor or "",
        )
        self.time_slots = []

    # ==================================================================
    # Field API
    # ==================================================================

    def set_field(self, name: str, value: str | PaymentMethod) -> StepValidation:
        """Write one draft field and return the current step's gate status.

        Setting ``date`` clears ``time`` and re-offers the slot list.
        ``time`` must be one of the offered slots (or empty to clear it),
        and ``payment`` must be a :class:`PaymentMethod` value.

        Raises:
            ValueError: if the wizard is closed, the field is unknown, or
                the value is not valid for the field.
        """
        self._require_open()
        if name not in APPOINTMENT_EDITABLE_FIELDS:
            raise ValueError(f"Unknown booking field: {name}")

        if name == "payment":
            if not isinstance(value, PaymentMethod):
                value = PaymentMethod(str(value).lower())
            self.draft.payment = value
        elif name == "date":
            self.draft.date = str(value)
            self.draft.time = ""
            self.time_slots = self._store.time_slots_for(self.draft.date) if self.draft.date else []
        elif name == "time":
            value = str(value)
            if value and value not in self.time_slots:
                raise ValueError(f"Time {value!r} is not an offered slot for date {self.draft.date!r}")
            self.draft.time = value
        else:
            setattr(self.draft, name, str(value))

        return self.validate()

    def validate(self) -> StepValidation:
        """Gate status of the current step."""
        step = self._checked_step()
        missing = self.draft.missing_for(step)
        return StepValidation(step=step, can_advance=not missing and step < STEP_COUNT, missing=missing)

    # ==================================================================
    # Step API
    # ==================================================================

    def next(self) -> TransitionResult:
        """Advance one step if the current step's required fields are filled."""
        self._require_open()
        step = self._checked_step()
        missing = self.draft.missing_for(step)
        if missing:
            logger.debug("Appointment next rejected at step %d: missing %s", step, missing)
            return TransitionResult(
                accepted=False,
                step=step,
                missing=missing,
                reason="Required fields are missing",
            )
        if step == STEP_COUNT:
            return TransitionResult(accepted=False, step=step, reason="Already at the final step")
        self.draft.step = step + 1
        return TransitionResult(accepted=True, step=self.draft.step)

    def back(self) -> TransitionResult:
        """Go back one step, keeping everything entered so far."""
        self._require_open()
        step = self._checked_step()
        if step == FIRST_STEP:
            return TransitionResult(accepted=False, step=step, reason="Already at the first step")
        self.draft.step = step - 1
        return TransitionResult(accepted=True, step=self.draft.step)

    def confirm(self) -> BookingResult:
        """Emit the completed draft and re-seed the wizard.

        Only actionable at the payment step with a payment method chosen.
        The returned draft is a copy; the wizard itself starts over from the
        current prefill.
        """
        self._require_open()
        step = self._checked_step()
        if step != STEP_COUNT:
            return BookingResult(accepted=False, reason=f"Appointment is at step {step}")
        if self.draft.payment is PaymentMethod.UNSET:
            return BookingResult(
                accepted=False,
                missing=["payment"],
                reason="Payment method is not selected",
            )

        booking = self.draft.model_copy()
        logger.info(
            "Appointment confirmed: %s with %s on %s at %s (%s)",
            booking.service,
            booking.doctor,
            booking.date,
            booking.time,
            booking.payment.value,
        )
        self._seed()
        self.is_open = False
        if self._on_confirm is not None:
            self._on_confirm(booking)
        return BookingResult(accepted=True, booking=booking)

    # ==================================================================
    # Views
    # ==================================================================

    def snapshot(self) -> AppointmentView:
        """Read-only view of the wizard for rendering."""
        step = self._checked_step()
        return AppointmentView(
            is_open=self.is_open,
            step=step,
            step_name=APPOINTMENT_STEP_NAMES[step],
            step_labels=list(APPOINTMENT_STEP_NAMES.values()),
            draft=self.draft.model_copy(),
            services=self._store.service_titles(),
            doctors=self._store.doctor_names(),
            time_slots=list(self.time_slots),
            validation=self.validate(),
            can_confirm=step == STEP_COUNT and self.draft.payment is not PaymentMethod.UNSET,
            summary=self.draft.summary(),
        )

    # ==================================================================
    # Internal helpers
    # ==================================================================

    def _checked_step(self) -> int:
        """Return the current step, failing loudly if it left 1-4."""
        step = self.draft.step
        if not FIRST_STEP <= step <= STEP_COUNT:
            raise ValueError(f"Invalid step: {step}")
        return step

    def _require_open(self) -> None:
        if not self.is_open:
            raise ValueError("Appointment wizard is not open")
