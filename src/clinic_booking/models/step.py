"""Step and view models — the contract between the wizards and their callers.

Gate failures are never raised.  ``next()``, ``back()``, ``complete()`` and
``confirm()`` always return a result whose ``accepted`` flag tells the
caller whether the transition happened; rejected results carry the names of
the fields still missing and a short reason.

View models are read-only snapshots for a presentation layer:
  - ConsultationView: current question, answers, live recommendation
  - AppointmentView: current step, draft, offered time slots, gate status
"""

from pydantic import BaseModel

from clinic_booking.models.answers import Answer, AnswerSet
from clinic_booking.models.booking import BookingDraft
from clinic_booking.models.recommendation import Recommendation


class StepValidation(BaseModel):
    """Gate status of the current step."""

    step: int
    can_advance: bool
    missing: list[str] = []


class TransitionResult(BaseModel):
    """Outcome of a next() / back() request.

    ``step`` is the step the wizard is on after the request, whether or not
    it was accepted.
    """

    accepted: bool
    step: int
    missing: list[str] = []
    reason: str | None = None


class CompletionResult(BaseModel):
    """Outcome of ConsultationWizard.complete()."""

    accepted: bool
    recommendation: Recommendation | None = None
    reason: str | None = None


class BookingResult(BaseModel):
    """Outcome of AppointmentWizard.confirm().

    On success ``booking`` holds the draft exactly as it was confirmed.
    """

    accepted: bool
    booking: BookingDraft | None = None
    missing: list[str] = []
    reason: str | None = None


class QuestionPayload(BaseModel):
    """Flattened consultation question for rendering."""

    step: int
    key: str
    question: str
    description: str
    options: list[str] = [Answer.YES.value, Answer.NO.value]


class ConsultationView(BaseModel):
    is_open: bool
    step: int
    step_count: int
    question: QuestionPayload
    answer: Answer
    answers: AnswerSet
    can_advance: bool
    can_complete: bool
    recommendation: Recommendation


class AppointmentView(BaseModel):
    is_open: bool
    step: int
    step_name: str
    step_labels: list[str]
    draft: BookingDraft
    services: list[str]
    doctors: list[str]
    time_slots: list[str]
    validation: StepValidation
    can_confirm: bool
    summary: dict[str, str]
