"""ConsultationWizard — the four-step yes/no triage questionnaire.

Each step asks one question from ``v1/rules/consultation.yaml`` and writes
exactly one :class:`AnswerSet` field:

    1  pain_present
    2  gums_bleed
    3  swelling_present
    4  cosmetic_interest

Transitions:
  - ``next``: step -> step + 1, only if the current step is answered
  - ``back``: step -> step - 1, never below step 1
  - ``complete``: only at step 4 with step 4 answered; emits the live
    recommendation, then resets
  - ``close``: resets without emitting

Selecting an answer never advances the step.  Completion and close share
the same reset: step 1 with every answer unanswered.
"""

from __future__ import annotations

import logging
from typing import Callable

from clinic_booking.catalog import CatalogStore, default_store
from clinic_booking.constants import FIRST_STEP, STEP_COUNT
from clinic_booking.models.answers import Answer, AnswerSet
from clinic_booking.models.recommendation import Recommendation
from clinic_booking.models.step import (
    CompletionResult,
    ConsultationView,
    QuestionPayload,
    TransitionResult,
)
from clinic_booking.recommendation import recommend

logger = logging.getLogger(__name__)


class ConsultationWizard:
    """Step state machine for the consultation questionnaire.

    Args:
        store: a loaded :class:`CatalogStore`; defaults to the packaged catalog
        on_complete: optional callback receiving the recommendation when the
            questionnaire is completed
    """

    def __init__(
        self,
        store: CatalogStore | None = None,
        on_complete: Callable[[Recommendation], None] | None = None,
    ) -> None:
        self._store = store or default_store()
        self._on_complete = on_complete
        self.is_open = False
        self.step = FIRST_STEP
        self.answers = AnswerSet()

    # ==================================================================
    # Lifecycle
    # ==================================================================

    def open(self) -> ConsultationView:
        """Open the questionnaire at step 1 with no answers."""
        self._reset()
        self.is_open = True
        logger.debug("Consultation opened")
        return self.snapshot()

    def close(self) -> None:
        """Discard all answers without emitting a recommendation."""
        self._reset()
        self.is_open = False
        logger.debug("Consultation closed")

    def _reset(self) -> None:
        self.step = FIRST_STEP
        self.answers = AnswerSet()

    # ==================================================================
    # Step API
    # ==================================================================

    @property
    def recommendation(self) -> Recommendation:
        """Recommendation for the answers given so far (recomputed on read)."""
        return recommend(self.answers, store=self._store)

    @property
    def current_key(self) -> str:
        """AnswerSet field written by the current step."""
        return self._store.get_question(self._checked_step()).key

    def can_advance(self) -> bool:
        """True when the current step's question has been answered."""
        return self.answers.is_answered(self.current_key)

    def answer(self, step: int, value: Answer | str) -> ConsultationView:
        """Record the answer to the question shown at ``step``.

        ``step`` must be the current step; a write for any other step comes
        from a stale view and is refused.

        Raises:
            ValueError: if the wizard is closed, ``step`` is not the current
                step, or ``value`` is not yes/no.
        """
        self._require_open()
        if step != self._checked_step():
            raise ValueError(
                f"Stale answer: step {step} answered while the consultation is at step {self.step}"
            )
        value = Answer(value)
        if value is Answer.UNANSWERED:
            raise ValueError("Answer must be 'yes' or 'no'")

        setattr(self.answers, self.current_key, value)
        return self.snapshot()

    def next(self) -> TransitionResult:
        """Advance one step if the current question has been answered."""
        self._require_open()
        step = self._checked_step()
        if not self.can_advance():
            logger.debug("Consultation next rejected at step %d: unanswered", step)
            return TransitionResult(
                accepted=False,
                step=step,
                missing=[self.current_key],
                reason="Current question is unanswered",
            )
        if step == STEP_COUNT:
            return TransitionResult(
                accepted=False, step=step, reason="Already at the final step"
            )
        self.step = step + 1
        return TransitionResult(accepted=True, step=self.step)

    def back(self) -> TransitionResult:
        """Go back one step; answers already given are kept."""
        self._require_open()
        step = self._checked_step()
        if step == FIRST_STEP:
            return TransitionResult(
                accepted=False, step=step, reason="Already at the first step"
            )
        self.step = step - 1
        return TransitionResult(accepted=True, step=self.step)

    def complete(self) -> CompletionResult:
        """Emit the recommendation and reset.

        Only actionable at the final step once its question is answered;
        otherwise the request is rejected and nothing changes.
        """
        self._require_open()
        step = self._checked_step()
        if step != STEP_COUNT:
            return CompletionResult(accepted=False, reason=f"Consultation is at step {step}")
        if not self.can_advance():
            return CompletionResult(accepted=False, reason="Current question is unanswered")

        recommendation = self.recommendation
        logger.info(
            "Consultation completed: %s (%s)",
            recommendation.service_title,
            recommendation.urgency.value,
        )
        self.close()
        if self._on_complete is not None:
            self._on_complete(recommendation)
        return CompletionResult(accepted=True, recommendation=recommendation)

    # ==================================================================
    # Views
    # ==================================================================

    def snapshot(self) -> ConsultationView:
        """Read-only view of the current step for rendering."""
        step = self._checked_step()
        question = self._store.get_question(step)
        return ConsultationView(
            is_open=self.is_open,
            step=step,
            step_count=STEP_COUNT,
            question=QuestionPayload(
                step=question.step,
                key=question.key,
                question=question.question,
                description=question.description,
            ),
            answer=self.answers.get(question.key),
            answers=self.answers.model_copy(),
            can_advance=self.can_advance() and step < STEP_COUNT,
            can_complete=self.can_advance() and step == STEP_COUNT,
            recommendation=self.recommendation,
        )

    # ==================================================================
    # Internal helpers
    # ==================================================================

    def _checked_step(self) -> int:
        """Return the current step, failing loudly if it left 1-4."""
        if not FIRST_STEP <= self.step <= STEP_COUNT:
            raise ValueError(f"Invalid step: {self.step}")
        return self.step

    def _require_open(self) -> None:
        if not self.is_open:
            raise ValueError("Consultation is not open")
