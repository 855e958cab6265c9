"""Consultation answer models.

Each consultation step asks one yes/no question and writes exactly one
field of the :class:`AnswerSet`.  Answers are tri-state so that a
partially completed questionnaire can still be scored:

  - unanswered: the step has not been answered yet (initial state)
  - yes / no: the patient's selection
"""

import enum

from pydantic import BaseModel, ConfigDict


class Answer(str, enum.Enum):
    """Tri-state yes/no answer."""

    UNANSWERED = "unanswered"
    YES = "yes"
    NO = "no"


class AnswerSet(BaseModel):
    """The four symptom / preference answers, in question order."""

    model_config = ConfigDict(validate_assignment=True)

    pain_present: Answer = Answer.UNANSWERED
    gums_bleed: Answer = Answer.UNANSWERED
    swelling_present: Answer = Answer.UNANSWERED
    cosmetic_interest: Answer = Answer.UNANSWERED

    def get(self, key: str) -> Answer:
        """Return the answer stored under ``key`` (an AnswerSet field name)."""
        if key not in type(self).model_fields:
            raise ValueError(f"Unknown answer field: {key}")
        return getattr(self, key)

    def is_answered(self, key: str) -> bool:
        return self.get(key) is not Answer.UNANSWERED

    def as_facts(self) -> dict[str, str]:
        """Flat ``{field: "yes" | "no" | "unanswered"}`` dict for rule evaluation."""
        return {key: value.value for key, value in self}
