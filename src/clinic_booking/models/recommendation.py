"""Triage recommendation produced by the consultation questionnaire."""

import enum

from pydantic import BaseModel, ConfigDict

from clinic_booking.constants import URGENCY_ORDER


class Urgency(str, enum.Enum):
    """Triage tier.  Severity order: urgent > soon > routine."""

    ROUTINE = "routine"
    SOON = "soon"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Position in :data:`URGENCY_ORDER`; higher is more severe."""
        return URGENCY_ORDER.index(self.value)


class Recommendation(BaseModel):
    """Suggested service and urgency for a given answer set.

    Recomputed from the answers on every read; never stored.
    """

    model_config = ConfigDict(frozen=True)

    service_title: str
    urgency: Urgency
    summary: str
