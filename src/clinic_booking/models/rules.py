"""Rule models for the recommendation engine and the service/doctor resolver.

These models mirror the YAML files in ``v1/rules/``:

  - ConsultationQuestion: one step of the questionnaire (consultation.yaml)
  - RecommendationRuleset: ordered answer rules + default (recommendation.yaml)
  - ServiceRuleset: ordered keyword rules + fallback (service_resolution.yaml)
  - DoctorAssignment: exact service -> doctor table (doctor_assignment.yaml)

Every ruleset is evaluated first-match-wins.  A rule fires when ALL of its
``when`` predicates hold.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from clinic_booking.models.recommendation import Recommendation


class Predicate(BaseModel):
    """A single condition on one fact.

    ``qid`` names the fact (an AnswerSet field, or ``service_title`` for
    resolver rules).

    Operators:
      - eq, ne: equality / inequality
      - contains: substring membership
      - contains_any: any of ``value`` (a list) is a substring of the fact
    """

    qid: str
    op: Literal["eq", "ne", "contains", "contains_any"]
    value: Any
    ignore_case: bool = False


class ConsultationQuestion(BaseModel):
    """A yes/no question asked at one consultation step."""

    step: int = Field(ge=1, le=4)
    key: str
    question: str
    description: str


class RecommendationRule(BaseModel):
    """If ALL predicates in ``when`` hold, recommend ``then``."""

    when: List[Predicate]
    then: Recommendation


class RecommendationRuleset(BaseModel):
    rules: List[RecommendationRule]
    default: Recommendation


class ServiceRule(BaseModel):
    """If ALL predicates in ``when`` hold, book the ``then`` service title."""

    when: List[Predicate]
    then: str


class ServiceRuleset(BaseModel):
    rules: List[ServiceRule]
    default: str


class DoctorAssignment(BaseModel):
    """Exact-match service title -> default doctor name."""

    assignments: Dict[str, str]
