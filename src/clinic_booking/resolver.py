"""Service/doctor resolver — turns a recommendation into booking prefill.

Two pure lookups, both backed by YAML rules in ``v1/rules/``:

  - :func:`resolve_service` classifies a recommended service title into one
    of the four bookable catalog services using case-insensitive keyword
    rules (first match wins, falling back to Teeth Cleaning).
  - :func:`resolve_doctor` maps a bookable service to its default doctor
    through an exact table, falling back to ``ANY_AVAILABLE_DOCTOR``.

Neither lookup consults availability.
"""

from __future__ import annotations

import logging

from clinic_booking.catalog import CatalogStore, default_store
from clinic_booking.constants import ANY_AVAILABLE_DOCTOR
from clinic_booking.evaluator import RuleEvaluator
from clinic_booking.models.recommendation import Recommendation

logger = logging.getLogger(__name__)

_evaluator = RuleEvaluator()


def resolve_service(
    recommendation: Recommendation, *, store: CatalogStore | None = None
) -> str:
    """Return the bookable service title for a recommendation.

    The result is always a member of the service catalog; ``CatalogStore``
    refuses to load rules that could resolve anywhere else.
    """
    ruleset = (store or default_store()).service_rules
    facts = {"service_title": recommendation.service_title}
    rule = _evaluator.first_match(ruleset.rules, facts)
    if rule is None:
        logger.debug(
            "No service rule matched %r, using %s", recommendation.service_title, ruleset.default
        )
        return ruleset.default
    return rule.then


def resolve_doctor(service: str, *, store: CatalogStore | None = None) -> str:
    """Return the default doctor for a bookable service title."""
    assignments = (store or default_store()).doctor_assignment.assignments
    doctor = assignments.get(service)
    if doctor is None:
        logger.debug("No doctor assigned to %r, using %s", service, ANY_AVAILABLE_DOCTOR)
        return ANY_AVAILABLE_DOCTOR
    return doctor
