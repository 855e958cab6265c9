"""Recommendation engine — maps consultation answers to a suggested service.

The mapping is an ordered rule list loaded from
``v1/rules/recommendation.yaml``; the first rule whose predicates all hold
wins, otherwise the ruleset default applies:

    1  pain AND (swelling OR bleeding)  -> Emergency Consultation   (urgent)
    2  pain                             -> General Checkup & Assessment (soon)
    3  bleeding                         -> Teeth Cleaning & Gum Assessment (soon)
    4  cosmetic interest                -> Cosmetic Dentistry       (routine)
    -  otherwise                        -> Routine Dental Checkup   (routine)

The function is pure and total: partially answered sets are valid input, so
a presentation layer can show the recommendation live while the patient is
still answering.
"""

from __future__ import annotations

import logging

from clinic_booking.catalog import CatalogStore, default_store
from clinic_booking.evaluator import RuleEvaluator
from clinic_booking.models.answers import AnswerSet
from clinic_booking.models.recommendation import Recommendation

logger = logging.getLogger(__name__)

_evaluator = RuleEvaluator()


def recommend(answers: AnswerSet, *, store: CatalogStore | None = None) -> Recommendation:
    """Return the recommendation for ``answers``.

    Args:
        answers: the (possibly partial) consultation answers
        store: catalog to read the rules from; defaults to the packaged one
    """
    ruleset = (store or default_store()).recommendation_rules
    rule = _evaluator.first_match(ruleset.rules, answers.as_facts())
    result = ruleset.default if rule is None else rule.then
    logger.debug("Recommended %s (%s)", result.service_title, result.urgency.value)
    return result
