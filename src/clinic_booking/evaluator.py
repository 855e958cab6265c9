"""RuleEvaluator — first-match-wins evaluation of predicate rules.

Both the recommendation engine and the service resolver are ordered lists
of ``(when, then)`` rules.  :meth:`first_match` walks the list and returns
the first rule whose predicates all hold against a flat ``facts`` dict:

  - recommendation rules read answers keyed by AnswerSet field
    (``{"pain_present": "yes", ...}``)
  - service rules read ``{"service_title": "..."}``

Returns ``None`` when no rule matched; callers then apply their ruleset's
default.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar

from clinic_booking.models.rules import Predicate

logger = logging.getLogger(__name__)

# Any rule model with a ``when: list[Predicate]`` field.
R = TypeVar("R")


class RuleEvaluator:
    """Evaluates ordered predicate rules against a dict of facts."""

    def first_match(self, rules: Sequence[R], facts: dict[str, Any]) -> R | None:
        """Return the first rule whose ``when`` predicates are all true.

        Predicates within a rule are AND-ed.  An empty ``when`` list always
        matches.
        """
        for rule in rules:
            if all(self.eval_predicate(pred, facts) for pred in rule.when):
                return rule
        return None

    # ------------------------------------------------------------------
    # Predicate evaluation
    # ------------------------------------------------------------------

    def eval_predicate(self, pred: Predicate, facts: dict[str, Any]) -> bool:
        """Evaluate a single predicate against the facts dict.

        A fact that is missing (or ``None``) never satisfies a predicate.
        """
        fact = facts.get(pred.qid)
        if fact is None:
            return False
        return self._compare(pred.op, fact, pred.value, ignore_case=pred.ignore_case)

    @staticmethod
    def _compare(op: str, fact: Any, value: Any, *, ignore_case: bool = False) -> bool:
        """Apply an operator to a fact and an expected value."""
        if ignore_case:
            fact = str(fact).lower()
            if isinstance(value, list):
                value = [str(v).lower() for v in value]
            else:
                value = str(value).lower()

        if op == "eq":
            return fact == value

        if op == "ne":
            return fact != value

        if op == "contains":
            return str(value) in str(fact)

        if op == "contains_any":
            # value is a list of keywords; true if any is a substring of the fact
            fact_str = str(fact)
            return any(str(v) in fact_str for v in value)

        logger.warning("Unknown predicate operator: %s", op)
        return False
