"""CatalogStore — loads the booking catalog and rules from ``v1/`` into typed models.

This is the single source of truth for reference data at runtime.  The
store is loaded once at startup and provides lookup helpers for the
wizards, the resolver and the HTTP adapter.

Usage::

    store = CatalogStore()          # defaults to the packaged v1/ directory
    store.load()                    # parse and cross-check all YAML files

    store.service_titles()          # ["Teeth Cleaning", ...]
    store.time_slots_for("2025-06-01")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from clinic_booking.constants import (
    ANY_AVAILABLE_DOCTOR,
    CATALOG_DIR,
    CONSULTATION_STEP_FIELDS,
    STEP_COUNT,
)
from clinic_booking.models.answers import AnswerSet
from clinic_booking.models.rules import (
    ConsultationQuestion,
    DoctorAssignment,
    RecommendationRuleset,
    ServiceRuleset,
)
from clinic_booking.models.schema import DoctorProfile, ServiceEntry, UrgencyLevel

logger = logging.getLogger(__name__)

# Packaged catalog, shipped as package data next to this module.
DEFAULT_CATALOG_DIR = Path(__file__).resolve().parent / "v1"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class CatalogStore:
    """Loads all YAML from the catalog directory and provides typed lookup.

    Attributes populated after :meth:`load`:

        services          — dict[title, ServiceEntry] in catalog order
        doctors           — dict[name, DoctorProfile] in roster order
        time_slots        — list[str], the fixed daily slot fixture
        urgency_levels    — dict[id, UrgencyLevel]
        questions         — dict[step, ConsultationQuestion]
        recommendation_rules — RecommendationRuleset
        service_rules     — ServiceRuleset
        doctor_assignment — DoctorAssignment
    """

    def __init__(self, catalog_dir: str | Path | None = None) -> None:
        if catalog_dir is None:
            catalog_dir = CATALOG_DIR or DEFAULT_CATALOG_DIR
        self._base = Path(catalog_dir)

        # Populated by load()
        self.services: dict[str, ServiceEntry] = {}
        self.doctors: dict[str, DoctorProfile] = {}
        self.time_slots: list[str] = []
        self.urgency_levels: dict[str, UrgencyLevel] = {}
        self.questions: dict[int, ConsultationQuestion] = {}
        self.recommendation_rules: RecommendationRuleset | None = None
        self.service_rules: ServiceRuleset | None = None
        self.doctor_assignment: DoctorAssignment | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse all YAML files under the catalog directory into typed models.

        Call this once at startup.  Raises ``FileNotFoundError`` if expected
        YAML files are missing and ``ValueError`` if the files disagree with
        each other (e.g. a rule resolving to a service outside the catalog).
        """
        self._load_constants()
        self._load_rules()
        self._validate()
        logger.info(
            "CatalogStore loaded: %d services, %d doctors, %d time slots, %d recommendation rules",
            len(self.services),
            len(self.doctors),
            len(self.time_slots),
            len(self.recommendation_rules.rules),
        )

    def _load_constants(self) -> None:
        """Load const/*.yaml into typed model dicts."""
        const_dir = self._base / "const"

        # Services: keyed by title
        for raw in load_yaml(const_dir / "services.yaml"):
            service = ServiceEntry(**raw)
            self.services[service.title] = service

        # Doctors: keyed by name
        for raw in load_yaml(const_dir / "doctors.yaml"):
            doctor = DoctorProfile(**raw)
            self.doctors[doctor.name] = doctor

        self.time_slots = [str(slot) for slot in load_yaml(const_dir / "time_slots.yaml")]

        # Urgency levels: keyed by id
        for raw in load_yaml(const_dir / "urgency_levels.yaml"):
            level = UrgencyLevel(**raw)
            self.urgency_levels[level.id] = level

    def _load_rules(self) -> None:
        """Load rules/*.yaml: questionnaire, recommendation and resolver rules."""
        rules_dir = self._base / "rules"

        for raw in load_yaml(rules_dir / "consultation.yaml"):
            question = ConsultationQuestion(**raw)
            self.questions[question.step] = question

        self.recommendation_rules = RecommendationRuleset(
            **load_yaml(rules_dir / "recommendation.yaml")
        )
        self.service_rules = ServiceRuleset(**load_yaml(rules_dir / "service_resolution.yaml"))
        self.doctor_assignment = DoctorAssignment(**load_yaml(rules_dir / "doctor_assignment.yaml"))

    def _validate(self) -> None:
        """Cross-check references between the loaded files."""
        if sorted(self.questions) != list(range(1, STEP_COUNT + 1)):
            raise ValueError(
                f"consultation.yaml must define steps 1-{STEP_COUNT}, got {sorted(self.questions)}"
            )
        answer_fields = set(AnswerSet.model_fields)
        for question in self.questions.values():
            if question.key not in answer_fields:
                raise ValueError(f"Consultation step {question.step} has unknown key '{question.key}'")
            expected = CONSULTATION_STEP_FIELDS[question.step]
            if question.key != expected:
                raise ValueError(
                    f"Consultation step {question.step} writes '{question.key}', expected '{expected}'"
                )

        # The resolver must never emit a service outside the catalog
        targets = [rule.then for rule in self.service_rules.rules] + [self.service_rules.default]
        for title in targets:
            if title not in self.services:
                raise ValueError(f"Service rule resolves to '{title}', which is not in the catalog")

        for service, doctor in self.doctor_assignment.assignments.items():
            if service not in self.services:
                raise ValueError(f"Doctor assignment references unknown service '{service}'")
            if doctor not in self.doctors:
                raise ValueError(f"Doctor assignment references unknown doctor '{doctor}'")

        produced = [rule.then.urgency for rule in self.recommendation_rules.rules]
        produced.append(self.recommendation_rules.default.urgency)
        for urgency in produced:
            if urgency.value not in self.urgency_levels:
                raise ValueError(f"Recommendation urgency '{urgency.value}' has no urgency level entry")

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def service_titles(self) -> list[str]:
        """Bookable service titles in catalog order."""
        return list(self.services)

    def doctor_names(self) -> list[str]:
        """Doctor names in roster order (without the fallback sentinel)."""
        return list(self.doctors)

    def get_service(self, title: str) -> ServiceEntry:
        """Look up a service by title.

        Raises:
            KeyError: if the title is not in the catalog.
        """
        return self.services[title]

    def get_doctor(self, name: str) -> DoctorProfile:
        """Look up a doctor profile by name.

        Raises:
            KeyError: if the doctor is not on the roster.
        """
        return self.doctors[name]

    def get_question(self, step: int) -> ConsultationQuestion:
        """Return the consultation question asked at ``step``.

        Raises:
            ValueError: if ``step`` is outside 1-4.
        """
        if step not in self.questions:
            raise ValueError(f"Invalid step: {step}")
        return self.questions[step]

    def time_slots_for(self, date: str) -> list[str]:
        """Return the bookable time slots for ``date``.

        The slot list is a static fixture and is identical for every date;
        no calendar availability is consulted.  A fresh list is returned so
        callers cannot mutate the fixture.
        """
        return list(self.time_slots)

    def is_known_doctor(self, name: str) -> bool:
        """True for roster doctors and for the fallback sentinel."""
        return name in self.doctors or name == ANY_AVAILABLE_DOCTOR


@lru_cache(maxsize=1)
def default_store() -> CatalogStore:
    """Return a process-wide store loaded from the default catalog directory."""
    store = CatalogStore()
    store.load()
    return store
