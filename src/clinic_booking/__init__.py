"""clinic_booking — Rule-based dental consultation and appointment booking SDK.

Public API:
    ConsultationWizard — four-step yes/no triage questionnaire
    AppointmentWizard  — four-step booking form with per-step gates
    BookingOrchestrator — page-level wiring between the two wizards
    CatalogStore       — loads the YAML catalog and rules into typed models
    recommend          — answers -> Recommendation (first matching rule wins)
    resolve_service    — Recommendation -> bookable service title
    resolve_doctor     — service title -> default doctor

Hand-off interface:
    BookingHandoff        — ABC receiving confirmed bookings
    LoggingBookingHandoff — default implementation that logs them
"""

from clinic_booking.appointment import AppointmentWizard
from clinic_booking.catalog import CatalogStore, default_store
from clinic_booking.consultation import ConsultationWizard
from clinic_booking.interfaces import BookingHandoff, LoggingBookingHandoff
from clinic_booking.models import (
    Answer,
    AnswerSet,
    AppointmentView,
    BookingDraft,
    BookingResult,
    CompletionResult,
    ConsultationView,
    PaymentMethod,
    Prefill,
    Recommendation,
    StepValidation,
    TransitionResult,
    Urgency,
)
from clinic_booking.orchestrator import ActiveOverlay, BookingOrchestrator, OverlayState
from clinic_booking.recommendation import recommend
from clinic_booking.resolver import resolve_doctor, resolve_service

__all__ = [
    # Wizards & orchestration
    "AppointmentWizard",
    "ConsultationWizard",
    "BookingOrchestrator",
    "ActiveOverlay",
    "OverlayState",
    # Store
    "CatalogStore",
    "default_store",
    # Rules
    "recommend",
    "resolve_doctor",
    "resolve_service",
    # Hand-off
    "BookingHandoff",
    "LoggingBookingHandoff",
    # Models
    "Answer",
    "AnswerSet",
    "AppointmentView",
    "BookingDraft",
    "BookingResult",
    "CompletionResult",
    "ConsultationView",
    "PaymentMethod",
    "Prefill",
    "Recommendation",
    "StepValidation",
    "TransitionResult",
    "Urgency",
]
