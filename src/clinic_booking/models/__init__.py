"""Public model re-exports for clinic_booking.

Consumers should import from ``clinic_booking.models`` rather than
reaching into sub-modules directly.
"""

# --- Answers / recommendation ---
from clinic_booking.models.answers import Answer, AnswerSet
from clinic_booking.models.recommendation import Recommendation, Urgency

# --- Booking ---
from clinic_booking.models.booking import BookingDraft, PaymentMethod, Prefill

# --- Rules ---
from clinic_booking.models.rules import (
    ConsultationQuestion,
    DoctorAssignment,
    Predicate,
    RecommendationRule,
    RecommendationRuleset,
    ServiceRule,
    ServiceRuleset,
)

# --- Schema / constants ---
from clinic_booking.models.schema import DoctorProfile, ServiceEntry, UrgencyLevel

# --- Step / view ---
from clinic_booking.models.step import (
    AppointmentView,
    BookingResult,
    CompletionResult,
    ConsultationView,
    QuestionPayload,
    StepValidation,
    TransitionResult,
)

__all__ = [
    # Answers / recommendation
    "Answer",
    "AnswerSet",
    "Recommendation",
    "Urgency",
    # Booking
    "BookingDraft",
    "PaymentMethod",
    "Prefill",
    # Rules
    "ConsultationQuestion",
    "DoctorAssignment",
    "Predicate",
    "RecommendationRule",
    "RecommendationRuleset",
    "ServiceRule",
    "ServiceRuleset",
    # Schema
    "DoctorProfile",
    "ServiceEntry",
    "UrgencyLevel",
    # Step / view
    "AppointmentView",
    "BookingResult",
    "CompletionResult",
    "ConsultationView",
    "QuestionPayload",
    "StepValidation",
    "TransitionResult",
]
