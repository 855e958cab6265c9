"""Booking constants shared across the SDK.

These values are referenced by the wizards, the resolver and the catalog
store.  They mirror conventions encoded in the YAML files under ``v1/``.

A couple of constants can be overridden via environment variables so that
deployments can relabel the fallback doctor or point at another catalog
without code changes.
"""

import os

# Both wizards are linear four-step flows.
FIRST_STEP = 1
STEP_COUNT = 4

# Directory holding const/ and rules/ YAML.  None -> the packaged v1/ catalog.
# Overridable via BOOKING_CATALOG_DIR env var.
CATALOG_DIR = os.getenv("BOOKING_CATALOG_DIR") or None

# Sentinel doctor used when no assignment matches a service.
# Overridable via ANY_AVAILABLE_DOCTOR env var.
ANY_AVAILABLE_DOCTOR = os.getenv("ANY_AVAILABLE_DOCTOR", "Any available doctor")

# Urgency IDs ordered from least to most severe.
URGENCY_ORDER: list[str] = ["routine", "soon", "urgent"]

# Consultation step -> AnswerSet field written by that step.
CONSULTATION_STEP_FIELDS: dict[int, str] = {
    1: "pain_present",
    2: "gums_bleed",
    3: "swelling_present",
    4: "cosmetic_interest",
}

# Human-readable appointment step labels for the step indicator.
APPOINTMENT_STEP_NAMES: dict[int, str] = {
    1: "Service",
    2: "Date & Time",
    3: "Details",
    4: "Payment",
}

# Draft fields that must be non-empty before leaving each appointment step.
# Step 4 has no forward gate; confirm() checks the payment method instead.
APPOINTMENT_REQUIRED_FIELDS: dict[int, tuple[str, ...]] = {
    1: ("service", "doctor"),
    2: ("date", "time"),
    3: ("first_name", "last_name", "email", "phone"),
    4: (),
}

# Draft fields a caller may write through set_field().
APPOINTMENT_EDITABLE_FIELDS: frozenset[str] = frozenset({
    "service",
    "doctor",
    "date",
    "time",
    "first_name",
    "last_name",
    "email",
    "phone",
    "notes",
    "payment",
})
