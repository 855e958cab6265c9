"""Pydantic models for booking constants and reference data.

These models mirror the YAML files in ``v1/const/``:

  - ServiceEntry: a bookable service from services.yaml
  - DoctorProfile: a roster entry from doctors.yaml
  - UrgencyLevel: display data for an urgency tier from urgency_levels.yaml
"""

from typing import List

from pydantic import BaseModel


class ServiceEntry(BaseModel):
    """Bookable service from services.yaml."""

    title: str
    description: str


class DoctorProfile(BaseModel):
    """Doctor from doctors.yaml.

    ``services`` lists the service titles the doctor usually handles; it is
    shown on the profile card and does not constrain booking.
    """

    name: str
    role: str
    experience_years: int
    image: str | None = None
    schedule: str | None = None
    bio: str | None = None
    specialties: List[str] = []
    services: List[str] = []


class UrgencyLevel(BaseModel):
    """Urgency tier display data from urgency_levels.yaml."""

    id: str
    name: str
    description: str
