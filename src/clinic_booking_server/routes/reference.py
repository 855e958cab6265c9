"""Reference data endpoints — services, doctors, time slots, urgency levels.

Read-only endpoints exposing the constants loaded from ``v1/const/``.
They don't require a visitor id since the data is public.
"""

from fastapi import APIRouter, Depends

from clinic_booking.catalog import CatalogStore
from clinic_booking.models.schema import DoctorProfile, ServiceEntry, UrgencyLevel

from clinic_booking_server.dependencies import get_store

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/services")
def list_services(store: CatalogStore = Depends(get_store)) -> list[ServiceEntry]:
    """Return the bookable services in catalog order."""
    return list(store.services.values())


@router.get("/doctors")
def list_doctors(store: CatalogStore = Depends(get_store)) -> list[DoctorProfile]:
    """Return the doctor roster."""
    return list(store.doctors.values())


@router.get("/doctors/{name}")
def get_doctor(name: str, store: CatalogStore = Depends(get_store)) -> DoctorProfile:
    """Return one doctor profile; unknown names map to 404."""
    return store.get_doctor(name)


@router.get("/time-slots")
def list_time_slots(
    date: str | None = None,
    store: CatalogStore = Depends(get_store),
) -> list[str]:
    """Return the daily time slots.  The list is the same for every date."""
    if date:
        return store.time_slots_for(date)
    return list(store.time_slots)


@router.get("/urgency-levels")
def list_urgency_levels(store: CatalogStore = Depends(get_store)) -> list[UrgencyLevel]:
    """Return the urgency tiers a recommendation can carry."""
    return list(store.urgency_levels.values())
