"""Abstract interface for the booking hand-off.

A confirmed booking leaves the engine through a :class:`BookingHandoff`.
Whatever sits behind it (a booking backend, an email notification, a
CRM) is outside this package; the SDK only ships
:class:`LoggingBookingHandoff`, which records the booking in the log.

Typical integration flow::

    orchestrator = BookingOrchestrator(store, handoff=MyBackendHandoff(...))
    # ... patient walks through the appointment wizard ...
    orchestrator.appointment.confirm()   # -> handoff.submit(draft)
"""

import logging
from abc import ABC, abstractmethod

from clinic_booking.models.booking import BookingDraft

logger = logging.getLogger(__name__)


class BookingHandoff(ABC):
    """Receives each confirmed booking draft.

    Implementations own their failure modes; the wizard has already reset
    by the time :meth:`submit` is called.
    """

    @abstractmethod
    def submit(self, booking: BookingDraft) -> None:
        """Hand a confirmed booking over to the outside world."""
        ...


class LoggingBookingHandoff(BookingHandoff):
    """Logs every confirmed booking and keeps it in :attr:`submitted`."""

    def __init__(self) -> None:
        self.submitted: list[BookingDraft] = []

    def submit(self, booking: BookingDraft) -> None:
        self.submitted.append(booking)
        logger.info("Appointment booked successfully: %s", booking.model_dump(mode="json"))
