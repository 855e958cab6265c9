"""clinic_booking_server — FastAPI adapter for the clinic booking SDK.

Exposes the consultation and appointment wizards to a website front end.
Each visitor gets their own in-memory :class:`BookingOrchestrator`; nothing
is persisted and confirmed bookings go to the configured hand-off.
"""
