"""Pydantic model for an in-progress booking request."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel

from .reservation import RentalType


class CandidateBooking(BaseModel):
    """Data collected from the booking form, never persisted by the engine.

    DAILY bookings use ``start``/``end`` (check-in and check-out days);
    MONTHLY bookings use ``start`` and ``months``.  When an existing
    reservation is being edited its id goes in ``excluded_reservation_id``
    so it never conflicts with itself.
    """

    type: RentalType = RentalType.DAILY
    start: Optional[date] = None
    end: Optional[date] = None
    months: Optional[int] = None
    excluded_reservation_id: Optional[str] = None

    # Renter details
    name: str = ""
    email: str = ""
    phone: str = ""
    nic_number: str = ""
    passport: str = ""
