"""Rental availability and booking engine.

Pure, synchronous helpers that answer "is this day free?", "from which
times can a stay start?" and "is this booking valid, and what does it
cost?" for a single property and a snapshot of its reservations.
"""

from booking_engine.availability.feasibility import bookable_slots, can_accumulate_stay
from booking_engine.availability.predicate import DayStatus, day_status, is_date_available
from booking_engine.availability.slots import FreeSlot, free_slots
from booking_engine.booking.validator import BookingResult, ErrorCode, validate_and_price
from booking_engine.models import CandidateBooking, RentalType, Reservation, Resource

__all__ = [
    "BookingResult",
    "CandidateBooking",
    "DayStatus",
    "ErrorCode",
    "FreeSlot",
    "RentalType",
    "Reservation",
    "Resource",
    "bookable_slots",
    "can_accumulate_stay",
    "day_status",
    "free_slots",
    "is_date_available",
    "validate_and_price",
]
