"""Data models for the booking engine."""

from .candidate import CandidateBooking
from .reservation import RentalType, Reservation, Resource

__all__ = ["CandidateBooking", "RentalType", "Reservation", "Resource"]
