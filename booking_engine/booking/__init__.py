"""Booking validation and pricing."""

from .pricing import BookingQuote, quote_candidate
from .validator import BookingError, BookingResult, ErrorCode, validate_and_price

__all__ = [
    "BookingError",
    "BookingQuote",
    "BookingResult",
    "ErrorCode",
    "quote_candidate",
    "validate_and_price",
]
