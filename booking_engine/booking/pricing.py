"""Price and duration arithmetic for daily and monthly rentals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from dateutil.relativedelta import relativedelta

from booking_engine.availability.intervals import add_months
from booking_engine.models import CandidateBooking, RentalType, Resource

MONEY_PLACES = Decimal("0.01")


@dataclass(slots=True)
class BookingQuote:
    """Accepted booking: what it costs and when it really ends."""

    rental_type: RentalType
    start: date
    normalized_end: date
    units: int  # nights for DAILY, months for MONTHLY
    unit_rate: Decimal
    price: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Serialize the quote to plain types for responses."""
        return {
            "rental_type": self.rental_type.value,
            "start": self.start.isoformat(),
            "normalized_end": self.normalized_end.isoformat(),
            "units": self.units,
            "unit_rate": _to_str(self.unit_rate),
            "price": _to_str(self.price),
        }


def to_money(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{to_money(value):.2f}"


def nights_between(start: date, end: date) -> int:
    """Calendar nights from check-in to check-out; the check-out day is free."""
    return (end - start).days


def priced_days(start: date, end: date) -> int:
    """Nights charged for a daily stay, never less than one."""
    return max(1, nights_between(start, end))


def daily_price(rate: Decimal, start: date, end: date) -> Decimal:
    return to_money(rate * priced_days(start, end))


def monthly_price(rate: Decimal, months: int) -> Decimal:
    return to_money(rate * months)


def months_between(start: date | datetime, end: date | datetime) -> float:
    """Fractional calendar months from ``start`` to ``end``.

    Whole months are counted with calendar arithmetic; the remainder is the
    share of the following month that has elapsed.
    """
    if end < start:
        return -months_between(end, start)
    whole = (end.year - start.year) * 12 + (end.month - start.month)
    anchor = start + relativedelta(months=whole)
    if anchor > end:
        whole -= 1
        anchor = start + relativedelta(months=whole)
    following = start + relativedelta(months=whole + 1)
    span = following - anchor
    return whole + (end - anchor) / span


def normalized_end(candidate: CandidateBooking) -> date | None:
    """Check-out day of a well-formed candidate, or None when it lacks dates."""
    if candidate.start is None:
        return None
    if candidate.type is RentalType.MONTHLY:
        if not candidate.months:
            return None
        return add_months(candidate.start, candidate.months)
    return candidate.end


def quote_candidate(candidate: CandidateBooking, resource: Resource) -> BookingQuote:
    """Price a structurally valid candidate.

    Callers are expected to have validated the candidate first; missing
    dates here are a programming error.
    """
    end = normalized_end(candidate)
    if candidate.start is None or end is None:
        raise ValueError("Cannot quote a candidate without start and end dates")

    rate = resource.rate_for(candidate.type)
    if candidate.type is RentalType.MONTHLY:
        units = int(candidate.months or 0)
        price = monthly_price(rate, units)
    else:
        units = priced_days(candidate.start, end)
        price = daily_price(rate, candidate.start, end)

    return BookingQuote(
        rental_type=candidate.type,
        start=candidate.start,
        normalized_end=end,
        units=units,
        unit_rate=to_money(rate),
        price=price,
    )
