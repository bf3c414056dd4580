"""Per-property rental overview: statuses, month filter, summary figures.

Also derives an edit candidate from an existing reservation, so the
booking form can be pre-filled and the reservation excluded from its own
conflict checks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional

from booking_engine.availability.intervals import ONE_DAY, add_months
from booking_engine.booking.pricing import months_between, to_money
from booking_engine.config import Settings, settings as default_settings
from booking_engine.models import CandidateBooking, RentalType, Reservation


class RentalStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RentalSummary:
    total_bookings: int
    total_revenue: Decimal
    active_bookings: int
    upcoming_bookings: int


@dataclass(frozen=True)
class DurationInfo:
    value: float
    unit: str  # "day", "days", "month" or "months"

    @property
    def display(self) -> str:
        value = int(self.value) if float(self.value).is_integer() else self.value
        return f"{value} {self.unit}"


def rental_status(reservation: Reservation, now: datetime) -> RentalStatus:
    if now < reservation.start:
        return RentalStatus.UPCOMING
    if reservation.start <= now <= reservation.end:
        return RentalStatus.ACTIVE
    return RentalStatus.COMPLETED


def reservations_in_month(reservations: Iterable[Reservation], month: date) -> list[Reservation]:
    """Reservations that start, end, or span the calendar month of ``month``."""
    month_start = month.replace(day=1)
    month_end = add_months(month_start, 1) - ONE_DAY

    def _touches(reservation: Reservation) -> bool:
        start = reservation.start.date()
        end = reservation.end.date()
        return (
            month_start <= start <= month_end
            or month_start <= end <= month_end
            or (start < month_start and end > month_end)
        )

    return [r for r in reservations if _touches(r)]


def summarize(reservations: Iterable[Reservation], now: datetime) -> RentalSummary:
    reservations = list(reservations)
    revenue = sum((r.price for r in reservations if r.price is not None), Decimal("0"))
    return RentalSummary(
        total_bookings=len(reservations),
        total_revenue=to_money(revenue),
        active_bookings=sum(
            1 for r in reservations if rental_status(r, now) is RentalStatus.ACTIVE
        ),
        upcoming_bookings=sum(1 for r in reservations if r.start > now),
    )


def infer_rental_type(
    reservation: Reservation, settings: Optional[Settings] = None
) -> RentalType:
    """The reservation's own type, or a guess from its length when it has none."""
    if reservation.type is not None:
        return reservation.type
    config = settings or default_settings
    days = (reservation.end - reservation.start).days
    return RentalType.MONTHLY if days > config.monthly_inference_days else RentalType.DAILY


def duration_info(reservation: Reservation, settings: Optional[Settings] = None) -> DurationInfo:
    if infer_rental_type(reservation, settings) is RentalType.MONTHLY:
        months = round(months_between(reservation.start, reservation.end), 1)
        return DurationInfo(value=months, unit="month" if months == 1 else "months")
    days = max(1, (reservation.end - reservation.start).days)
    return DurationInfo(value=days, unit="day" if days == 1 else "days")


def candidate_from_reservation(
    reservation: Reservation,
    settings: Optional[Settings] = None,
    **renter: Any,
) -> CandidateBooking:
    """Pre-fill an edit of ``reservation``; renter fields pass through as keywords."""
    rental_type = infer_rental_type(reservation, settings)
    start = reservation.start.date()
    if rental_type is RentalType.MONTHLY:
        months = math.ceil(months_between(reservation.start, reservation.end))
        return CandidateBooking(
            type=rental_type,
            start=start,
            end=add_months(start, months),
            months=months,
            excluded_reservation_id=reservation.id,
            **renter,
        )
    return CandidateBooking(
        type=rental_type,
        start=start,
        end=reservation.end.date(),
        excluded_reservation_id=reservation.id,
        **renter,
    )
