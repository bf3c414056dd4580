"""Availability predicate: the per-day answer the calendar asks for.

A day is *booked* when a reservation occupies it as a night, from its
check-in day up to, but not including, its check-out day.  This lets a
check-out and the next check-in share a calendar day.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional

from booking_engine.models import CandidateBooking, RentalType, Reservation, Resource

from .coverage import active_reservations
from .intervals import ONE_DAY, add_months, iter_days

log = logging.getLogger("booking_engine.predicate")


class DayStatus(str, Enum):
    """How a calendar cell should be presented to the person booking."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    IN_RANGE = "in_range"
    EDITING = "editing"
    AVAILABLE = "available"
    BOOKED = "booked"
    UNAVAILABLE = "unavailable"

    @property
    def selectable(self) -> bool:
        return self in (DayStatus.AVAILABLE, DayStatus.EDITING)


def _as_day(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def occupies_day(reservation: Reservation, day: date) -> bool:
    """True if ``day`` is one of the reservation's nights (or its only day)."""
    start_day = reservation.start.date()
    end_day = reservation.end.date()
    return day == start_day or start_day < day < end_day


def is_date_booked(
    day: date,
    reservations: Iterable[Reservation],
    excluded_reservation_id: Optional[str] = None,
) -> bool:
    day = _as_day(day)
    return any(
        occupies_day(r, day)
        for r in active_reservations(reservations, excluded_reservation_id)
    )


def editing_reservation(
    resource: Resource, candidate: Optional[CandidateBooking]
) -> Optional[Reservation]:
    if candidate is None or candidate.excluded_reservation_id is None:
        return None
    for reservation in resource.reservations:
        if reservation.id == candidate.excluded_reservation_id:
            return reservation
    return None


def is_in_editing_range(
    day: date, resource: Resource, candidate: Optional[CandidateBooking]
) -> bool:
    reservation = editing_reservation(resource, candidate)
    if reservation is None:
        return False
    return occupies_day(reservation, _as_day(day))


def is_date_available(
    day: date,
    resource: Resource,
    candidate: Optional[CandidateBooking] = None,
    *,
    today: date,
    min_date: Optional[date] = None,
) -> bool:
    """Return True if ``day`` may be picked for the candidate booking.

    Rules, in order:
      1. Days before ``today`` are never available.
      2. Days before ``min_date`` (e.g. "not before tomorrow") are not available.
      3. DAILY with a check-in already chosen: ``day`` is evaluated as a
         check-out day.  It must not precede check-in and every night in
         between must be free.
      4. Otherwise ``day`` must not be booked.

    The reservation named by ``candidate.excluded_reservation_id`` never
    counts as a booking.
    """
    candidate = candidate or CandidateBooking()
    day = _as_day(day)
    today = _as_day(today)
    excluded = candidate.excluded_reservation_id

    if day < today:
        return False

    if min_date is not None and day < _as_day(min_date):
        return False

    if candidate.type is RentalType.DAILY and candidate.start is not None:
        start = candidate.start
        if day < start:
            return False
        for night in iter_days(start + ONE_DAY, day):
            if is_date_booked(night, resource.reservations, excluded):
                log.debug(
                    "Check-out %s rejected: %s is booked", day.isoformat(), night.isoformat()
                )
                return False
        return True

    return not is_date_booked(day, resource.reservations, excluded)


def candidate_end(candidate: CandidateBooking) -> Optional[date]:
    """Check-out day for DAILY, ``start + months`` for MONTHLY."""
    if candidate.type is RentalType.MONTHLY:
        if candidate.start is None or not candidate.months:
            return candidate.end
        return add_months(candidate.start, candidate.months)
    return candidate.end


def day_status(
    day: date,
    resource: Resource,
    candidate: Optional[CandidateBooking] = None,
    *,
    today: date,
    min_date: Optional[date] = None,
) -> DayStatus:
    """Classify a calendar cell; the current selection takes precedence."""
    candidate = candidate or CandidateBooking()
    day = _as_day(day)
    start = candidate.start
    end = candidate_end(candidate)

    if start is not None and day == start:
        return DayStatus.CHECK_IN
    if end is not None and day == end:
        return DayStatus.CHECK_OUT
    if start is not None and end is not None and start < day < end:
        return DayStatus.IN_RANGE
    if is_in_editing_range(day, resource, candidate):
        return DayStatus.EDITING
    if is_date_available(day, resource, candidate, today=today, min_date=min_date):
        return DayStatus.AVAILABLE
    if is_date_booked(day, resource.reservations, candidate.excluded_reservation_id):
        return DayStatus.BOOKED
    return DayStatus.UNAVAILABLE
