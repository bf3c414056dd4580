"""Contiguous-stay feasibility: can a stay of the minimum length start here?

A guest starting at instant ``T`` needs ``min_stay`` of uninterrupted free
time, which may run across midnight into the following days.  The walk
moves forward one day at a time, adding the free slot that contains the
cursor, until either the minimum is reached or a booking (or a real gap
before midnight) breaks the run.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from booking_engine.config import Settings, settings as default_settings
from booking_engine.models import Reservation

from .intervals import ONE_DAY, day_bounds
from .slots import FreeSlot, free_slots

log = logging.getLogger("booking_engine.feasibility")


def max_walk_days(config: Settings) -> int:
    """Upper bound on days visited by one feasibility walk."""
    return math.ceil(config.min_stay / ONE_DAY) + config.feasibility_extra_days


def can_accumulate_stay(
    start_at: datetime,
    reservations: Iterable[Reservation],
    excluded_reservation_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> bool:
    """Return True if ``min_stay`` of contiguous free time starts at ``start_at``.

    Args:
        start_at: Candidate check-in instant.
        reservations: Snapshot of the resource's reservations.
        excluded_reservation_id: Reservation being edited; never a conflict.
        settings: Overrides the module-level settings (min stay, tolerance).

    Returns:
        False as soon as the cursor lands inside a booking, or a free slot
        ends more than the boundary tolerance before midnight.
    """
    config = settings or default_settings
    reservations = list(reservations)
    min_stay = config.min_stay
    tolerance = config.boundary_tolerance

    accumulated = timedelta(0)
    cursor = start_at

    for _ in range(max_walk_days(config)):
        bounds = day_bounds(cursor.date())
        slot = _slot_containing(
            free_slots(cursor.date(), reservations, excluded_reservation_id), cursor
        )

        if slot is None:
            # A cursor within the tolerance of midnight rolls over to the next day
            if bounds.end - cursor <= tolerance:
                cursor = bounds.end
                continue
            log.debug("No free slot at %s", cursor.isoformat())
            return False

        accumulated += slot.end - cursor
        if accumulated >= min_stay:
            return True

        if bounds.end - slot.end > tolerance:
            log.debug(
                "Stay from %s broken at %s after %s",
                start_at.isoformat(),
                slot.end.isoformat(),
                accumulated,
            )
            return False

        cursor = bounds.end

    log.warning(
        "Feasibility walk from %s hit the %d-day cap", start_at.isoformat(), max_walk_days(config)
    )
    return False


def _slot_containing(slots: list[FreeSlot], instant: datetime) -> Optional[FreeSlot]:
    for slot in slots:
        if slot.start <= instant < slot.end:
            return slot
    return None


def bookable_slots(
    day: date,
    reservations: Iterable[Reservation],
    now: datetime,
    excluded_reservation_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> list[FreeSlot]:
    """Free slots of ``day`` from whose start a full minimum stay fits.

    Days before ``now`` have no bookable slots; today's slots start no
    earlier than ``now``.
    """
    if day < now.date():
        return []
    reservations = list(reservations)
    return [
        slot
        for slot in free_slots(day, reservations, excluded_reservation_id, now=now)
        if can_accumulate_stay(slot.start, reservations, excluded_reservation_id, settings)
    ]
