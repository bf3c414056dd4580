"""Day coverage: which part of a calendar day is already reserved."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from booking_engine.models import Reservation

from .intervals import (
    MINUTES_PER_DAY,
    Interval,
    clip_to_day,
    day_bounds,
    minutes_into_day,
    overlaps,
    sort_intervals,
)

log = logging.getLogger("booking_engine.coverage")


@dataclass(frozen=True)
class CoverageBand:
    """One reserved band of a day, as percentages of the day for rendering."""

    reservation_id: str
    start_percent: float
    end_percent: float


def reservation_interval(reservation: Reservation) -> Interval:
    return Interval(start=reservation.start, end=reservation.end)


def active_reservations(
    reservations: Iterable[Reservation],
    excluded_reservation_id: Optional[str] = None,
) -> list[Reservation]:
    """Drop the reservation being edited, keep everything else."""
    if excluded_reservation_id is None:
        return list(reservations)
    return [r for r in reservations if r.id != excluded_reservation_id]


def reservations_on_day(
    day: date,
    reservations: Iterable[Reservation],
    excluded_reservation_id: Optional[str] = None,
) -> list[Reservation]:
    """Reservations whose raw interval overlaps any part of ``day``."""
    bounds = day_bounds(day)
    return [
        r
        for r in active_reservations(reservations, excluded_reservation_id)
        if overlaps(reservation_interval(r), bounds)
    ]


def booked_intervals(
    day: date,
    reservations: Iterable[Reservation],
    excluded_reservation_id: Optional[str] = None,
) -> list[Interval]:
    """Reserved sub-intervals of ``day``, clipped to the day and sorted by start.

    Overlapping reservations are kept as separate intervals; the free-slot
    sweep copes with them.
    """
    clipped: list[Interval] = []
    for reservation in reservations_on_day(day, reservations, excluded_reservation_id):
        interval = clip_to_day(reservation_interval(reservation), day)
        if interval is not None:
            clipped.append(interval)
    return sort_intervals(clipped)


def day_coverage(
    day: date,
    reservations: Iterable[Reservation],
    excluded_reservation_id: Optional[str] = None,
) -> list[CoverageBand]:
    """Express each reservation's share of ``day`` as start/end percentages."""
    bands: list[CoverageBand] = []
    for reservation in reservations_on_day(day, reservations, excluded_reservation_id):
        interval = clip_to_day(reservation_interval(reservation), day)
        if interval is None:
            continue
        bands.append(
            CoverageBand(
                reservation_id=reservation.id,
                start_percent=minutes_into_day(interval.start, day) / MINUTES_PER_DAY * 100,
                end_percent=minutes_into_day(interval.end, day) / MINUTES_PER_DAY * 100,
            )
        )
    bands.sort(key=lambda b: (b.start_percent, b.end_percent))
    log.debug("Coverage for %s: %d band(s)", day.isoformat(), len(bands))
    return bands
