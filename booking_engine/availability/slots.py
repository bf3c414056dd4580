"""Free-slot resolver: the complement of a day's booked intervals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from booking_engine.models import Reservation

from .coverage import booked_intervals
from .intervals import Interval, day_bounds, minutes_into_day

log = logging.getLogger("booking_engine.slots")


@dataclass(frozen=True)
class FreeSlot:
    """A free window inside a single calendar day."""

    day: date
    start: datetime
    end: datetime

    @property
    def interval(self) -> Interval:
        return Interval(start=self.start, end=self.end)

    @property
    def start_minute(self) -> float:
        return minutes_into_day(self.start, self.day)

    @property
    def end_minute(self) -> float:
        return minutes_into_day(self.end, self.day)

    @property
    def reaches_midnight(self) -> bool:
        return self.end == day_bounds(self.day).end


def free_slots(
    day: date,
    reservations: Iterable[Reservation],
    excluded_reservation_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list[FreeSlot]:
    """Return the free windows of ``day`` in chronological order.

    The booked intervals are swept from midnight; every gap between them
    becomes a slot, and whatever is left after the last booking runs to
    the next midnight.  When ``now`` falls on ``day`` the slots are
    trimmed so that time already past is never offered.
    """
    bounds = day_bounds(day)
    booked = booked_intervals(day, reservations, excluded_reservation_id)

    slots: list[FreeSlot] = []
    cursor = bounds.start
    for interval in booked:
        if interval.start > cursor:
            slots.append(FreeSlot(day=day, start=cursor, end=interval.start))
        cursor = max(cursor, interval.end)

    # Trailing free time after last booking
    if cursor < bounds.end:
        slots.append(FreeSlot(day=day, start=cursor, end=bounds.end))

    if now is not None and now.date() == day:
        slots = _clip_to_now(slots, now)

    log.debug("%s: %d free slot(s)", day.isoformat(), len(slots))
    return slots


def _clip_to_now(slots: list[FreeSlot], now: datetime) -> list[FreeSlot]:
    clipped: list[FreeSlot] = []
    for slot in slots:
        if slot.end <= now:
            continue
        if slot.start < now:
            slot = FreeSlot(day=slot.day, start=now, end=slot.end)
        clipped.append(slot)
    return clipped


def format_slot(slot: FreeSlot) -> tuple[str, str]:
    """Render a slot as ``("HH:MM", "HH:MM")``; the next midnight is ``"24:00"``."""
    start = slot.start.strftime("%H:%M")
    end = "24:00" if slot.reaches_midnight else slot.end.strftime("%H:%M")
    return start, end
