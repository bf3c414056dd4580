"""Calendar date-range selection.

Each click on a calendar cell turns the current ``(start, end)`` selection
into a new one.  Clicks on days that cannot be picked are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from booking_engine.availability.intervals import add_months
from booking_engine.availability.predicate import is_date_available
from booking_engine.models import CandidateBooking, RentalType, Resource

log = logging.getLogger("booking_engine.selection")


@dataclass(frozen=True)
class DateSelection:
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


def select_date(
    selection: DateSelection,
    day: date,
    resource: Resource,
    candidate: CandidateBooking,
    *,
    today: date,
    min_date: Optional[date] = None,
) -> DateSelection:
    """Apply one click on ``day`` and return the resulting selection.

    DAILY:
      * no check-in yet            -> ``day`` becomes check-in
      * click on check-in          -> selection cleared
      * click on check-out         -> check-out cleared
      * click before check-in      -> selection restarts at ``day``
      * any later day              -> ``day`` becomes check-out
    MONTHLY:
      * click on the start         -> selection cleared
      * any other day              -> new start, end = start + months
    """
    restarting = (
        candidate.type is RentalType.DAILY
        and selection.start is not None
        and day < selection.start
    )
    probe = candidate.model_copy(
        update={
            "start": None if restarting else selection.start,
            "end": selection.end,
        }
    )
    if not is_date_available(day, resource, probe, today=today, min_date=min_date):
        log.debug("Ignoring click on unavailable day %s", day.isoformat())
        return selection

    if candidate.type is RentalType.DAILY:
        if selection.start is None or restarting:
            return DateSelection(start=day)
        if day == selection.start:
            return DateSelection()
        if day == selection.end:
            return DateSelection(start=selection.start)
        return DateSelection(start=selection.start, end=day)

    if selection.start is not None and day == selection.start:
        return DateSelection()
    if candidate.months:
        return DateSelection(start=day, end=add_months(day, candidate.months))
    return DateSelection(start=day)
