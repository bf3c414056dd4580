"""Primitive operations on half-open ``[start, end)`` time intervals.

All functions are pure: they never mutate their arguments and always
return new objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator, Optional

from dateutil.relativedelta import relativedelta

MINUTES_PER_DAY = 24 * 60
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class Interval:
    """A window of time between two naive local instants."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


def day_start(day: date) -> datetime:
    """Local midnight at the beginning of ``day``."""
    return datetime.combine(day, time.min)


def day_bounds(day: date) -> Interval:
    """The whole calendar day as ``[00:00, next 00:00)``."""
    start = day_start(day)
    return Interval(start=start, end=start + ONE_DAY)


def overlaps(a: Interval, b: Interval) -> bool:
    """True iff the intervals share at least one instant.

    Touching endpoints (10:00-11:00 and 11:00-12:00) do not overlap.
    """
    return a.start < b.end and b.start < a.end


def contains(outer: Interval, inner: Interval) -> bool:
    return outer.start <= inner.start and inner.end <= outer.end


def contains_instant(interval: Interval, instant: datetime) -> bool:
    return interval.start <= instant < interval.end


def clip(interval: Interval, window: Interval) -> Optional[Interval]:
    """Intersect ``interval`` with ``window``; None when nothing is left."""
    clipped = Interval(
        start=max(interval.start, window.start),
        end=min(interval.end, window.end),
    )
    if clipped.is_empty:
        return None
    return clipped


def clip_to_day(interval: Interval, day: date) -> Optional[Interval]:
    return clip(interval, day_bounds(day))


def sort_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    return sorted(intervals, key=lambda i: (i.start, i.end))


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Collapse overlapping or touching intervals into a sorted disjoint list."""
    merged: list[Interval] = []
    for interval in sort_intervals(intervals):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Interval(start=last.start, end=max(last.end, interval.end))
        else:
            merged.append(interval)
    return merged


def minutes_into_day(instant: datetime, day: date) -> float:
    """Offset of ``instant`` from the start of ``day`` in (fractional) minutes."""
    return (instant - day_start(day)) / timedelta(minutes=1)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in ``[start, end)``."""
    current = start
    while current < end:
        yield current
        current += ONE_DAY


def add_months(day: date, months: int) -> date:
    """Calendar-month arithmetic; Jan 31 + 1 month is the last day of February."""
    return day + relativedelta(months=months)
