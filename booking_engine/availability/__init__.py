"""Availability computations: intervals, day coverage, free slots, feasibility."""

from .coverage import booked_intervals, day_coverage
from .feasibility import bookable_slots, can_accumulate_stay
from .intervals import Interval, clip_to_day, overlaps
from .predicate import DayStatus, day_status, is_date_available, is_date_booked
from .slots import FreeSlot, free_slots

__all__ = [
    "DayStatus",
    "FreeSlot",
    "Interval",
    "bookable_slots",
    "booked_intervals",
    "can_accumulate_stay",
    "clip_to_day",
    "day_coverage",
    "day_status",
    "free_slots",
    "is_date_available",
    "is_date_booked",
    "overlaps",
]
