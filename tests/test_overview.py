"""Tests for the rental overview helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from booking_engine.config import Settings
from booking_engine.models import RentalType, Reservation
from booking_engine.overview import (
    RentalStatus,
    candidate_from_reservation,
    duration_info,
    infer_rental_type,
    rental_status,
    reservations_in_month,
    summarize,
)

NOW = datetime(2024, 3, 12, 10, 0)


def _res(rid, start, end, **kwargs):
    return Reservation(id=rid, resource_id="villa", start=start, end=end, **kwargs)


@pytest.fixture
def reservations():
    return [
        _res("past", datetime(2024, 2, 1), datetime(2024, 2, 5), price=Decimal("400")),
        _res("now", datetime(2024, 3, 10), datetime(2024, 3, 15), price=Decimal("500.50")),
        _res("soon", datetime(2024, 4, 28), datetime(2024, 5, 3)),
    ]


class TestStatus:
    def test_statuses(self, reservations):
        past, current, soon = reservations
        assert rental_status(past, NOW) is RentalStatus.COMPLETED
        assert rental_status(current, NOW) is RentalStatus.ACTIVE
        assert rental_status(soon, NOW) is RentalStatus.UPCOMING

    def test_summary(self, reservations):
        summary = summarize(reservations, NOW)
        assert summary.total_bookings == 3
        assert summary.total_revenue == Decimal("900.50")
        assert summary.active_bookings == 1
        assert summary.upcoming_bookings == 1

    def test_empty_summary(self):
        summary = summarize([], NOW)
        assert summary.total_bookings == 0
        assert summary.total_revenue == Decimal("0.00")


class TestMonthFilter:
    def test_spanning_and_edge_reservations(self, reservations):
        long_stay = _res("long", datetime(2024, 1, 20), datetime(2024, 4, 2))
        all_res = reservations + [long_stay]
        ids = [r.id for r in reservations_in_month(all_res, date(2024, 3, 17))]
        assert ids == ["now", "long"]
        ids = [r.id for r in reservations_in_month(all_res, date(2024, 5, 1))]
        assert ids == ["soon"]


class TestDuration:
    def test_explicit_type_wins(self):
        r = _res("x", datetime(2024, 1, 1), datetime(2024, 3, 1), type=RentalType.DAILY)
        assert infer_rental_type(r) is RentalType.DAILY

    def test_long_untyped_stay_is_monthly(self):
        r = _res("x", datetime(2024, 1, 1), datetime(2024, 3, 1))
        assert infer_rental_type(r) is RentalType.MONTHLY
        assert infer_rental_type(r, Settings(monthly_inference_days=90)) is RentalType.DAILY

    def test_daily_display(self):
        r = _res("x", datetime(2024, 3, 1), datetime(2024, 3, 4))
        assert duration_info(r).display == "3 days"
        single = _res("y", datetime(2024, 3, 1, 9), datetime(2024, 3, 1, 17))
        assert duration_info(single).display == "1 day"

    def test_monthly_display(self):
        r = _res("x", datetime(2024, 1, 1), datetime(2024, 3, 1), type=RentalType.MONTHLY)
        assert duration_info(r).display == "2 months"
        one = _res("y", datetime(2024, 1, 1), datetime(2024, 2, 1), type=RentalType.MONTHLY)
        assert duration_info(one).display == "1 month"


class TestEditCandidate:
    def test_daily(self):
        r = _res("r1", datetime(2024, 3, 10, 14), datetime(2024, 3, 15, 11))
        candidate = candidate_from_reservation(r, name="Jane Perera")
        assert candidate.type is RentalType.DAILY
        assert candidate.start == date(2024, 3, 10)
        assert candidate.end == date(2024, 3, 15)
        assert candidate.excluded_reservation_id == "r1"
        assert candidate.name == "Jane Perera"

    def test_monthly_rounds_up(self):
        r = _res("r2", datetime(2024, 1, 15), datetime(2024, 3, 20), type=RentalType.MONTHLY)
        candidate = candidate_from_reservation(r)
        assert candidate.months == 3
        assert candidate.end == date(2024, 4, 15)
