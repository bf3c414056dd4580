"""Tests for booking validation and submit-time conflict checks."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from booking_engine.booking import ErrorCode, validate_and_price
from booking_engine.booking.validator import redact_pii, unavailable_days
from booking_engine.config import Settings
from booking_engine.models import CandidateBooking, RentalType, Reservation, Resource

TODAY = date(2024, 3, 1)

RENTER = {
    "name": "Jane Perera",
    "email": "jane.perera@gmail.com",
    "phone": "+94 77 123 4567",
    "nic_number": "199012345678",
}


def _candidate(**kwargs):
    return CandidateBooking(**{**RENTER, **kwargs})


@pytest.fixture
def resource():
    return Resource(
        id="villa",
        daily_rate=Decimal("100"),
        daily_enabled=True,
        monthly_rate=Decimal("2500"),
        monthly_enabled=True,
        reservations=[
            Reservation(
                id="r1",
                resource_id="villa",
                start=datetime(2024, 3, 10),
                end=datetime(2024, 3, 15),
                type=RentalType.DAILY,
            )
        ],
    )


# ── Accepted bookings ────────────────────────────────────────────


class TestAccepted:
    def test_daily_booking_is_priced(self, resource):
        result = validate_and_price(
            _candidate(start=date(2024, 3, 1), end=date(2024, 3, 3)), resource, today=TODAY
        )
        assert result.ok
        assert result.quote.price == Decimal("200.00")
        assert result.to_dict()["errors"] == []

    def test_edit_does_not_conflict_with_itself(self, resource):
        candidate = _candidate(
            start=date(2024, 3, 10), end=date(2024, 3, 15), excluded_reservation_id="r1"
        )
        result = validate_and_price(candidate, resource, today=TODAY)
        assert result.ok
        assert result.quote.price == Decimal("500.00")

    def test_checkout_on_existing_checkin_day(self, resource):
        result = validate_and_price(
            _candidate(start=date(2024, 3, 5), end=date(2024, 3, 10)), resource, today=TODAY
        )
        assert result.ok

    def test_passport_is_enough(self, resource):
        candidate = _candidate(
            start=date(2024, 3, 1), end=date(2024, 3, 2), nic_number="", passport="N1234567"
        )
        assert validate_and_price(candidate, resource, today=TODAY).ok

    def test_monthly_booking(self, resource):
        candidate = _candidate(type=RentalType.MONTHLY, start=date(2024, 4, 1), months=3)
        result = validate_and_price(candidate, resource, today=TODAY)
        assert result.ok
        assert result.quote.normalized_end == date(2024, 7, 1)
        assert result.quote.price == Decimal("7500.00")


# ── Rejected bookings ────────────────────────────────────────────


class TestRejected:
    def test_end_equal_to_start(self, resource):
        result = validate_and_price(
            _candidate(start=date(2024, 3, 20), end=date(2024, 3, 20)), resource, today=TODAY
        )
        assert not result.ok
        assert result.quote is None
        assert result.codes == {ErrorCode.INVALID_DATE_ORDER}
        assert result.errors_for("end")[0].message == "End date must be after start date"

    def test_all_errors_reported_together(self, resource):
        candidate = CandidateBooking(start=date(2024, 3, 20), email="not-an-email")
        result = validate_and_price(candidate, resource, today=TODAY)
        fields = {error.field for error in result.errors}
        assert fields == {"end", "name", "email", "phone", "nic_number"}
        assert result.errors_for("email")[0].code is ErrorCode.INVALID_FORMAT
        assert result.errors_for("nic_number")[0].code is ErrorCode.MISSING_IDENTITY_DOCUMENT

    def test_missing_start(self, resource):
        result = validate_and_price(_candidate(end=date(2024, 3, 20)), resource, today=TODAY)
        assert result.errors_for("start")[0].message == "Start date is required"

    def test_overlap_with_existing_reservation(self, resource):
        result = validate_and_price(
            _candidate(start=date(2024, 3, 12), end=date(2024, 3, 18)), resource, today=TODAY
        )
        assert result.codes == {ErrorCode.DATES_UNAVAILABLE}
        assert "2024-03-12" in result.errors_for("start")[0].message

    def test_past_start(self, resource):
        result = validate_and_price(
            _candidate(start=date(2024, 2, 27), end=date(2024, 3, 2)), resource, today=TODAY
        )
        assert ErrorCode.DATES_UNAVAILABLE in result.codes

    def test_disabled_rental_type(self, resource):
        resource.monthly_enabled = False
        candidate = _candidate(type=RentalType.MONTHLY, start=date(2024, 4, 1), months=2)
        result = validate_and_price(candidate, resource, today=TODAY)
        assert result.codes == {ErrorCode.RENTAL_TYPE_DISABLED}
        assert result.errors_for("type")

    @pytest.mark.parametrize("months", [0, 13])
    def test_months_out_of_range(self, resource, months):
        candidate = _candidate(type=RentalType.MONTHLY, start=date(2024, 4, 1), months=months)
        result = validate_and_price(candidate, resource, today=TODAY)
        assert result.codes == {ErrorCode.OUT_OF_RANGE_DURATION}

    def test_months_bounds_follow_settings(self, resource):
        candidate = _candidate(type=RentalType.MONTHLY, start=date(2024, 4, 1), months=13)
        config = Settings(max_months=24)
        assert validate_and_price(candidate, resource, today=TODAY, settings=config).ok

    def test_missing_months(self, resource):
        candidate = _candidate(type=RentalType.MONTHLY, start=date(2024, 4, 1))
        result = validate_and_price(candidate, resource, today=TODAY)
        assert result.errors_for("months")[0].code is ErrorCode.MISSING_FIELD

    def test_monthly_overlap(self, resource):
        candidate = _candidate(type=RentalType.MONTHLY, start=date(2024, 3, 2), months=1)
        result = validate_and_price(candidate, resource, today=TODAY)
        assert result.codes == {ErrorCode.DATES_UNAVAILABLE}
        assert result.errors_for("start")[0].message.endswith(", ...)")

    def test_min_date(self, resource):
        result = validate_and_price(
            _candidate(start=date(2024, 3, 1), end=date(2024, 3, 3)),
            resource,
            today=TODAY,
            min_date=date(2024, 3, 2),
        )
        assert result.codes == {ErrorCode.DATES_UNAVAILABLE}


class TestHelpers:
    def test_unavailable_days_lists_booked_nights(self, resource):
        candidate = _candidate(start=date(2024, 3, 13), end=date(2024, 3, 17))
        days = unavailable_days(candidate, resource, today=TODAY)
        assert days == [date(2024, 3, 13), date(2024, 3, 14)]

    def test_redact_pii(self):
        assert redact_pii("jane.perera@gmail.com") == "jan***om"
        assert redact_pii("abc") == "***"
        assert redact_pii("") == "***"

    def test_rejection_log_hides_email(self, resource, caplog):
        with caplog.at_level(logging.INFO, logger="booking_engine.validator"):
            validate_and_price(
                _candidate(start=date(2024, 3, 12), end=date(2024, 3, 13)),
                resource,
                today=TODAY,
            )
        assert "jane.perera@gmail.com" not in caplog.text
        assert "dates_unavailable" in caplog.text
