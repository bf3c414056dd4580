"""Booking validator: structural checks, submit-time conflict check, price.

Every user-correctable problem is collected into ``BookingResult.errors``
so the caller can show them all at once; nothing here raises for bad
input.  Availability is re-checked against the supplied snapshot because
the calendar the user clicked on may be stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from booking_engine.availability.intervals import iter_days
from booking_engine.availability.predicate import is_date_available
from booking_engine.config import Settings, settings as default_settings
from booking_engine.models import CandidateBooking, RentalType, Resource

from .pricing import BookingQuote, normalized_end, quote_candidate

log = logging.getLogger("booking_engine.validator")

_email_adapter: TypeAdapter[str] = TypeAdapter(EmailStr)


class ErrorCode(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_FORMAT = "invalid_format"
    INVALID_DATE_ORDER = "invalid_date_order"
    OUT_OF_RANGE_DURATION = "out_of_range_duration"
    MISSING_IDENTITY_DOCUMENT = "missing_identity_document"
    RENTAL_TYPE_DISABLED = "rental_type_disabled"
    DATES_UNAVAILABLE = "dates_unavailable"


@dataclass(frozen=True)
class BookingError:
    code: ErrorCode
    field: str
    message: str


@dataclass
class BookingResult:
    """Either a quote (accepted) or the list of everything that is wrong."""

    quote: Optional[BookingQuote] = None
    errors: list[BookingError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> set[ErrorCode]:
        return {error.code for error in self.errors}

    def errors_for(self, field_name: str) -> list[BookingError]:
        return [error for error in self.errors if error.field == field_name]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "quote": self.quote.to_dict() if self.quote else None,
            "errors": [
                {"code": e.code.value, "field": e.field, "message": e.message}
                for e in self.errors
            ],
        }


def redact_pii(value: str) -> str:
    """Mask PII for logging: show first 3 and last 2 chars only."""
    if not value or len(value) <= 5:
        return "***"
    return value[:3] + "***" + value[-2:]


# ── Structural checks ────────────────────────────────────────────


def _check_rental_type(candidate: CandidateBooking, resource: Resource) -> list[BookingError]:
    if candidate.type in resource.available_rental_types():
        return []
    return [
        BookingError(
            ErrorCode.RENTAL_TYPE_DISABLED,
            "type",
            f"{candidate.type.value.capitalize()} rent is not offered for this property",
        )
    ]


def _check_dates(candidate: CandidateBooking, config: Settings) -> list[BookingError]:
    errors: list[BookingError] = []

    if candidate.start is None:
        errors.append(BookingError(ErrorCode.MISSING_FIELD, "start", "Start date is required"))

    if candidate.type is RentalType.DAILY:
        if candidate.end is None:
            errors.append(BookingError(ErrorCode.MISSING_FIELD, "end", "End date is required"))
        elif candidate.start is not None and candidate.end <= candidate.start:
            errors.append(
                BookingError(
                    ErrorCode.INVALID_DATE_ORDER, "end", "End date must be after start date"
                )
            )
        return errors

    months = candidate.months
    if months is None:
        errors.append(
            BookingError(ErrorCode.MISSING_FIELD, "months", "Number of months is required")
        )
    elif months < config.min_months:
        errors.append(
            BookingError(
                ErrorCode.OUT_OF_RANGE_DURATION,
                "months",
                f"Minimum {config.min_months} month{'s' if config.min_months != 1 else ''}",
            )
        )
    elif months > config.max_months:
        errors.append(
            BookingError(
                ErrorCode.OUT_OF_RANGE_DURATION, "months", f"Maximum {config.max_months} months"
            )
        )
    return errors


def _check_renter(candidate: CandidateBooking) -> list[BookingError]:
    errors: list[BookingError] = []

    if not candidate.name.strip():
        errors.append(BookingError(ErrorCode.MISSING_FIELD, "name", "Full name is required"))

    email = candidate.email.strip()
    if not email:
        errors.append(BookingError(ErrorCode.MISSING_FIELD, "email", "Email is required"))
    else:
        try:
            _email_adapter.validate_python(email)
        except ValidationError:
            errors.append(BookingError(ErrorCode.INVALID_FORMAT, "email", "Invalid email format"))

    if not candidate.phone.strip():
        errors.append(BookingError(ErrorCode.MISSING_FIELD, "phone", "Phone number is required"))

    # One combined error, shown under the NIC field
    if not candidate.nic_number.strip() and not candidate.passport.strip():
        errors.append(
            BookingError(
                ErrorCode.MISSING_IDENTITY_DOCUMENT,
                "nic_number",
                "Either NIC number or passport is required",
            )
        )
    return errors


# ── Conflict check ───────────────────────────────────────────────


def unavailable_days(
    candidate: CandidateBooking,
    resource: Resource,
    *,
    today: date,
    min_date: Optional[date] = None,
) -> list[date]:
    """Days in ``[start, normalized_end)`` that fail the availability predicate."""
    end = normalized_end(candidate)
    if candidate.start is None or end is None:
        return []
    probe = CandidateBooking(
        type=candidate.type,
        excluded_reservation_id=candidate.excluded_reservation_id,
    )
    return [
        day
        for day in iter_days(candidate.start, end)
        if not is_date_available(day, resource, probe, today=today, min_date=min_date)
    ]


def validate_and_price(
    candidate: CandidateBooking,
    resource: Resource,
    *,
    today: date,
    min_date: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> BookingResult:
    """Validate a fully specified candidate and price it.

    Args:
        candidate: Booking form values, including the id of the
            reservation being edited, if any.
        resource: Property with pricing flags and a reservation snapshot.
        today: Current local day; earlier days are never bookable.
        min_date: Optional floor below ``today``'s rules (e.g. tomorrow).
        settings: Overrides the module-level settings (month bounds).

    Returns:
        A ``BookingResult`` holding the quote when every check passes,
        otherwise every error found.  Date errors suppress the conflict
        check and the price.
    """
    config = settings or default_settings

    type_errors = _check_rental_type(candidate, resource)
    date_errors = _check_dates(candidate, config)
    errors = type_errors + date_errors + _check_renter(candidate)

    if not type_errors and not date_errors:
        conflicts = unavailable_days(candidate, resource, today=today, min_date=min_date)
        if conflicts:
            errors.append(
                BookingError(
                    ErrorCode.DATES_UNAVAILABLE,
                    "start",
                    "Selected dates are no longer available "
                    f"({', '.join(day.isoformat() for day in conflicts[:3])}"
                    f"{', ...' if len(conflicts) > 3 else ''})",
                )
            )

    if errors:
        log.info(
            "Booking rejected for resource %s (%s): %s",
            resource.id,
            redact_pii(candidate.email),
            ", ".join(sorted(code.value for code in {e.code for e in errors})),
        )
        return BookingResult(errors=errors)

    quote = quote_candidate(candidate, resource)
    log.info(
        "Booking accepted for resource %s: %s %s -> %s, %s",
        resource.id,
        quote.rental_type.value,
        quote.start.isoformat(),
        quote.normalized_end.isoformat(),
        quote.price,
    )
    return BookingResult(quote=quote)
