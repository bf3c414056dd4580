"""Pydantic models for persisted reservations and the resource they belong to."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class RentalType(str, Enum):
    """Booking granularity. Only changes how duration and price are read."""

    DAILY = "daily"
    MONTHLY = "monthly"


class Reservation(BaseModel):
    """An existing booking on a resource, as fetched by the caller.

    ``end`` is exclusive for availability: the instant a guest checks out
    is already free for the next check-in.
    """

    id: str
    resource_id: str = ""
    start: datetime
    end: datetime
    type: Optional[RentalType] = None  # None for legacy rows without a type
    price: Optional[Decimal] = None  # amount charged, when known
    renter_name: str = ""

    @model_validator(mode="after")
    def _check_order(self) -> "Reservation":
        if self.start >= self.end:
            raise ValueError(
                f"Reservation {self.id!r} must end after it starts "
                f"({self.start.isoformat()} >= {self.end.isoformat()})"
            )
        return self


class Resource(BaseModel):
    """A rentable property with its pricing flags and reservation snapshot.

    Reservations are never assumed to be sorted.
    """

    id: str
    daily_rate: Decimal = Field(default=Decimal("0"), ge=0)
    daily_enabled: bool = False
    monthly_rate: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_enabled: bool = False
    currency: str = ""
    reservations: list[Reservation] = []

    def available_rental_types(self) -> list[RentalType]:
        types: list[RentalType] = []
        if self.daily_enabled:
            types.append(RentalType.DAILY)
        if self.monthly_enabled:
            types.append(RentalType.MONTHLY)
        return types

    def rate_for(self, rental_type: RentalType) -> Decimal:
        if rental_type is RentalType.MONTHLY:
            return self.monthly_rate
        return self.daily_rate

    def is_bookable(self) -> bool:
        """At least one rental type must be enabled for booking to be possible."""
        return bool(self.available_rental_types())
