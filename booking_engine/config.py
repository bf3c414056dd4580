"""Engine configuration via environment variables."""

from __future__ import annotations

import logging
from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger("booking_engine.config")


class Settings(BaseSettings):
    # Contiguous stay
    min_stay_hours: int = 24
    boundary_tolerance_minutes: int = 1
    feasibility_extra_days: int = 2

    # Monthly rentals
    min_months: int = 1
    max_months: int = 12
    monthly_inference_days: int = 30

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BOOKING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def min_stay(self) -> timedelta:
        return timedelta(hours=self.min_stay_hours)

    @property
    def boundary_tolerance(self) -> timedelta:
        return timedelta(minutes=self.boundary_tolerance_minutes)

    def validate_startup(self) -> list[str]:
        """Validate configuration at startup. Returns warnings, raises on errors."""
        warnings: list[str] = []

        if self.min_stay_hours <= 0:
            raise ValueError("BOOKING_MIN_STAY_HOURS must be a positive number of hours.")

        if self.boundary_tolerance_minutes < 0:
            raise ValueError("BOOKING_BOUNDARY_TOLERANCE_MINUTES cannot be negative.")

        if self.min_months < 1 or self.min_months > self.max_months:
            raise ValueError(
                f"Invalid month bounds: min_months={self.min_months}, "
                f"max_months={self.max_months}."
            )

        if self.boundary_tolerance_minutes > 15:
            warnings.append(
                "BOOKING_BOUNDARY_TOLERANCE_MINUTES is above 15; short gaps before "
                "midnight will be treated as contiguous free time."
            )

        if self.max_months > 12:
            warnings.append(
                f"BOOKING_MAX_MONTHS={self.max_months} allows monthly stays longer than a year."
            )

        for warning in warnings:
            log.warning(warning)
        return warnings


settings = Settings()
