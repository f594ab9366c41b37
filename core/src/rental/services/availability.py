"""Availability service for checking cars against requested intervals."""

import datetime as dt
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from rental.models import Car, Interval, UnavailableReason
from rental.utils.logging import get_logger

if TYPE_CHECKING:
    from .cars import CarService

logger = get_logger(__name__)

REASON_MESSAGES: dict[UnavailableReason, str | None] = {
    UnavailableReason.NONE: None,
    UnavailableReason.BOOKED: "Already booked",
    UnavailableReason.MAINTENANCE: "Under maintenance",
    UnavailableReason.MANUALLY_DISABLED: "Not available",
}


class AvailabilityResult(BaseModel):
    """Outcome of an availability check."""

    model_config = ConfigDict(strict=True, frozen=True)

    available: bool
    reason: UnavailableReason = UnavailableReason.NONE

    @property
    def message(self) -> str | None:
        return REASON_MESSAGES[self.reason]


def check(car: Car, interval: Interval) -> AvailabilityResult:
    """Check one car for an interval.

    Uses the inclusive overlap rule, so a request that merely touches an
    existing reservation is reported as booked. Only the first reason found
    is returned, in the order booked, maintenance, manually disabled.
    """
    record = car.availability
    if any(interval.overlaps_inclusive(span) for span in record.reserved):
        return AvailabilityResult(available=False, reason=UnavailableReason.BOOKED)
    if any(interval.overlaps_inclusive(span) for span in record.maintenance):
        return AvailabilityResult(available=False, reason=UnavailableReason.MAINTENANCE)
    if not record.manually_available:
        return AvailabilityResult(available=False, reason=UnavailableReason.MANUALLY_DISABLED)
    return AvailabilityResult(available=True)


def filter_available(cars: list[Car], interval: Interval) -> list[Car]:
    """Keep only the cars that `check` reports as available."""
    return [car for car in cars if check(car, interval).available]


class AvailabilityService:
    """Service for availability checks and alternative suggestions."""

    def __init__(self, cars: "CarService") -> None:
        """Initialize availability service.

        Args:
            cars: Car service instance
        """
        self.cars = cars

    def check_car(self, car_id: str, interval: Interval) -> AvailabilityResult:
        """Load a car and check it for an interval.

        Raises:
            NotFoundError: If the car does not exist.
        """
        car = self.cars.get_car(car_id)
        result = check(car, interval)
        logger.info(
            "Availability check car=%s available=%s reason=%s",
            car_id,
            result.available,
            result.reason.value,
        )
        return result

    def list_available(
        self,
        interval: Interval,
        city: str | None = None,
        category: str | None = None,
    ) -> list[Car]:
        """List cars free for the whole interval, from a single catalog read."""
        return filter_available(self.cars.list_cars(city=city, category=category), interval)

    def suggest_alternatives(
        self,
        car: Car,
        interval: Interval,
        search_window_days: int = 14,
        max_suggestions: int = 3,
        now: dt.datetime | None = None,
    ) -> list[Interval]:
        """Find same-length windows near the requested one that are free.

        Candidates are the requested interval shifted by whole days, earlier
        and later alternately, closest first. Windows starting in the past are
        skipped.

        Args:
            car: Car to search
            interval: Originally requested interval
            search_window_days: How many days before/after to search
            max_suggestions: Maximum number of alternatives to return
            now: Reference time (defaults to current UTC time)

        Returns:
            Available intervals ordered by distance from the request
        """
        now = now or dt.datetime.now(dt.UTC)
        suggestions: list[Interval] = []

        for offset in range(1, search_window_days + 1):
            for days in (-offset, offset):
                if len(suggestions) >= max_suggestions:
                    return suggestions
                candidate = interval.shifted(days).as_interval()
                if candidate.start < now:
                    continue
                if check(car, candidate).available:
                    suggestions.append(candidate)

        return suggestions
