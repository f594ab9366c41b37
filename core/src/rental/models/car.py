"""Car model with its pricing profile and availability record."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import CarStatus
from .interval import MaintenanceSpan, ReservedSpan

DEFAULT_EXTRA_KM_CHARGE = 10


class PricingProfile(BaseModel):
    """Per-car rates used as input to the pricing calculator.

    Amounts are whole currency units (INR).
    """

    model_config = ConfigDict(strict=True, frozen=True)

    base_rate_per_day: int = Field(..., ge=0, description="Daily rate for the 200 km/day tier")
    extra_km_charge: int = Field(
        default=DEFAULT_EXTRA_KM_CHARGE,
        ge=0,
        description="Charge per km beyond the included allowance",
    )
    security_deposit: int = Field(default=0, ge=0, description="Refundable deposit")

    @field_validator("extra_km_charge", mode="before")
    @classmethod
    def _default_extra_km(cls, v: int | None) -> int:
        # Absent or zero falls back to the platform default
        return v or DEFAULT_EXTRA_KM_CHARGE


class CarAvailability(BaseModel):
    """Availability record owned by a car.

    Reserved spans never overlap each other (exclusive rule); the
    reservation committer is the only writer of `reserved`.
    """

    model_config = ConfigDict(strict=True)

    manually_available: bool = True
    status: CarStatus = CarStatus.AVAILABLE
    reserved: list[ReservedSpan] = Field(default_factory=list)
    maintenance: list[MaintenanceSpan] = Field(default_factory=list)


class Car(BaseModel):
    """A rentable vehicle."""

    model_config = ConfigDict(strict=True)

    car_id: str
    brand: str
    model: str
    city: str = ""
    category: str = ""
    pricing: PricingProfile
    availability: CarAvailability = Field(default_factory=CarAvailability)
    total_bookings: int = Field(default=0, ge=0)
    version: int = Field(default=0, ge=0, description="Optimistic concurrency token")
    created_at: dt.datetime | None = None

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"
