"""API models for car listing, availability and price quote endpoints."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from rental.models import Car, CarStatus, Interval, PriceQuote, PricingProfile


class CarSummary(BaseModel):
    """Car row returned by listing and detail endpoints.

    `calculated_pricing` is present only when the listing was requested
    with a date range.
    """

    model_config = ConfigDict(strict=True)

    car_id: str
    brand: str
    model: str
    city: str
    category: str
    pricing: PricingProfile
    status: CarStatus
    total_bookings: int = Field(..., ge=0)
    calculated_pricing: PriceQuote | None = None

    @classmethod
    def from_car(cls, car: Car, calculated_pricing: PriceQuote | None = None) -> "CarSummary":
        return cls(
            car_id=car.car_id,
            brand=car.brand,
            model=car.model,
            city=car.city,
            category=car.category,
            pricing=car.pricing,
            status=car.availability.status,
            total_bookings=car.total_bookings,
            calculated_pricing=calculated_pricing,
        )


class CarListResponse(BaseModel):
    """Paginated car listing."""

    model_config = ConfigDict(strict=True)

    count: int = Field(..., ge=0, description="Rows on this page")
    total: int = Field(..., ge=0, description="Rows across all pages")
    total_pages: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1)
    data: list[CarSummary]


class AvailabilityCheckResponse(BaseModel):
    """Availability of one car for a requested interval."""

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "examples": [
                {
                    "car_id": "car-swift-001",
                    "available": False,
                    "reason": "Already booked",
                    "reason_code": "booked",
                    "alternatives": [
                        {"start": "2026-02-16T10:00:00Z", "end": "2026-02-18T10:00:00Z"}
                    ],
                }
            ]
        },
    )

    car_id: str
    available: bool
    reason: str | None = Field(default=None, description="Human-readable reason")
    reason_code: str = Field(..., description="none, booked, maintenance or manually_disabled")
    alternatives: list[Interval] = Field(
        default_factory=list,
        description="Nearby free windows of the same length (only when unavailable)",
    )


class PriceQuoteRequest(BaseModel):
    """Request body for a price quote."""

    car_id: str = Field(..., examples=["car-swift-001"])
    start_date: str = Field(..., description="ISO-8601 start", examples=["2026-02-13T10:00:00Z"])
    end_date: str = Field(..., description="ISO-8601 end", examples=["2026-02-16T19:00:00Z"])


class PriceQuoteResponse(PriceQuote):
    """Price quote for a specific car and interval."""

    car_id: str
    car_name: str
    start: dt.datetime
    end: dt.datetime
