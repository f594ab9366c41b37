"""Car endpoints: listing, details, availability and price quotes.

All instants are ISO-8601 and interpreted as UTC when no offset is given.
Amounts are whole INR.
"""

import math

from fastapi import APIRouter, Depends, Query

from rental.models import Interval
from rental.services.availability import AvailabilityService, check
from rental.services.cars import CarService
from rental.services.pricing import PricingService, quote
from rental_api.dependencies import (
    get_availability_service,
    get_car_service,
    get_pricing_service,
)
from rental_api.models.cars import (
    AvailabilityCheckResponse,
    CarListResponse,
    CarSummary,
    PriceQuoteRequest,
    PriceQuoteResponse,
)

router = APIRouter(tags=["cars"])


@router.get(
    "/cars",
    summary="List cars",
    description="""
List cars with optional filters and pagination.

When both start_date and end_date are given, cars that are booked, under
maintenance or disabled for that window are removed before pagination, and
every row carries `calculated_pricing` with the same numbers the
calculate-price endpoint returns.
""",
    response_model=CarListResponse,
)
async def list_cars(
    start_date: str | None = Query(default=None, examples=["2026-02-13T10:00:00Z"]),
    end_date: str | None = Query(default=None, examples=["2026-02-16T19:00:00Z"]),
    city: str | None = Query(default=None),
    category: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    cars: CarService = Depends(get_car_service),
    availability: AvailabilityService = Depends(get_availability_service),
    pricing: PricingService = Depends(get_pricing_service),
) -> CarListResponse:
    """List cars, filtering by availability and injecting prices for a date range."""
    interval = None
    if start_date and end_date:
        interval = Interval.parse(start_date, end_date)
        matching = availability.list_available(interval, city=city, category=category)
    else:
        matching = cars.list_cars(city=city, category=category)

    total = len(matching)
    offset = (page - 1) * limit
    page_cars = matching[offset : offset + limit]

    if interval is not None:
        rows = [
            CarSummary.from_car(car, calculated)
            for car, calculated in pricing.inject_pricing(page_cars, interval)
        ]
    else:
        rows = [CarSummary.from_car(car) for car in page_cars]

    return CarListResponse(
        count=len(rows),
        total=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
        data=rows,
    )


@router.get(
    "/cars/{car_id}",
    summary="Get car details",
    response_model=CarSummary,
    responses={404: {"description": "Car not found"}},
)
async def get_car(
    car_id: str,
    cars: CarService = Depends(get_car_service),
) -> CarSummary:
    return CarSummary.from_car(cars.get_car(car_id))


@router.get(
    "/cars/{car_id}/availability",
    summary="Check car availability",
    description="""
Check whether a car can be booked for a window.

A window that merely touches an existing booking's boundary is reported as
booked. When unavailable, up to three nearby windows of the same length are
suggested.
""",
    response_model=AvailabilityCheckResponse,
    responses={
        400: {"description": "Invalid date range"},
        404: {"description": "Car not found"},
    },
)
async def check_availability(
    car_id: str,
    start_date: str = Query(..., examples=["2026-02-13T10:00:00Z"]),
    end_date: str = Query(..., examples=["2026-02-16T19:00:00Z"]),
    cars: CarService = Depends(get_car_service),
    availability: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityCheckResponse:
    """Check one car and suggest alternatives when it is taken."""
    interval = Interval.parse(start_date, end_date)
    car = cars.get_car(car_id)
    result = check(car, interval)

    alternatives = []
    if not result.available:
        alternatives = availability.suggest_alternatives(car, interval)

    return AvailabilityCheckResponse(
        car_id=car_id,
        available=result.available,
        reason=result.message,
        reason_code=result.reason.value,
        alternatives=alternatives,
    )


@router.post(
    "/cars/calculate-price",
    summary="Calculate rental price",
    description="""
Quote a car for a window in all three kilometre tiers.

Price scales with exact elapsed hours; the kilometre allowance assumes at
least one full day. 5% tax is rounded separately and added to each tier.
""",
    response_model=PriceQuoteResponse,
    responses={
        400: {"description": "end_date must be after start_date"},
        404: {"description": "Car not found"},
    },
)
async def calculate_price(
    body: PriceQuoteRequest,
    cars: CarService = Depends(get_car_service),
) -> PriceQuoteResponse:
    interval = Interval.parse(body.start_date, body.end_date)
    car = cars.get_car(body.car_id)
    result = quote(car.pricing, interval)

    return PriceQuoteResponse(
        car_id=car.car_id,
        car_name=car.display_name,
        start=interval.start,
        end=interval.end,
        tiers=result.tiers,
        **result.model_dump(exclude={"tiers"}),
    )
