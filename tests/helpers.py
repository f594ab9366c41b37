"""Builders for test data shared across the suite."""

import datetime as dt

from rental.models import (
    Booking,
    BookingStatus,
    Car,
    CarAvailability,
    PricingProfile,
)


def utc(*args: int) -> dt.datetime:
    """Shorthand for an aware UTC datetime."""
    return dt.datetime(*args, tzinfo=dt.UTC)


def make_car(
    car_id: str = "car-swift-001",
    base_rate: int = 1000,
    extra_km_charge: int = 10,
    security_deposit: int = 1000,
    availability: CarAvailability | None = None,
    city: str = "Jaipur",
    category: str = "hatchback",
    brand: str = "Maruti",
    model: str = "Swift",
) -> Car:
    """Build a car with sensible defaults."""
    return Car(
        car_id=car_id,
        brand=brand,
        model=model,
        city=city,
        category=category,
        pricing=PricingProfile(
            base_rate_per_day=base_rate,
            extra_km_charge=extra_km_charge,
            security_deposit=security_deposit,
        ),
        availability=availability or CarAvailability(),
    )


def make_booking(
    booking_id: str = "BK-2026-00000001",
    car_id: str = "car-swift-001",
    total_price: int = 1000,
    status: BookingStatus = BookingStatus.CONFIRMED,
    created_at: dt.datetime | None = None,
    start: dt.datetime | None = None,
    end: dt.datetime | None = None,
) -> Booking:
    """Build a booking with sensible defaults."""
    created_at = created_at or utc(2026, 1, 10, 12)
    start = start or utc(2026, 2, 1, 10)
    return Booking(
        booking_id=booking_id,
        car_id=car_id,
        user_id="user-1",
        start=start,
        end=end or start + dt.timedelta(days=2),
        total_price=total_price,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


