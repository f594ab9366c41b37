"""FastAPI dependency injection providers for engine services.

Services are lazily instantiated and cached with @lru_cache so one instance
of each is shared across requests. The reservation service in particular must
be shared: its per-car locks only serialize callers that use the same
instance.

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        └── CarService
                ├── PricingService
                ├── AvailabilityService
                └── ReservationService
                        └── BookingService
                                └── RevenueService

Testing:
    Use reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from rental.services.availability import AvailabilityService
from rental.services.booking import BookingService
from rental.services.cars import CarService
from rental.services.dynamodb import get_dynamodb_service
from rental.services.pricing import PricingService
from rental.services.reservation import ReservationService
from rental.services.revenue import RevenueService


@lru_cache
def get_car_service() -> CarService:
    return CarService(db=get_dynamodb_service())


@lru_cache
def get_pricing_service() -> PricingService:
    return PricingService(cars=get_car_service())


@lru_cache
def get_availability_service() -> AvailabilityService:
    return AvailabilityService(cars=get_car_service())


@lru_cache
def get_reservation_service() -> ReservationService:
    return ReservationService(db=get_dynamodb_service(), cars=get_car_service())


@lru_cache
def get_booking_service() -> BookingService:
    """Get cached BookingService instance.

    Returns:
        BookingService sharing the cached ReservationService.
    """
    return BookingService(
        db=get_dynamodb_service(),
        cars=get_car_service(),
        reservations=get_reservation_service(),
    )


@lru_cache
def get_revenue_service() -> RevenueService:
    return RevenueService(bookings=get_booking_service(), cars=get_car_service())


def reset_services() -> None:
    """Clear all cached service instances.

    Also resets the underlying DynamoDB singleton.
    """
    from rental.services.dynamodb import reset_dynamodb_service

    get_car_service.cache_clear()
    get_pricing_service.cache_clear()
    get_availability_service.cache_clear()
    get_reservation_service.cache_clear()
    get_booking_service.cache_clear()
    get_revenue_service.cache_clear()

    reset_dynamodb_service()
