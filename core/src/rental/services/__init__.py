"""Services for the car rental engine."""

from .availability import AvailabilityResult, AvailabilityService
from .booking import BookingService
from .cars import CarService
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .pricing import PricingService, quote
from .reservation import ReservationService
from .revenue import RevenueService, aggregate

__all__ = [
    "AvailabilityResult",
    "AvailabilityService",
    "BookingService",
    "CarService",
    "DynamoDBService",
    "PricingService",
    "ReservationService",
    "RevenueService",
    "aggregate",
    "get_dynamodb_service",
    "quote",
    "reset_dynamodb_service",
]
