"""Pydantic models for car rental data entities."""

from .booking import Booking
from .car import Car, CarAvailability, PricingProfile
from .enums import BookingStatus, CarStatus, GroupBy, UnavailableReason
from .errors import (
    BookingError,
    ErrorCode,
    InvalidRangeError,
    NotFoundError,
    ReservationConflictError,
    ToolError,
)
from .interval import Interval, MaintenanceSpan, ReservedSpan
from .pricing import PriceQuote, PriceTier
from .revenue import DashboardStats, DateRange, RevenuePoint, RevenueSeries

__all__ = [
    # Enums
    "BookingStatus",
    "CarStatus",
    "GroupBy",
    "UnavailableReason",
    # Errors
    "BookingError",
    "ErrorCode",
    "InvalidRangeError",
    "NotFoundError",
    "ReservationConflictError",
    "ToolError",
    # Intervals
    "Interval",
    "MaintenanceSpan",
    "ReservedSpan",
    # Car
    "Car",
    "CarAvailability",
    "PricingProfile",
    # Booking
    "Booking",
    # Pricing
    "PriceQuote",
    "PriceTier",
    # Revenue
    "DashboardStats",
    "DateRange",
    "RevenuePoint",
    "RevenueSeries",
]
