"""Enumeration types for rental data models."""

from enum import Enum


class BookingStatus(str, Enum):
    """Status of a booking."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class CarStatus(str, Enum):
    """Fleet status of a car (informational, set by fleet management)."""

    AVAILABLE = "available"
    BOOKED = "booked"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"


class UnavailableReason(str, Enum):
    """First reason found when a car cannot be booked for an interval."""

    NONE = "none"
    BOOKED = "booked"
    MAINTENANCE = "maintenance"
    MANUALLY_DISABLED = "manually_disabled"


class GroupBy(str, Enum):
    """Bucket size of a revenue series."""

    DAY = "day"
    MONTH = "month"
