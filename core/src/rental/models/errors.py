"""Standard error codes for the rental engine.

All services raise BookingError (or one of its subclasses) so the API layer
can convert failures into a consistent ToolError response.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes for rental operations."""

    INVALID_RANGE = "ERR_001"
    CAR_UNAVAILABLE = "ERR_002"
    CAR_NOT_FOUND = "ERR_003"
    BOOKING_NOT_FOUND = "ERR_004"
    BOOKING_NOT_CANCELLABLE = "ERR_005"
    UNKNOWN_TIER = "ERR_006"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_RANGE: "End date must be after start date",
    ErrorCode.CAR_UNAVAILABLE: "Car is no longer available for these dates",
    ErrorCode.CAR_NOT_FOUND: "Car not found",
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found",
    ErrorCode.BOOKING_NOT_CANCELLABLE: "Booking cannot be cancelled in its current state",
    ErrorCode.UNKNOWN_TIER: "Unknown pricing tier",
}

# Recovery suggestions for clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.INVALID_RANGE: "Send ISO-8601 dates with end_date after start_date",
    ErrorCode.CAR_UNAVAILABLE: "Choose different dates or another car",
    ErrorCode.CAR_NOT_FOUND: "Verify the car ID",
    ErrorCode.BOOKING_NOT_FOUND: "Verify the booking ID",
    ErrorCode.BOOKING_NOT_CANCELLABLE: "Only pending or confirmed bookings can be cancelled",
    ErrorCode.UNKNOWN_TIER: "Use one of tier_200, tier_400 or tier_1000",
}


class ToolError(BaseModel):
    """Standard error response format for failed operations."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ToolError":
        """Create a ToolError from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            A ToolError with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingError(Exception):
    """Exception raised by rental operations.

    Can be caught and converted to a ToolError for API responses.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_tool_error(self) -> ToolError:
        """Convert this exception to a ToolError for responses."""
        return ToolError.from_code(self.code, self.details)


class InvalidRangeError(BookingError):
    """End is not after start, or a date could not be parsed."""

    def __init__(self, details: Optional[dict[str, str]] = None):
        super().__init__(ErrorCode.INVALID_RANGE, details)


class ReservationConflictError(BookingError):
    """A conflicting reservation exists or was committed concurrently."""

    def __init__(self, details: Optional[dict[str, str]] = None):
        super().__init__(ErrorCode.CAR_UNAVAILABLE, details)


class NotFoundError(BookingError):
    """Unknown car or booking identifier."""
