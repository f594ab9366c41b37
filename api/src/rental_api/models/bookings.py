"""API models for booking endpoints."""

from pydantic import BaseModel, Field


class BookingCreateRequest(BaseModel):
    """Confirm a paid booking.

    Called by the payment layer once the payment has been verified.
    """

    car_id: str = Field(..., examples=["car-swift-001"])
    start_date: str = Field(..., description="ISO-8601 start", examples=["2026-02-13T10:00:00Z"])
    end_date: str = Field(..., description="ISO-8601 end", examples=["2026-02-16T19:00:00Z"])
    user_id: str = Field(..., description="External user ID")
    tier_id: str = Field(default="tier_200", examples=["tier_400"])
    booking_id: str | None = Field(
        default=None,
        description="Optional caller-supplied booking ID",
    )
