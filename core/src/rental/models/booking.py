"""Booking model for confirmed rentals."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from .enums import BookingStatus
from .interval import Interval


class Booking(BaseModel):
    """A rental booking.

    Created by the booking service after payment confirmation, together with
    the car reservation it owns. Amounts are whole currency units.
    """

    model_config = ConfigDict(strict=True)

    booking_id: str = Field(..., description="Unique booking ID")
    car_id: str = Field(..., description="Reference to Car")
    user_id: str = Field(..., description="Reference to the external user record")
    start: dt.datetime = Field(..., description="Rental start (UTC)")
    end: dt.datetime = Field(..., description="Rental end (UTC)")
    tier_id: str = Field(default="tier_200", description="Selected pricing tier")
    total_price: int = Field(..., ge=0, description="Final price including tax")
    status: BookingStatus = Field(default=BookingStatus.PENDING)
    created_at: dt.datetime = Field(..., description="Creation timestamp")
    updated_at: dt.datetime = Field(..., description="Last update timestamp")

    @property
    def interval(self) -> Interval:
        return Interval(start=self.start, end=self.end)
