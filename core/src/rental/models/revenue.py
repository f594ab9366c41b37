"""Revenue series and dashboard models."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from .booking import Booking
from .enums import GroupBy


class RevenuePoint(BaseModel):
    """Revenue for one day or month bucket."""

    model_config = ConfigDict(strict=True, frozen=True)

    label: str = Field(..., description="Bucket label", examples=["15/3", "Mar 2026"])
    bucket_start: dt.datetime = Field(..., description="First instant of the bucket (UTC)")
    revenue: int = Field(default=0, ge=0, description="Sum of booking totals")


class DateRange(BaseModel):
    """Reporting window actually used for a series."""

    model_config = ConfigDict(strict=True, frozen=True)

    start: dt.datetime
    end: dt.datetime
    group_by: GroupBy


class RevenueSeries(BaseModel):
    """Gap-filled revenue series for a reporting window."""

    model_config = ConfigDict(strict=True)

    points: list[RevenuePoint]
    date_range: DateRange
    total_revenue: int = Field(default=0, ge=0)


class DashboardStats(BaseModel):
    """Admin dashboard roll-up for a reporting window."""

    model_config = ConfigDict(strict=True)

    total_cars: int = Field(..., ge=0)
    active_bookings: int = Field(..., ge=0, description="Confirmed bookings not yet ended")
    total_revenue: int = Field(..., ge=0, description="Revenue within the window")
    revenue_chart: list[RevenuePoint]
    recent_activity: list[Booking] = Field(
        default_factory=list, description="Newest bookings created in the window, any status"
    )
    date_range: DateRange
