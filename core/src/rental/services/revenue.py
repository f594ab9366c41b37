"""Revenue aggregation for the admin dashboard.

Bookings are bucketed by calendar day (windows up to 31 days) or calendar
month (longer windows) of their creation time, in UTC. The series always has
one point per bucket in the window, so charts need no interpolation.
"""

import datetime as dt
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable

from rental.models import (
    Booking,
    BookingStatus,
    DashboardStats,
    DateRange,
    GroupBy,
    InvalidRangeError,
    RevenuePoint,
    RevenueSeries,
)
from rental.models.interval import ensure_utc, parse_instant

if TYPE_CHECKING:
    from .booking import BookingService
    from .cars import CarService

DAY_BUCKET_LIMIT = dt.timedelta(days=31)
DEFAULT_WINDOW_MONTHS = 6
RECENT_ACTIVITY_LIMIT = 10
REVENUE_STATUSES = {BookingStatus.CONFIRMED, BookingStatus.COMPLETED}
MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _add_months(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def _midnight(day: dt.date) -> dt.datetime:
    return dt.datetime(day.year, day.month, day.day, tzinfo=dt.UTC)


def group_by_for(range_start: dt.datetime, range_end: dt.datetime) -> GroupBy:
    """Day buckets for windows up to 31 days, month buckets otherwise."""
    return GroupBy.DAY if range_end - range_start <= DAY_BUCKET_LIMIT else GroupBy.MONTH


def resolve_range(
    start: str | dt.datetime | None = None,
    end: str | dt.datetime | None = None,
    now: dt.datetime | None = None,
) -> DateRange:
    """Work out the reporting window actually used.

    With both bounds given, the end is extended to the last instant of its
    day. Otherwise the window is the six calendar months ending now, starting
    at midnight on the first day of the earliest month.

    Raises:
        InvalidRangeError: For malformed dates or end before start.
    """
    if start is not None and end is not None:
        range_start = parse_instant(start)
        range_end = parse_instant(end).replace(hour=23, minute=59, second=59, microsecond=999999)
    else:
        range_end = ensure_utc(now or dt.datetime.now(dt.UTC))
        year, month = _add_months(range_end.year, range_end.month, -DEFAULT_WINDOW_MONTHS)
        range_start = dt.datetime(year, month, 1, tzinfo=dt.UTC)

    if range_end < range_start:
        raise InvalidRangeError(
            details={"start": range_start.isoformat(), "end": range_end.isoformat()}
        )

    return DateRange(
        start=range_start,
        end=range_end,
        group_by=group_by_for(range_start, range_end),
    )


def aggregate(
    bookings: Iterable[Booking],
    range_start: dt.datetime,
    range_end: dt.datetime,
) -> list[RevenuePoint]:
    """Sum booking totals into a gap-filled daily or monthly series.

    Only confirmed and completed bookings created within [range_start,
    range_end] count.

    Args:
        bookings: Candidate bookings
        range_start: Window start (inclusive)
        range_end: Window end (inclusive)

    Returns:
        One RevenuePoint per calendar day or month in the window, ascending
    """
    range_start = ensure_utc(range_start)
    range_end = ensure_utc(range_end)
    group_by = group_by_for(range_start, range_end)

    totals: dict[tuple[int, ...], int] = defaultdict(int)
    for booking in bookings:
        if booking.status not in REVENUE_STATUSES:
            continue
        created = ensure_utc(booking.created_at)
        if not range_start <= created <= range_end:
            continue
        if group_by is GroupBy.DAY:
            key: tuple[int, ...] = (created.year, created.month, created.day)
        else:
            key = (created.year, created.month)
        totals[key] += booking.total_price

    points: list[RevenuePoint] = []
    if group_by is GroupBy.DAY:
        day = range_start.date()
        while day <= range_end.date():
            points.append(
                RevenuePoint(
                    label=f"{day.day}/{day.month}",
                    bucket_start=_midnight(day),
                    revenue=totals.get((day.year, day.month, day.day), 0),
                )
            )
            day += dt.timedelta(days=1)
    else:
        year, month = range_start.year, range_start.month
        while (year, month) <= (range_end.year, range_end.month):
            points.append(
                RevenuePoint(
                    label=f"{MONTH_NAMES[month - 1]} {year}",
                    bucket_start=dt.datetime(year, month, 1, tzinfo=dt.UTC),
                    revenue=totals.get((year, month), 0),
                )
            )
            year, month = _add_months(year, month, 1)

    return points


class RevenueService:
    """Service for revenue series and dashboard stats."""

    def __init__(
        self,
        bookings: "BookingService",
        cars: "CarService",
    ) -> None:
        """Initialize revenue service.

        Args:
            bookings: Booking service instance
            cars: Car service instance
        """
        self.bookings = bookings
        self.cars = cars

    def series(
        self,
        start: str | dt.datetime | None = None,
        end: str | dt.datetime | None = None,
        now: dt.datetime | None = None,
    ) -> RevenueSeries:
        """Build the revenue series for a window (default: last six months)."""
        date_range = resolve_range(start, end, now)
        bookings = self.bookings.list_created_between(
            date_range.start, date_range.end, statuses=REVENUE_STATUSES
        )
        return _to_series(bookings, date_range)

    def dashboard(
        self,
        start: str | dt.datetime | None = None,
        end: str | dt.datetime | None = None,
        now: dt.datetime | None = None,
    ) -> DashboardStats:
        """Dashboard roll-up: fleet size, active bookings, revenue and recent activity.

        Recent activity lists the newest bookings created in the window,
        whatever their status.
        """
        now = ensure_utc(now or dt.datetime.now(dt.UTC))
        date_range = resolve_range(start, end, now)
        created = self.bookings.list_created_between(date_range.start, date_range.end)
        revenue = _to_series(created, date_range)
        active = sum(
            1
            for b in self.bookings.list_bookings()
            if b.status == BookingStatus.CONFIRMED and ensure_utc(b.end) > now
        )
        recent = sorted(created, key=lambda b: ensure_utc(b.created_at), reverse=True)
        return DashboardStats(
            total_cars=self.cars.count_cars(),
            active_bookings=active,
            total_revenue=revenue.total_revenue,
            revenue_chart=revenue.points,
            recent_activity=recent[:RECENT_ACTIVITY_LIMIT],
            date_range=revenue.date_range,
        )


def _to_series(bookings: Iterable[Booking], date_range: DateRange) -> RevenueSeries:
    points = aggregate(bookings, date_range.start, date_range.end)
    return RevenueSeries(
        points=points,
        date_range=date_range,
        total_revenue=sum(p.revenue for p in points),
    )
