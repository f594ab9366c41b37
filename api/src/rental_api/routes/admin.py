"""Admin dashboard endpoints."""

from fastapi import APIRouter, Depends, Query

from rental.models import DashboardStats, RevenueSeries
from rental.services.revenue import RevenueService
from rental_api.dependencies import get_revenue_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/dashboard",
    summary="Dashboard stats",
    description="""
Fleet size, active bookings and revenue for a reporting window.

With both dates given the window runs to the end of end_date's day; otherwise
it covers the last six calendar months. Windows up to 31 days are bucketed by
day, longer ones by month. Every bucket is present, zero when empty.
""",
    response_model=DashboardStats,
    responses={400: {"description": "Invalid date range"}},
)
async def get_dashboard(
    start_date: str | None = Query(default=None, examples=["2026-01-01"]),
    end_date: str | None = Query(default=None, examples=["2026-01-31"]),
    service: RevenueService = Depends(get_revenue_service),
) -> DashboardStats:
    return service.dashboard(start_date, end_date)


@router.get(
    "/revenue",
    summary="Revenue series",
    response_model=RevenueSeries,
    responses={400: {"description": "Invalid date range"}},
)
async def get_revenue(
    start_date: str | None = Query(default=None, examples=["2026-01-01"]),
    end_date: str | None = Query(default=None, examples=["2026-01-31"]),
    service: RevenueService = Depends(get_revenue_service),
) -> RevenueSeries:
    return service.series(start_date, end_date)
