"""Booking endpoints.

Booking creation is invoked internally once payment has been verified by the
payment layer. It reserves the car and writes the booking in one transaction;
if the car was taken in the meantime the request fails with 409 and no
booking is stored.
"""

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from rental.models import Booking, Interval
from rental.services.booking import BookingService
from rental_api.dependencies import get_booking_service
from rental_api.models.bookings import BookingCreateRequest

router = APIRouter(tags=["bookings"])


@router.post(
    "/bookings",
    summary="Confirm booking",
    response_model=Booking,
    status_code=HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid date range or tier"},
        404: {"description": "Car not found"},
        409: {"description": "Car no longer available for these dates"},
    },
)
async def create_booking(
    body: BookingCreateRequest,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    interval = Interval.parse(body.start_date, body.end_date)
    return service.confirm(
        car_id=body.car_id,
        interval=interval,
        user_id=body.user_id,
        tier_id=body.tier_id,
        booking_id=body.booking_id,
    )


@router.get(
    "/bookings/{booking_id}",
    summary="Get booking",
    response_model=Booking,
    responses={404: {"description": "Booking not found"}},
)
async def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    return service.get(booking_id)


@router.post(
    "/bookings/{booking_id}/cancel",
    summary="Cancel booking",
    description="Cancel a pending or confirmed booking and release the car.",
    response_model=Booking,
    responses={
        400: {"description": "Booking already cancelled or completed"},
        404: {"description": "Booking not found"},
    },
)
async def cancel_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    return service.cancel(booking_id)
