"""Booking service: confirming, reading and cancelling bookings.

Confirmation runs after the external payment step. The booking record is
written in the same DynamoDB transaction as the car reservation, so a booking
never exists for a reservation that lost a race.
"""

import datetime as dt
import uuid
from typing import TYPE_CHECKING, Any

from boto3.dynamodb.conditions import Attr

from rental.models import (
    Booking,
    BookingError,
    BookingStatus,
    ErrorCode,
    Interval,
    NotFoundError,
)
from rental.utils.logging import get_logger, log_reservation_operation

from .pricing import quote

if TYPE_CHECKING:
    from .cars import CarService
    from .dynamodb import DynamoDBService
    from .reservation import ReservationService

logger = get_logger(__name__)

BOOKINGS_TABLE = "bookings"
CANCELLABLE_STATUSES = {BookingStatus.PENDING, BookingStatus.CONFIRMED}


def _generate_booking_id() -> str:
    """Generate a booking ID like BK-2026-AB12CD34."""
    year = dt.datetime.now(dt.UTC).year
    unique_part = uuid.uuid4().hex[:8].upper()
    return f"BK-{year}-{unique_part}"


def _iso(value: dt.datetime) -> str:
    # Fixed-width timestamps keep string comparisons in scan filters ordered
    return value.astimezone(dt.UTC).isoformat(timespec="microseconds")


def booking_to_item(booking: Booking) -> dict[str, Any]:
    """Convert a Booking model to a DynamoDB item."""
    return {
        "booking_id": booking.booking_id,
        "car_id": booking.car_id,
        "user_id": booking.user_id,
        "start": _iso(booking.start),
        "end": _iso(booking.end),
        "tier_id": booking.tier_id,
        "total_price": booking.total_price,
        "status": booking.status.value,
        "created_at": _iso(booking.created_at),
        "updated_at": _iso(booking.updated_at),
    }


def item_to_booking(item: dict[str, Any]) -> Booking:
    """Convert a DynamoDB item to a Booking model."""
    return Booking(
        booking_id=item["booking_id"],
        car_id=item["car_id"],
        user_id=item["user_id"],
        start=dt.datetime.fromisoformat(item["start"]),
        end=dt.datetime.fromisoformat(item["end"]),
        tier_id=item.get("tier_id", "tier_200"),
        total_price=int(item["total_price"]),
        status=BookingStatus(item["status"]),
        created_at=dt.datetime.fromisoformat(item["created_at"]),
        updated_at=dt.datetime.fromisoformat(item["updated_at"]),
    )


class BookingService:
    """Service for booking lifecycle operations."""

    TABLE = BOOKINGS_TABLE

    def __init__(
        self,
        db: "DynamoDBService",
        cars: "CarService",
        reservations: "ReservationService",
    ) -> None:
        """Initialize booking service.

        Args:
            db: DynamoDB service instance
            cars: Car service instance
            reservations: Reservation committer
        """
        self.db = db
        self.cars = cars
        self.reservations = reservations

    def confirm(
        self,
        car_id: str,
        interval: Interval,
        user_id: str,
        tier_id: str = "tier_200",
        booking_id: str | None = None,
        now: dt.datetime | None = None,
    ) -> Booking:
        """Confirm a paid booking and reserve the car.

        The price is the selected tier's final price from the same quote the
        price endpoint returns.

        Args:
            car_id: Car to book
            interval: Rental interval
            user_id: External user ID
            tier_id: Selected pricing tier
            booking_id: Optional caller-supplied booking ID
            now: Creation timestamp (defaults to current UTC time)

        Returns:
            The confirmed Booking

        Raises:
            NotFoundError: If the car does not exist.
            BookingError: UNKNOWN_TIER for an invalid tier.
            ReservationConflictError: If the car cannot be reserved.
        """
        now = now or dt.datetime.now(dt.UTC)
        car = self.cars.get_car(car_id)
        tier = quote(car.pricing, interval).tier(tier_id)

        booking = Booking(
            booking_id=booking_id or _generate_booking_id(),
            car_id=car_id,
            user_id=user_id,
            start=interval.start,
            end=interval.end,
            tier_id=tier_id,
            total_price=tier.final_price,
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

        put_booking = {
            "Put": {
                "TableName": self.db.table_name(self.TABLE),
                "Item": self.db.serialize(booking_to_item(booking)),
                "ConditionExpression": "attribute_not_exists(booking_id)",
            }
        }
        self.reservations.reserve(
            car_id, interval, booking.booking_id, extra_items=[put_booking]
        )

        log_reservation_operation(
            logger,
            "confirm_booking",
            car_id=car_id,
            booking_id=booking.booking_id,
            result="success",
            total_price=booking.total_price,
        )
        return booking

    def get(self, booking_id: str) -> Booking:
        """Load a booking by ID.

        Raises:
            NotFoundError: If the booking does not exist.
        """
        item = self.db.get_item(self.TABLE, {"booking_id": booking_id})
        if not item:
            raise NotFoundError(ErrorCode.BOOKING_NOT_FOUND, details={"booking_id": booking_id})
        return item_to_booking(item)

    def list_bookings(self, car_id: str | None = None) -> list[Booking]:
        """List bookings, newest first, optionally for one car."""
        filter_expression = Attr("car_id").eq(car_id) if car_id else None
        items = self.db.scan(self.TABLE, filter_expression=filter_expression)
        bookings = [item_to_booking(item) for item in items]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def list_created_between(
        self,
        start: dt.datetime,
        end: dt.datetime,
        statuses: set[BookingStatus] | None = None,
    ) -> list[Booking]:
        """List bookings created within [start, end], optionally by status."""
        filter_expression = Attr("created_at").between(_iso(start), _iso(end))
        if statuses:
            filter_expression = filter_expression & Attr("status").is_in(
                [s.value for s in statuses]
            )
        items = self.db.scan(self.TABLE, filter_expression=filter_expression)
        return [item_to_booking(item) for item in items]

    def cancel(self, booking_id: str, now: dt.datetime | None = None) -> Booking:
        """Cancel a booking and release its reservation.

        The status change and the span removal are committed together.

        Raises:
            NotFoundError: If the booking does not exist.
            BookingError: BOOKING_NOT_CANCELLABLE if already cancelled/completed.
            ReservationConflictError: If the car changed concurrently.
        """
        now = now or dt.datetime.now(dt.UTC)
        booking = self.get(booking_id)
        if booking.status not in CANCELLABLE_STATUSES:
            raise BookingError(
                ErrorCode.BOOKING_NOT_CANCELLABLE,
                details={"booking_id": booking_id, "status": booking.status.value},
            )

        update_booking = {
            "Update": {
                "TableName": self.db.table_name(self.TABLE),
                "Key": self.db.serialize({"booking_id": booking_id}),
                "UpdateExpression": "SET #s = :cancelled, updated_at = :now",
                "ConditionExpression": "#s = :current",
                "ExpressionAttributeNames": {"#s": "status"},
                "ExpressionAttributeValues": self.db.serialize(
                    {
                        ":cancelled": BookingStatus.CANCELLED.value,
                        ":current": booking.status.value,
                        ":now": _iso(now),
                    }
                ),
            }
        }

        released = self.reservations.release(
            booking.car_id, booking_id, extra_items=[update_booking]
        )
        if not released and not self.db.transact_write([update_booking]):
            raise BookingError(
                ErrorCode.BOOKING_NOT_CANCELLABLE,
                details={"booking_id": booking_id, "reason": "concurrent_update"},
            )

        log_reservation_operation(
            logger,
            "cancel_booking",
            car_id=booking.car_id,
            booking_id=booking_id,
            result="success",
            released=released,
        )
        return booking.model_copy(
            update={"status": BookingStatus.CANCELLED, "updated_at": now}
        )
