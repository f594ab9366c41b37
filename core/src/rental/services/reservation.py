"""Reservation committer: atomically holds a car for a confirmed booking.

A reservation is never written as "read, check, then write blindly". The car
is read, the strict overlap test runs against its reserved spans, and the
write is a DynamoDB transaction conditioned on the car's version token being
unchanged. If another writer touched the car in between, the transaction is
cancelled as a whole and the caller gets ReservationConflictError. Calls for
one car are additionally serialized in-process by a per-car lock.

Conflicts are final. Retrying would change which request wins under
contention, so that decision is left to the caller.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator

from rental.models import Car, Interval, ReservationConflictError, ReservedSpan
from rental.utils.logging import get_logger, log_reservation_operation

from .cars import CARS_TABLE, span_to_item

if TYPE_CHECKING:
    from .cars import CarService
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)


@dataclass
class _CarLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class ReservationService:
    """Service for committing and releasing car reservations."""

    TABLE = CARS_TABLE

    def __init__(
        self,
        db: "DynamoDBService",
        cars: "CarService",
    ) -> None:
        """Initialize reservation service.

        Args:
            db: DynamoDB service instance
            cars: Car service used for consistent reads
        """
        self.db = db
        self.cars = cars
        self._locks: dict[str, _CarLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _car_lock(self, car_id: str) -> Iterator[None]:
        """Hold the in-process lock for one car.

        Entries are dropped once no caller holds or waits on them, so the map
        only contains cars with a call in flight.
        """
        with self._locks_guard:
            entry = self._locks.get(car_id)
            if entry is None:
                entry = self._locks[car_id] = _CarLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[car_id]

    def reserve(
        self,
        car_id: str,
        interval: Interval,
        booking_id: str,
        extra_items: list[dict[str, Any]] | None = None,
    ) -> ReservedSpan:
        """Reserve a car for a booking's interval.

        Appends the span and increments the car's booking counter in one
        conditional transaction. `extra_items` (e.g. the booking record put)
        are committed in the same transaction, so they exist only if the
        reservation does.

        Args:
            car_id: Car to reserve
            interval: Requested interval
            booking_id: Owning booking ID
            extra_items: Additional TransactWriteItem dicts to commit atomically

        Returns:
            The committed ReservedSpan

        Raises:
            NotFoundError: If the car does not exist.
            ReservationConflictError: If the interval overlaps an existing
                reservation or the car changed concurrently.
        """
        span = ReservedSpan(start=interval.start, end=interval.end, booking_id=booking_id)

        with self._car_lock(car_id):
            car = self.cars.get_car(car_id, consistent_read=True)

            clash = next(
                (s for s in car.availability.reserved if interval.overlaps(s)),
                None,
            )
            if clash is not None:
                log_reservation_operation(
                    logger,
                    "reserve",
                    car_id=car_id,
                    booking_id=booking_id,
                    start=interval.start.isoformat(),
                    end=interval.end.isoformat(),
                    result="conflict",
                    conflicting_booking=clash.booking_id,
                )
                raise ReservationConflictError(
                    details={"car_id": car_id, "conflicting_booking_id": clash.booking_id}
                )

            items = [self._append_span_item(car, span), *(extra_items or [])]
            if not self.db.transact_write(items):
                log_reservation_operation(
                    logger,
                    "reserve",
                    car_id=car_id,
                    booking_id=booking_id,
                    result="conflict",
                    reason="concurrent_update",
                )
                raise ReservationConflictError(
                    details={"car_id": car_id, "reason": "concurrent_update"}
                )

        log_reservation_operation(
            logger,
            "reserve",
            car_id=car_id,
            booking_id=booking_id,
            start=interval.start.isoformat(),
            end=interval.end.isoformat(),
            result="success",
        )
        return span

    def release(
        self,
        car_id: str,
        booking_id: str,
        extra_items: list[dict[str, Any]] | None = None,
    ) -> bool:
        """Remove the span owned by a booking (for cancellation).

        Args:
            car_id: Car holding the reservation
            booking_id: Booking whose span should be removed
            extra_items: Additional TransactWriteItem dicts to commit atomically

        Returns:
            True if a span was removed, False if the booking held none

        Raises:
            NotFoundError: If the car does not exist.
            ReservationConflictError: If the car changed concurrently.
        """
        with self._car_lock(car_id):
            car = self.cars.get_car(car_id, consistent_read=True)
            index = next(
                (i for i, s in enumerate(car.availability.reserved) if s.booking_id == booking_id),
                None,
            )
            if index is None:
                return False

            update = {
                "Update": {
                    "TableName": self.db.table_name(self.TABLE),
                    "Key": self.db.serialize({"car_id": car_id}),
                    "UpdateExpression": f"REMOVE reserved_spans[{index}] SET #v = :next",
                    "ConditionExpression": self._version_condition(car.version),
                    "ExpressionAttributeNames": {"#v": "version"},
                    "ExpressionAttributeValues": self.db.serialize(
                        {":next": car.version + 1, ":expected": car.version}
                    ),
                }
            }
            if not self.db.transact_write([update, *(extra_items or [])]):
                log_reservation_operation(
                    logger,
                    "release",
                    car_id=car_id,
                    booking_id=booking_id,
                    result="conflict",
                    reason="concurrent_update",
                )
                raise ReservationConflictError(
                    details={"car_id": car_id, "reason": "concurrent_update"}
                )

        log_reservation_operation(
            logger, "release", car_id=car_id, booking_id=booking_id, result="success"
        )
        return True

    def _append_span_item(self, car: Car, span: ReservedSpan) -> dict[str, Any]:
        """Build the conditional update that appends a span to a car."""
        return {
            "Update": {
                "TableName": self.db.table_name(self.TABLE),
                "Key": self.db.serialize({"car_id": car.car_id}),
                "UpdateExpression": (
                    "SET reserved_spans = list_append("
                    "if_not_exists(reserved_spans, :empty), :span), "
                    "total_bookings = if_not_exists(total_bookings, :zero) + :one, "
                    "#v = :next"
                ),
                "ConditionExpression": self._version_condition(car.version),
                "ExpressionAttributeNames": {"#v": "version"},
                "ExpressionAttributeValues": self.db.serialize(
                    {
                        ":span": [span_to_item(span)],
                        ":empty": [],
                        ":zero": 0,
                        ":one": 1,
                        ":next": car.version + 1,
                        ":expected": car.version,
                    }
                ),
            }
        }

    @staticmethod
    def _version_condition(expected: int) -> str:
        # Cars stored before versioning have no version attribute
        if expected == 0:
            return "attribute_exists(car_id) AND (attribute_not_exists(#v) OR #v = :expected)"
        return "attribute_exists(car_id) AND #v = :expected"
