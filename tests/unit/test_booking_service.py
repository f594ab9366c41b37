"""Unit tests for BookingService with mocked persistence."""

from unittest.mock import MagicMock

import pytest

from helpers import make_booking, make_car, utc
from rental.models import (
    BookingError,
    BookingStatus,
    ErrorCode,
    Interval,
    NotFoundError,
    ReservationConflictError,
)
from rental.services.booking import (
    BookingService,
    _generate_booking_id,
    booking_to_item,
    item_to_booking,
)


@pytest.fixture
def mock_db() -> MagicMock:
    """Create a mock DynamoDB service."""
    db = MagicMock()
    db.table_name.side_effect = lambda table: f"test-rental-{table}"
    db.serialize.side_effect = lambda item: item
    return db


@pytest.fixture
def mock_cars() -> MagicMock:
    cars = MagicMock()
    cars.get_car.return_value = make_car()
    return cars


@pytest.fixture
def mock_reservations() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(mock_db: MagicMock, mock_cars: MagicMock, mock_reservations: MagicMock) -> BookingService:
    return BookingService(mock_db, mock_cars, mock_reservations)


class TestBookingId:
    def test_format(self) -> None:
        booking_id = _generate_booking_id()
        prefix, year, suffix = booking_id.split("-")
        assert prefix == "BK"
        assert year.isdigit()
        assert len(suffix) == 8
        assert suffix == suffix.upper()


class TestItemConversion:
    def test_item_round_trip_preserves_fields(self) -> None:
        booking = make_booking(total_price=3544)
        assert item_to_booking(booking_to_item(booking)).model_dump() == booking.model_dump()

    def test_timestamps_are_fixed_width(self) -> None:
        item = booking_to_item(make_booking(created_at=utc(2026, 1, 10, 12)))
        assert item["created_at"] == "2026-01-10T12:00:00.000000+00:00"


class TestConfirm:
    """Tests for booking confirmation."""

    def test_prices_from_selected_tier(self, service: BookingService,
                                       sample_interval: Interval) -> None:
        booking = service.confirm("car-swift-001", sample_interval, "user-1", tier_id="tier_400")

        assert booking.total_price == 5316
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.tier_id == "tier_400"

    def test_booking_put_rides_with_reservation(self, service: BookingService,
                                                mock_reservations: MagicMock,
                                                sample_interval: Interval) -> None:
        booking = service.confirm(
            "car-swift-001", sample_interval, "user-1", booking_id="BK-2026-TEST0001"
        )

        args, kwargs = mock_reservations.reserve.call_args
        assert args == ("car-swift-001", sample_interval, "BK-2026-TEST0001")
        (put,) = kwargs["extra_items"]
        assert put["Put"]["TableName"] == "test-rental-bookings"
        assert put["Put"]["ConditionExpression"] == "attribute_not_exists(booking_id)"
        assert put["Put"]["Item"]["total_price"] == booking.total_price

    def test_conflict_propagates(self, service: BookingService, mock_reservations: MagicMock,
                                 sample_interval: Interval) -> None:
        mock_reservations.reserve.side_effect = ReservationConflictError()

        with pytest.raises(ReservationConflictError) as exc_info:
            service.confirm("car-swift-001", sample_interval, "user-1")
        assert exc_info.value.code == ErrorCode.CAR_UNAVAILABLE

    def test_unknown_tier_rejected_before_reserving(self, service: BookingService,
                                                    mock_reservations: MagicMock,
                                                    sample_interval: Interval) -> None:
        with pytest.raises(BookingError) as exc_info:
            service.confirm("car-swift-001", sample_interval, "user-1", tier_id="tier_9000")

        assert exc_info.value.code == ErrorCode.UNKNOWN_TIER
        mock_reservations.reserve.assert_not_called()


class TestGetAndCancel:
    """Tests for lookup and cancellation."""

    def test_get_missing(self, service: BookingService, mock_db: MagicMock) -> None:
        mock_db.get_item.return_value = None
        with pytest.raises(NotFoundError) as exc_info:
            service.get("BK-NOPE")
        assert exc_info.value.code == ErrorCode.BOOKING_NOT_FOUND

    def test_cancel_releases_with_status_update(self, service: BookingService,
                                                mock_db: MagicMock,
                                                mock_reservations: MagicMock) -> None:
        mock_db.get_item.return_value = booking_to_item(make_booking("BK-1"))
        mock_reservations.release.return_value = True

        result = service.cancel("BK-1", now=utc(2026, 1, 20))

        assert result.status == BookingStatus.CANCELLED
        assert result.updated_at == utc(2026, 1, 20)
        args, kwargs = mock_reservations.release.call_args
        assert args == ("car-swift-001", "BK-1")
        (update,) = kwargs["extra_items"]
        assert update["Update"]["ConditionExpression"] == "#s = :current"
        mock_db.transact_write.assert_not_called()

    def test_cancel_without_span_updates_status_alone(self, service: BookingService,
                                                      mock_db: MagicMock,
                                                      mock_reservations: MagicMock) -> None:
        mock_db.get_item.return_value = booking_to_item(make_booking("BK-1"))
        mock_reservations.release.return_value = False
        mock_db.transact_write.return_value = True

        assert service.cancel("BK-1").status == BookingStatus.CANCELLED
        mock_db.transact_write.assert_called_once()

    @pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.COMPLETED])
    def test_cancel_finished_booking_rejected(self, service: BookingService,
                                              mock_db: MagicMock,
                                              mock_reservations: MagicMock,
                                              status: BookingStatus) -> None:
        mock_db.get_item.return_value = booking_to_item(make_booking("BK-1", status=status))

        with pytest.raises(BookingError) as exc_info:
            service.cancel("BK-1")

        assert exc_info.value.code == ErrorCode.BOOKING_NOT_CANCELLABLE
        mock_reservations.release.assert_not_called()
