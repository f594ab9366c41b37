"""Unit tests for availability checks and alternative suggestions."""

from unittest.mock import MagicMock

import pytest

from helpers import make_car, utc
from rental.models import (
    Car,
    CarAvailability,
    ErrorCode,
    Interval,
    MaintenanceSpan,
    NotFoundError,
    ReservedSpan,
    UnavailableReason,
)
from rental.services.availability import AvailabilityService, check, filter_available


def booked_car(start, end, car_id: str = "car-swift-001", **availability) -> Car:
    """Car holding one reservation."""
    return make_car(
        car_id,
        availability=CarAvailability(
            reserved=[ReservedSpan(start=start, end=end, booking_id="BK-1")],
            **availability,
        ),
    )


class TestCheck:
    """Tests for the single-car check."""

    def test_free_car_is_available(self, sample_car: Car, sample_interval: Interval) -> None:
        result = check(sample_car, sample_interval)
        assert result.available
        assert result.reason == UnavailableReason.NONE
        assert result.message is None

    def test_overlapping_reservation_is_booked(self) -> None:
        car = booked_car(utc(2026, 2, 10, 10), utc(2026, 2, 12, 10))
        result = check(car, Interval(start=utc(2026, 2, 11), end=utc(2026, 2, 13)))
        assert not result.available
        assert result.reason == UnavailableReason.BOOKED
        assert result.message == "Already booked"

    def test_touching_reservation_is_booked(self) -> None:
        car = booked_car(utc(2026, 2, 10, 10), utc(2026, 2, 12, 10))
        result = check(car, Interval(start=utc(2026, 2, 12, 10), end=utc(2026, 2, 14, 10)))
        assert result.reason == UnavailableReason.BOOKED

    def test_maintenance(self) -> None:
        car = make_car(
            availability=CarAvailability(
                maintenance=[
                    MaintenanceSpan(start=utc(2026, 2, 10), end=utc(2026, 2, 12), reason="Service")
                ]
            )
        )
        result = check(car, Interval(start=utc(2026, 2, 11), end=utc(2026, 2, 15)))
        assert result.reason == UnavailableReason.MAINTENANCE
        assert result.message == "Under maintenance"

    def test_manually_disabled(self, sample_interval: Interval) -> None:
        car = make_car(availability=CarAvailability(manually_available=False))
        result = check(car, sample_interval)
        assert result.reason == UnavailableReason.MANUALLY_DISABLED
        assert result.message == "Not available"

    def test_booked_reported_before_other_reasons(self) -> None:
        car = booked_car(
            utc(2026, 2, 10),
            utc(2026, 2, 12),
            manually_available=False,
            maintenance=[MaintenanceSpan(start=utc(2026, 2, 10), end=utc(2026, 2, 12))],
        )
        result = check(car, Interval(start=utc(2026, 2, 11), end=utc(2026, 2, 13)))
        assert result.reason == UnavailableReason.BOOKED

    def test_maintenance_reported_before_disabled(self) -> None:
        car = make_car(
            availability=CarAvailability(
                manually_available=False,
                maintenance=[MaintenanceSpan(start=utc(2026, 2, 10), end=utc(2026, 2, 12))],
            )
        )
        result = check(car, Interval(start=utc(2026, 2, 11), end=utc(2026, 2, 13)))
        assert result.reason == UnavailableReason.MAINTENANCE


class TestFilterAvailable:
    def test_matches_single_car_check(self, sample_interval: Interval) -> None:
        fleet = [
            make_car("free"),
            booked_car(utc(2026, 2, 12), utc(2026, 2, 14), car_id="booked"),
            booked_car(utc(2026, 2, 16, 19), utc(2026, 2, 18), car_id="touching"),
            make_car("disabled", availability=CarAvailability(manually_available=False)),
        ]

        kept = filter_available(fleet, sample_interval)

        assert [c.car_id for c in kept] == ["free"]
        assert kept == [c for c in fleet if check(c, sample_interval).available]


class TestAvailabilityService:
    """Tests for AvailabilityService with a mocked car catalog."""

    @pytest.fixture
    def cars(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def service(self, cars: MagicMock) -> AvailabilityService:
        return AvailabilityService(cars)

    def test_check_car_unknown(self, service: AvailabilityService, cars: MagicMock,
                               sample_interval: Interval) -> None:
        cars.get_car.side_effect = NotFoundError(ErrorCode.CAR_NOT_FOUND)
        with pytest.raises(NotFoundError):
            service.check_car("missing", sample_interval)

    def test_list_available_passes_filters(self, service: AvailabilityService, cars: MagicMock,
                                           sample_interval: Interval) -> None:
        cars.list_cars.return_value = [make_car("a"), booked_car(
            utc(2026, 2, 14), utc(2026, 2, 15), car_id="b")]

        result = service.list_available(sample_interval, city="Jaipur", category=None)

        cars.list_cars.assert_called_once_with(city="Jaipur", category=None)
        assert [c.car_id for c in result] == ["a"]


class TestSuggestAlternatives:
    """Tests for nearby-window suggestions."""

    @pytest.fixture
    def service(self) -> AvailabilityService:
        return AvailabilityService(MagicMock())

    def test_suggests_closest_free_windows(self, service: AvailabilityService) -> None:
        car = booked_car(utc(2026, 3, 10), utc(2026, 3, 12))
        request = Interval(start=utc(2026, 3, 10), end=utc(2026, 3, 11))

        suggestions = service.suggest_alternatives(car, request, now=utc(2026, 1, 1))

        assert len(suggestions) == 3
        for s in suggestions:
            assert s.duration_hours() == 24
            assert check(car, s).available
        # Earlier shift first at equal distance
        assert suggestions[0].start == utc(2026, 3, 8)

    def test_skips_past_windows(self, service: AvailabilityService) -> None:
        car = booked_car(utc(2026, 3, 10), utc(2026, 3, 12))
        request = Interval(start=utc(2026, 3, 10), end=utc(2026, 3, 11))

        suggestions = service.suggest_alternatives(car, request, now=utc(2026, 3, 10))

        assert all(s.start >= utc(2026, 3, 10) for s in suggestions)

    def test_disabled_car_has_no_alternatives(self, service: AvailabilityService,
                                              sample_interval: Interval) -> None:
        car = make_car(availability=CarAvailability(manually_available=False))
        assert service.suggest_alternatives(car, sample_interval, now=utc(2026, 1, 1)) == []
