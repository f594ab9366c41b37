"""Pytest configuration and fixtures for car rental backend tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- Sample data fixtures (cars, intervals, bookings)
- Service wiring against the mocked tables
"""

import os
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-rental")
os.environ.setdefault("ENVIRONMENT", "test")

# Only set fake credentials for moto if no real credentials are present
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from helpers import make_car, utc  # noqa: E402
from rental.models import Car, Interval  # noqa: E402

# === Singleton Reset ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Reset the DynamoDB singleton and cached API services around each test.

    Tests using mock_aws then get fresh instances inside the mock context
    rather than reusing ones built against a previous context.
    """
    from rental_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === DynamoDB Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        yield client


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create the cars and bookings tables."""
    for name, key in (
        ("test-rental-cars", "car_id"),
        ("test-rental-bookings", "booking_id"),
    ):
        dynamodb_client.create_table(
            TableName=name,
            KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": key, "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )


@pytest.fixture
def db(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from rental.services.dynamodb import DynamoDBService

    return DynamoDBService("test")


@pytest.fixture
def car_service(db: Any) -> Any:
    from rental.services.cars import CarService

    return CarService(db)


@pytest.fixture
def reservation_service(db: Any, car_service: Any) -> Any:
    from rental.services.reservation import ReservationService

    return ReservationService(db, car_service)


@pytest.fixture
def booking_service(db: Any, car_service: Any, reservation_service: Any) -> Any:
    from rental.services.booking import BookingService

    return BookingService(db, car_service, reservation_service)


# === Sample Data Fixtures ===


@pytest.fixture
def sample_car() -> Car:
    """Car with base rate 1000/day and no reservations."""
    return make_car()


@pytest.fixture
def sample_interval() -> Interval:
    """81-hour interval: 2026-02-13 10:00 to 2026-02-16 19:00 UTC."""
    return Interval(start=utc(2026, 2, 13, 10), end=utc(2026, 2, 16, 19))


@pytest.fixture
def stored_car(car_service: Any, sample_car: Car) -> Car:
    """Sample car written to the mocked cars table."""
    car_service.create_car(sample_car)
    return sample_car
