"""Fixtures for API contract tests.

The app is exercised end to end against moto-backed tables; cached services
are reset by the root conftest so each test builds them inside its mock.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from helpers import make_car, utc
from rental.models import CarAvailability, MaintenanceSpan, ReservedSpan


@pytest.fixture
def client(create_tables: None) -> TestClient:
    """Create a test client for the API."""
    from rental_api.main import app

    return TestClient(app)


@pytest.fixture
def fleet(car_service: Any) -> None:
    """Store a small fleet across two cities."""
    cars = [
        make_car("car-swift-001", base_rate=1000),
        make_car("car-i20-001", base_rate=1200, brand="Hyundai", model="i20"),
        make_car(
            "car-nexon-001",
            base_rate=1800,
            brand="Tata",
            model="Nexon",
            city="Delhi",
            category="suv",
            availability=CarAvailability(
                maintenance=[
                    MaintenanceSpan(start=utc(2026, 2, 14), end=utc(2026, 2, 15), reason="Service")
                ]
            ),
        ),
        make_car(
            "car-xuv700-001",
            base_rate=3200,
            brand="Mahindra",
            model="XUV700",
            city="Delhi",
            category="suv",
            availability=CarAvailability(
                reserved=[
                    ReservedSpan(start=utc(2026, 2, 10), end=utc(2026, 2, 13, 10), booking_id="BK-0")
                ]
            ),
        ),
    ]
    for car in cars:
        car_service.create_car(car)
