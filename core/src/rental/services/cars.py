"""Car catalog service: loading, listing and storing cars."""

import datetime as dt
from typing import TYPE_CHECKING, Any

from rental.models import (
    Car,
    CarAvailability,
    CarStatus,
    ErrorCode,
    MaintenanceSpan,
    NotFoundError,
    PricingProfile,
    ReservedSpan,
)

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

CARS_TABLE = "cars"


def span_to_item(span: ReservedSpan) -> dict[str, Any]:
    """Convert a reserved span to its stored map form."""
    return {
        "start": span.start.isoformat(),
        "end": span.end.isoformat(),
        "booking_id": span.booking_id,
    }


def item_to_car(item: dict[str, Any]) -> Car:
    """Convert a DynamoDB item to a Car model.

    DynamoDB hands numbers back as Decimal, so every numeric field is cast.
    """
    pricing = item.get("pricing", {})
    created_at = item.get("created_at")

    return Car(
        car_id=item["car_id"],
        brand=item["brand"],
        model=item["model"],
        city=item.get("city", ""),
        category=item.get("category", ""),
        pricing=PricingProfile(
            base_rate_per_day=int(pricing["base_rate_per_day"]),
            extra_km_charge=int(pricing.get("extra_km_charge") or 0),
            security_deposit=int(pricing.get("security_deposit") or 0),
        ),
        availability=CarAvailability(
            manually_available=bool(item.get("manually_available", True)),
            status=CarStatus(item.get("status", CarStatus.AVAILABLE.value)),
            reserved=[
                ReservedSpan(
                    start=dt.datetime.fromisoformat(s["start"]),
                    end=dt.datetime.fromisoformat(s["end"]),
                    booking_id=s["booking_id"],
                )
                for s in item.get("reserved_spans", [])
            ],
            maintenance=[
                MaintenanceSpan(
                    start=dt.datetime.fromisoformat(m["start"]),
                    end=dt.datetime.fromisoformat(m["end"]),
                    reason=m.get("reason", ""),
                )
                for m in item.get("maintenance_spans", [])
            ],
        ),
        total_bookings=int(item.get("total_bookings", 0)),
        version=int(item.get("version", 0)),
        created_at=dt.datetime.fromisoformat(created_at) if created_at else None,
    )


def car_to_item(car: Car) -> dict[str, Any]:
    """Convert a Car model to a DynamoDB item."""
    item: dict[str, Any] = {
        "car_id": car.car_id,
        "brand": car.brand,
        "model": car.model,
        "city": car.city,
        "category": car.category,
        "pricing": {
            "base_rate_per_day": car.pricing.base_rate_per_day,
            "extra_km_charge": car.pricing.extra_km_charge,
            "security_deposit": car.pricing.security_deposit,
        },
        "manually_available": car.availability.manually_available,
        "status": car.availability.status.value,
        "reserved_spans": [span_to_item(s) for s in car.availability.reserved],
        "maintenance_spans": [
            {"start": m.start.isoformat(), "end": m.end.isoformat(), "reason": m.reason}
            for m in car.availability.maintenance
        ],
        "total_bookings": car.total_bookings,
        "version": car.version,
    }
    if car.created_at:
        item["created_at"] = car.created_at.isoformat()
    return item


class CarService:
    """Service for reading and storing cars."""

    TABLE = CARS_TABLE

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize car service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def get_car(self, car_id: str, consistent_read: bool = False) -> Car:
        """Load a car by ID.

        Raises:
            NotFoundError: If the car does not exist.
        """
        item = self.db.get_item(self.TABLE, {"car_id": car_id}, consistent_read=consistent_read)
        if not item:
            raise NotFoundError(ErrorCode.CAR_NOT_FOUND, details={"car_id": car_id})
        return item_to_car(item)

    def list_cars(
        self,
        city: str | None = None,
        category: str | None = None,
    ) -> list[Car]:
        """List all cars, optionally filtered by city and category.

        Filters are case-insensitive. Results are ordered by brand, model, ID.
        """
        cars = [item_to_car(item) for item in self.db.scan(self.TABLE)]
        if city:
            cars = [c for c in cars if c.city.lower() == city.lower()]
        if category:
            cars = [c for c in cars if c.category.lower() == category.lower()]
        return sorted(cars, key=lambda c: (c.brand, c.model, c.car_id))

    def count_cars(self) -> int:
        return len(self.db.scan(self.TABLE))

    def create_car(self, car: Car) -> bool:
        """Store a new car.

        Returns:
            True if created, False if a car with this ID already exists
        """
        return self.db.put_item(
            self.TABLE,
            car_to_item(car),
            condition_expression="attribute_not_exists(car_id)",
        )

    def add_maintenance(self, car_id: str, span: MaintenanceSpan) -> bool:
        """Append a maintenance window to a car.

        Returns:
            True if added, False if the car does not exist
        """
        result = self.db.update_item(
            self.TABLE,
            key={"car_id": car_id},
            update_expression=(
                "SET maintenance_spans = list_append("
                "if_not_exists(maintenance_spans, :empty), :span)"
            ),
            expression_attribute_values={
                ":span": [
                    {
                        "start": span.start.isoformat(),
                        "end": span.end.isoformat(),
                        "reason": span.reason,
                    }
                ],
                ":empty": [],
            },
            condition_expression="attribute_exists(car_id)",
        )
        return result is not None
