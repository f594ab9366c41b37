#!/usr/bin/env python3
"""Seed a development database with a demo fleet.

Creates the cars and bookings tables when asked and stores a handful of cars
with realistic INR pricing.

Usage:
    python scripts/seed_data.py --env dev
    python scripts/seed_data.py --env dev --create-tables
    python scripts/seed_data.py --env dev --region ap-south-1
"""

import argparse
import datetime as dt
import os
import sys
from typing import Any

import boto3

from rental.models import Car, CarAvailability, MaintenanceSpan, PricingProfile
from rental.services.cars import CarService
from rental.services.dynamodb import DynamoDBService

DEMO_FLEET: list[dict[str, Any]] = [
    {"car_id": "car-swift-001", "brand": "Maruti", "model": "Swift", "city": "Jaipur",
     "category": "hatchback", "rate": 1000, "deposit": 1000},
    {"car_id": "car-i20-001", "brand": "Hyundai", "model": "i20", "city": "Jaipur",
     "category": "hatchback", "rate": 1200, "deposit": 1500},
    {"car_id": "car-nexon-001", "brand": "Tata", "model": "Nexon", "city": "Delhi",
     "category": "suv", "rate": 1800, "deposit": 2000},
    {"car_id": "car-xuv700-001", "brand": "Mahindra", "model": "XUV700", "city": "Delhi",
     "category": "suv", "rate": 3200, "deposit": 5000},
    {"car_id": "car-nexonev-001", "brand": "Tata", "model": "Nexon EV", "city": "Mumbai",
     "category": "electric", "rate": 2200, "deposit": 3000},
]

TABLE_KEYS = {"cars": "car_id", "bookings": "booking_id"}


def create_tables(db: DynamoDBService) -> None:
    """Create the cars and bookings tables (on-demand billing)."""
    client = boto3.client("dynamodb")
    existing = set(client.list_tables()["TableNames"])
    for table, key in TABLE_KEYS.items():
        name = db.table_name(table)
        if name in existing:
            print(f"  Table {name} already exists")
            continue
        client.create_table(
            TableName=name,
            KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": key, "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        client.get_waiter("table_exists").wait(TableName=name)
        print(f"  Created table {name}")


def seed_fleet(service: CarService) -> int:
    """Store the demo fleet. Existing cars are left untouched."""
    now = dt.datetime.now(dt.UTC)
    created = 0
    for entry in DEMO_FLEET:
        maintenance = []
        if entry["car_id"] == "car-nexon-001":
            start = now + dt.timedelta(days=10)
            maintenance.append(
                MaintenanceSpan(start=start, end=start + dt.timedelta(days=2), reason="Periodic service")
            )
        car = Car(
            car_id=entry["car_id"],
            brand=entry["brand"],
            model=entry["model"],
            city=entry["city"],
            category=entry["category"],
            pricing=PricingProfile(
                base_rate_per_day=entry["rate"],
                extra_km_charge=10,
                security_deposit=entry["deposit"],
            ),
            availability=CarAvailability(maintenance=maintenance),
            created_at=now,
        )
        if service.create_car(car):
            created += 1
            print(f"  Added {car.display_name} ({car.car_id})")
        else:
            print(f"  Skipped {car.car_id} (already exists)")
    return created


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed demo fleet data")
    parser.add_argument("--env", default="dev", choices=["dev", "test", "prod"])
    parser.add_argument("--region", default=None, help="AWS region override")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables before seeding",
    )
    args = parser.parse_args()

    if args.region:
        os.environ["AWS_DEFAULT_REGION"] = args.region

    if args.env == "prod":
        confirm = input("WARNING: You are about to modify PRODUCTION data. Type 'yes' to continue: ")
        if confirm.lower() != "yes":
            print("Aborted.")
            return 1

    db = DynamoDBService(args.env)
    print(f"\nSeeding {args.env} environment (prefix: {db.name_prefix})\n")

    if args.create_tables:
        create_tables(db)
        print()

    created = seed_fleet(CarService(db))
    print(f"\nSeed completed: {created} cars added")
    return 0


if __name__ == "__main__":
    sys.exit(main())
