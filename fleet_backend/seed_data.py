"""
Database seeding script for development data.

Creates the admin user and a small sample fleet (vehicles, drivers, trips,
maintenance and fuel records). Run this script after the database is set up.
"""

import asyncio
import sys
from datetime import date, time, timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleet_backend.app.core.config import settings
from fleet_backend.app.db.session import create_database
from fleet_backend.app.models.user import User
from fleet_backend.app.models.enums import UserRole, VehicleStatus, VehicleType, TripStatus
from fleet_backend.app.core.security import get_password_hash
from fleet_backend.app.repositories.drivers import DriverRepository
from fleet_backend.app.repositories.fuel import FuelRecordRepository
from fleet_backend.app.repositories.maintenance import MaintenanceRepository
from fleet_backend.app.repositories.trips import TripRepository
from fleet_backend.app.repositories.vehicles import VehicleRepository
from sqlalchemy import insert, select

VEHICLES = [
    {"plate_number": "KCA-101A", "vehicle_type": VehicleType.BUS, "model": "Toyota Coaster",
     "manufacture_year": 2019, "fuel_capacity": 95, "current_fuel": 60, "mileage": 84000},
    {"plate_number": "KCB-202B", "vehicle_type": VehicleType.MINIBUS, "model": "Nissan Caravan",
     "manufacture_year": 2021, "fuel_capacity": 65, "current_fuel": 40, "mileage": 36000},
    {"plate_number": "KCC-303C", "vehicle_type": VehicleType.SUV, "model": "Toyota Prado",
     "manufacture_year": 2020, "fuel_capacity": 87, "current_fuel": 20, "mileage": 52000,
     "status": VehicleStatus.UNDER_MAINTENANCE},
]

DRIVERS = [
    {"full_name": "James Mwangi", "license_number": "DL-100234", "experience_years": 12, "phone": "0711000001"},
    {"full_name": "Mary Achieng", "license_number": "DL-100781", "experience_years": 6, "phone": "0711000002"},
]


async def seed_admin(db) -> None:
    existing_admin = await db.fetch_one(select(User.id).where(User.username == "admin"))
    if existing_admin:
        print("ℹ️  Admin user already exists, skipping")
        return

    await db.execute(insert(User).values(
        email="admin@fleet.local",
        username="admin",
        hashed_password=get_password_hash("admin123"),
        full_name="Fleet Administrator",
        role=UserRole.ADMIN,
        is_active=True,
    ))
    print("✅ Created admin user (username: admin, password: admin123)")


async def seed_fleet(db) -> None:
    vehicles = VehicleRepository(db)
    if await vehicles.get_all():
        print("ℹ️  Vehicles already present, skipping sample fleet")
        return

    drivers = DriverRepository(db)
    trips = TripRepository(db)
    maintenance = MaintenanceRepository(db)
    fuel = FuelRecordRepository(db)
    today = date.today()

    created_vehicles = [await vehicles.create(fields) for fields in VEHICLES]
    created_drivers = []
    for fields, vehicle in zip(DRIVERS, created_vehicles):
        created_drivers.append(await drivers.create({**fields, "assigned_vehicle_id": vehicle["id"]}))
    print(f"✅ Created {len(created_vehicles)} vehicles and {len(created_drivers)} drivers")

    for offset, status in [(-3, TripStatus.COMPLETED), (0, TripStatus.IN_PROGRESS), (2, TripStatus.SCHEDULED)]:
        for driver, vehicle in zip(created_drivers, created_vehicles):
            await trips.create({
                "route_from": "Nairobi Depot",
                "route_to": "Jomo Kenyatta Airport",
                "driver_id": driver["id"],
                "vehicle_id": vehicle["id"],
                "trip_date": today + timedelta(days=offset),
                "trip_time": time(8, 0),
                "estimated_fuel": 18,
                "distance_km": 35,
                "status": status,
            })

    for vehicle in created_vehicles:
        await maintenance.create({
            "vehicle_id": vehicle["id"],
            "service_date": today - timedelta(days=20),
            "service_type": "Oil Change",
            "cost": 85,
            "mileage_at_service": vehicle["mileage"],
            "next_service_date": today + timedelta(days=70),
            "service_provider": "City Motors",
        })
        await fuel.create({
            "vehicle_id": vehicle["id"],
            "fuel_date": today - timedelta(days=3),
            "fuel_liters": 45,
            "cost_per_liter": 1.6,
            "odometer_reading": vehicle["mileage"],
        })
    print("✅ Created sample trips, maintenance and fuel records")


async def seed_data():
    db = create_database(settings)
    try:
        print("🌱 Starting seeding...")
        await db.create_all()
        await seed_admin(db)
        await seed_fleet(db)
        print("\n🎉 Seeding completed successfully!")
    finally:
        await db.dispose()


if __name__ == "__main__":
    asyncio.run(seed_data())
