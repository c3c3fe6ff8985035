"""
Centralized Test Configuration.
"""

from datetime import date

import pytest
from httpx import AsyncClient, ASGITransport

from fleet_backend.app.main import app
from fleet_backend.app.db.session import Database, get_database
from fleet_backend.app.models.enums import VehicleType
from fleet_backend.app.repositories.drivers import DriverRepository
from fleet_backend.app.repositories.fuel import FuelRecordRepository
from fleet_backend.app.repositories.maintenance import MaintenanceRepository
from fleet_backend.app.repositories.trips import TripRepository
from fleet_backend.app.repositories.vehicles import VehicleRepository


# File-backed SQLite: the reporting layer runs queries concurrently on
# separate pooled connections, which an in-memory database cannot share.
@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'fleet_test.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture(autouse=True)
def apply_overrides(database):
    """Point every request at the per-test database."""
    app.dependency_overrides[get_database] = lambda: database
    yield
    app.dependency_overrides = {}


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def auth_headers(client):
    """Register a back-office user and return its bearer header."""
    response = await client.post("/api/auth/register", json={
        "username": "fleetadmin",
        "email": "fleetadmin@test.com",
        "password": "password123",
        "full_name": "Fleet Admin",
        "role": "admin"
    })
    assert response.status_code == 201
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


# Repositories bound to the test database

@pytest.fixture
def vehicles(database):
    return VehicleRepository(database)


@pytest.fixture
def drivers(database):
    return DriverRepository(database)


@pytest.fixture
def trips(database):
    return TripRepository(database)


@pytest.fixture
def maintenance(database):
    return MaintenanceRepository(database)


@pytest.fixture
def fuel(database):
    return FuelRecordRepository(database)


# Sample records

@pytest.fixture
async def bus(vehicles):
    return await vehicles.create({
        "plate_number": "ABC-123",
        "vehicle_type": VehicleType.BUS,
        "model": "Toyota Coaster",
        "manufacture_year": 2020,
        "fuel_capacity": 100,
        "current_fuel": 60,
        "mileage": 45000,
    })


@pytest.fixture
async def van(vehicles):
    return await vehicles.create({
        "plate_number": "XYZ-789",
        "vehicle_type": VehicleType.VAN,
        "model": "Ford Transit",
        "manufacture_year": 2019,
    })


@pytest.fixture
async def driver(drivers, bus):
    return await drivers.create({
        "full_name": "John Doe",
        "license_number": "LIC-0001",
        "experience_years": 8,
        "phone": "0712345678",
        "assigned_vehicle_id": bus["id"],
    })


@pytest.fixture
async def trip(trips, driver, bus):
    return await trips.create({
        "route_from": "Nairobi",
        "route_to": "Mombasa",
        "driver_id": driver["id"],
        "vehicle_id": bus["id"],
        "trip_date": date.today(),
        "estimated_fuel": 40,
        "distance_km": 480,
    })
