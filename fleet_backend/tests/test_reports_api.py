"""
Integration tests for the reporting endpoints and the public routes.
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncEngine

from fleet_backend.app.main import app
from fleet_backend.app.repositories.vehicles import VehicleRepository


@pytest.fixture
async def small_fleet(client, auth_headers):
    vehicle = (await client.post("/api/vehicles", json={
        "plate_number": "RPT-001", "vehicle_type": "Bus", "model": "Isuzu NQR", "manufacture_year": 2019,
    }, headers=auth_headers)).json()["data"]
    driver = (await client.post("/api/drivers", json={
        "full_name": "Grace Wanjiru", "license_number": "DL-7001",
    }, headers=auth_headers)).json()["data"]

    year = date.today().year
    for month, liters in [(1, 30), (2, 10)]:
        await client.post("/api/fuel", json={
            "vehicle_id": vehicle["id"], "driver_id": driver["id"],
            "fuel_date": date(year, month, 5).isoformat(), "fuel_liters": liters, "cost_per_liter": 2,
        }, headers=auth_headers)
    await client.post("/api/trips", json={
        "route_from": "Depot", "route_to": "Airport", "driver_id": driver["id"], "vehicle_id": vehicle["id"],
        "trip_date": date(year, 1, 6).isoformat(), "estimated_fuel": 12, "distance_km": 30,
        "status": "Completed",
    }, headers=auth_headers)
    return {"vehicle": vehicle, "driver": driver, "year": year}


@pytest.mark.asyncio
async def test_health_and_root_are_public(client):
    assert (await client.get("/health")).json()["status"] == "healthy"
    assert (await client.get("/")).status_code == 200


@pytest.mark.asyncio
async def test_reports_require_token(client):
    assert (await client.get("/api/reports/dashboard")).status_code == 401


@pytest.mark.asyncio
async def test_dashboard_shape(client, auth_headers, small_fleet):
    response = await client.get("/api/reports/dashboard", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert set(data) == {"stats", "charts", "recentTrips"}
    assert set(data["stats"]) == {"vehicles", "drivers", "trips", "maintenance"}
    assert data["stats"]["vehicles"]["total"] == 1
    assert data["charts"]["fuelCosts"] == [
        {"month": "January", "cost": 60},
        {"month": "February", "cost": 20},
    ]
    assert data["charts"]["operationalCosts"] == [
        {"month": "January", "fuel_cost": 60, "maintenance_cost": 0, "total_cost": 60},
    ]
    assert len(data["recentTrips"]) == 1


@pytest.mark.asyncio
async def test_fuel_consumption_filters(client, auth_headers, small_fleet):
    year = small_fleet["year"]
    response = await client.get("/api/reports/fuel-consumption", params={
        "startDate": f"{year}-02-01",
        "vehicleId": small_fleet["vehicle"]["id"],
    }, headers=auth_headers)

    data = response.json()["data"]
    assert len(data["records"]) == 1
    assert data["summary"]["total_fuel"] == 10
    assert data["summary"]["total_cost"] == 20


@pytest.mark.asyncio
async def test_trip_summary_and_utilization(client, auth_headers, small_fleet):
    params = {"driverId": small_fleet["driver"]["id"]}

    summary = (await client.get("/api/reports/trip-summary", params=params, headers=auth_headers)).json()["data"]
    assert summary["summary"]["total_trips"] == 1
    assert summary["summary"]["completed_trips"] == 1

    utilization = (await client.get("/api/reports/vehicle-utilization", headers=auth_headers)).json()["data"]
    assert utilization == [{
        "id": small_fleet["vehicle"]["id"],
        "plate_number": "RPT-001",
        "model": "Isuzu NQR",
        "status": "Active",
        "total_trips": 1,
        "completed_trips": 1,
        "total_fuel_consumed": 12,
        "total_distance": 30,
    }]


@pytest.mark.asyncio
async def test_bad_report_filter(client, auth_headers):
    response = await client.get("/api/reports/trip-summary", params={"startDate": "yesterday"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ERR_VALIDATION"


@pytest.mark.asyncio
async def test_dashboard_read_failure_returns_500_envelope(auth_headers, small_fleet, mocker):
    mocker.patch.object(VehicleRepository, "get_stats", side_effect=RuntimeError("vehicle stats unavailable"))

    # unhandled errors are re-raised by the server middleware after the response is sent
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/reports/dashboard", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "An internal server error occurred",
        "error": "ERR_INTERNAL",
    }


@pytest.mark.asyncio
async def test_pool_exhaustion_returns_503(client, auth_headers, mocker):
    exhausted = PoolTimeoutError("QueuePool limit of size 5 overflow 10 reached")
    mocker.patch.object(AsyncEngine, "connect", side_effect=exhausted)
    mocker.patch.object(AsyncEngine, "begin", side_effect=exhausted)

    response = await client.get("/api/reports/dashboard", headers=auth_headers)

    assert response.status_code == 503
    assert response.json() == {
        "success": False,
        "message": "Timed out waiting for a database connection",
        "error": "ERR_DB_TIMEOUT",
    }
