"""
Integration tests for drivers, trips, maintenance and fuel records.
"""

from datetime import date, timedelta

import pytest


@pytest.fixture
async def vehicle_id(client, auth_headers):
    response = await client.post("/api/vehicles", json={
        "plate_number": "KBX-100",
        "vehicle_type": "Minibus",
        "model": "Nissan Caravan",
        "manufacture_year": 2021,
    }, headers=auth_headers)
    assert response.status_code == 201
    return response.json()["data"]["id"]


@pytest.fixture
async def driver_id(client, auth_headers):
    response = await client.post("/api/drivers", json={
        "full_name": "Peter Kamau",
        "license_number": "DL-5501",
        "experience_years": 5,
        "email": "peter@test.com",
    }, headers=auth_headers)
    assert response.status_code == 201
    return response.json()["data"]["id"]


# Drivers

@pytest.mark.asyncio
async def test_driver_gets_generated_code(client, auth_headers, driver_id):
    response = await client.get(f"/api/drivers/{driver_id}", headers=auth_headers)
    driver = response.json()["data"]

    assert driver["driver_id"] == "DRV-001"
    assert driver["status"] == "Active"

    response = await client.get("/api/drivers/code/DRV-001", headers=auth_headers)
    assert response.json()["data"]["id"] == driver_id


@pytest.mark.asyncio
async def test_assign_and_unassign_vehicle(client, auth_headers, driver_id, vehicle_id):
    response = await client.put(
        f"/api/drivers/{driver_id}/assign-vehicle", json={"vehicle_id": vehicle_id}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["plate_number"] == "KBX-100"

    vehicle = (await client.get(f"/api/vehicles/{vehicle_id}", headers=auth_headers)).json()["data"]
    assert vehicle["assigned_driver_name"] == "Peter Kamau"

    stats = (await client.get("/api/drivers/stats/summary", headers=auth_headers)).json()["data"]
    assert stats["assigned"] == 1

    response = await client.put(f"/api/drivers/{driver_id}/unassign-vehicle", headers=auth_headers)
    assert response.json()["data"]["assigned_vehicle_id"] is None


@pytest.mark.asyncio
async def test_assign_unknown_vehicle(client, auth_headers, driver_id):
    response = await client.put(
        f"/api/drivers/{driver_id}/assign-vehicle", json={"vehicle_id": 9999}, headers=auth_headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_active_driver_list(client, auth_headers, driver_id):
    await client.put(f"/api/drivers/{driver_id}", json={"status": "On Leave"}, headers=auth_headers)

    response = await client.get("/api/drivers/active/list", headers=auth_headers)

    assert response.json()["data"] == []


# Trips

@pytest.mark.asyncio
async def test_trip_status_flow(client, auth_headers, driver_id, vehicle_id):
    response = await client.post("/api/trips", json={
        "route_from": "Nairobi",
        "route_to": "Nakuru",
        "driver_id": driver_id,
        "vehicle_id": vehicle_id,
        "trip_date": date.today().isoformat(),
        "trip_time": "08:30:00",
        "estimated_fuel": 25,
    }, headers=auth_headers)
    assert response.status_code == 201
    trip = response.json()["data"]
    assert trip["trip_id"] == f"TR-{date.today().year}-001"
    assert trip["driver_name"] == "Peter Kamau"

    response = await client.put(f"/api/trips/{trip['id']}/status", json={"status": "In Progress"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["start_time"] is not None

    response = await client.put(f"/api/trips/{trip['id']}/status", json={"status": "Completed"}, headers=auth_headers)
    assert response.json()["data"]["end_time"] is not None

    recent = (await client.get("/api/trips/recent/list", headers=auth_headers)).json()["data"]
    assert [t["id"] for t in recent] == [trip["id"]]

    today = (await client.get("/api/trips/today/list", headers=auth_headers)).json()["data"]
    assert [t["trip_id"] for t in today] == [trip["trip_id"]]

    by_code = await client.get(f"/api/trips/code/{trip['trip_id']}", headers=auth_headers)
    assert by_code.json()["data"]["id"] == trip["id"]


@pytest.mark.asyncio
async def test_trip_with_unknown_driver(client, auth_headers, vehicle_id):
    response = await client.post("/api/trips", json={
        "route_from": "A",
        "route_to": "B",
        "driver_id": 9999,
        "vehicle_id": vehicle_id,
        "trip_date": date.today().isoformat(),
    }, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ERR_CONSTRAINT"


@pytest.mark.asyncio
async def test_invalid_trip_status(client, auth_headers):
    response = await client.put("/api/trips/1/status", json={"status": "Lost"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ERR_VALIDATION"


@pytest.mark.asyncio
async def test_upcoming_trips_and_stats(client, auth_headers, driver_id, vehicle_id):
    base = {"route_from": "A", "route_to": "B", "driver_id": driver_id, "vehicle_id": vehicle_id}
    for offset in (3, 1, -2):
        await client.post("/api/trips", json={
            **base, "trip_date": (date.today() + timedelta(days=offset)).isoformat()
        }, headers=auth_headers)

    upcoming = (await client.get("/api/trips/upcoming/list", headers=auth_headers)).json()["data"]
    assert [t["trip_date"] for t in upcoming] == [
        (date.today() + timedelta(days=1)).isoformat(),
        (date.today() + timedelta(days=3)).isoformat(),
    ]

    stats = (await client.get("/api/trips/stats/summary", headers=auth_headers)).json()["data"]
    assert stats["total"] == 3
    assert stats["scheduled"] == 3


# Maintenance

@pytest.mark.asyncio
async def test_next_service_date_last_write_wins(client, auth_headers, vehicle_id):
    for service_date, next_service in [("2026-01-01", "2026-04-01"), ("2026-02-01", "2026-05-01")]:
        response = await client.post("/api/maintenance", json={
            "vehicle_id": vehicle_id,
            "service_date": service_date,
            "service_type": "Oil Change",
            "cost": 120,
            "next_service_date": next_service,
        }, headers=auth_headers)
        assert response.status_code == 201

    vehicle = (await client.get(f"/api/vehicles/{vehicle_id}", headers=auth_headers)).json()["data"]
    assert vehicle["next_service_date"] == "2026-05-01"

    history = (await client.get(f"/api/maintenance/vehicle/{vehicle_id}", headers=auth_headers)).json()["data"]
    assert [r["service_date"] for r in history] == ["2026-02-01", "2026-01-01"]


@pytest.mark.asyncio
async def test_service_window_routes(client, auth_headers, vehicle_id):
    due = (date.today() + timedelta(days=7)).isoformat()
    await client.put(f"/api/vehicles/{vehicle_id}", json={"next_service_date": due}, headers=auth_headers)

    upcoming = (await client.get("/api/maintenance/upcoming/list", headers=auth_headers)).json()["data"]
    assert [(v["id"], v["days_until_service"]) for v in upcoming] == [(vehicle_id, 7)]

    overdue = (await client.get("/api/maintenance/overdue/list", headers=auth_headers)).json()["data"]
    assert overdue == []


@pytest.mark.asyncio
async def test_monthly_cost_route(client, auth_headers, vehicle_id):
    for service_date, cost in [("2025-03-01", 100), ("2025-03-15", 50), ("2025-07-01", 30)]:
        await client.post("/api/maintenance", json={
            "vehicle_id": vehicle_id, "service_date": service_date,
            "service_type": "Tyres", "cost": cost,
        }, headers=auth_headers)

    response = await client.get("/api/maintenance/costs/monthly", params={"year": 2025}, headers=auth_headers)
    rows = response.json()["data"]
    assert [(r["month"], r["total_cost"], r["service_count"]) for r in rows] == [(3, 150, 2), (7, 30, 1)]

    response = await client.get("/api/maintenance/costs/monthly", params={"year": 2025, "month": 13}, headers=auth_headers)
    assert response.status_code == 400

    types = (await client.get("/api/maintenance/stats/types", headers=auth_headers)).json()["data"]
    assert types == [{"service_type": "Tyres", "count": 3, "total_cost": 180, "avg_cost": 60}]


# Fuel

@pytest.mark.asyncio
async def test_fuel_record_crud(client, auth_headers, vehicle_id, driver_id):
    response = await client.post("/api/fuel", json={
        "vehicle_id": vehicle_id,
        "driver_id": driver_id,
        "fuel_date": "2025-04-02",
        "fuel_liters": 40,
        "cost_per_liter": 1.25,
    }, headers=auth_headers)
    assert response.status_code == 201
    record = response.json()["data"]
    assert record["total_cost"] == 50
    assert record["fuel_type"] == "Petrol"

    response = await client.put(f"/api/fuel/{record['id']}", json={"notes": "Full tank"}, headers=auth_headers)
    assert response.json()["data"]["notes"] == "Full tank"
    assert response.json()["data"]["total_cost"] == 50

    by_vehicle = (await client.get(f"/api/fuel/vehicle/{vehicle_id}", headers=auth_headers)).json()["data"]
    assert len(by_vehicle) == 1

    stats = (await client.get("/api/fuel/stats/summary", headers=auth_headers)).json()["data"]
    assert stats["total_records"] == 1
    assert stats["total_cost"] == 50

    assert (await client.delete(f"/api/fuel/{record['id']}", headers=auth_headers)).status_code == 200
    assert (await client.get(f"/api/fuel/{record['id']}", headers=auth_headers)).status_code == 404
