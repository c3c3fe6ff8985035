"""
Reporting service tests.

Dashboard composition, monthly cost series and the filtered reports.
"""

import asyncio
from datetime import date

import pytest

from fleet_backend.app.core.config import Settings
from fleet_backend.app.models.enums import TripStatus
from fleet_backend.app.models.trip import Trip
from fleet_backend.app.repositories.maintenance import MaintenanceRepository
from fleet_backend.app.repositories.vehicles import VehicleRepository
from fleet_backend.app.services.reporting import (
    ReportFilters,
    ReportingService,
    build_filter_conditions,
    gather_settled,
    month_label,
)


@pytest.fixture
def reporting(database):
    return ReportingService(database)


@pytest.fixture
async def fleet_history(trips, maintenance, fuel, drivers, driver, bus, van):
    """Two vehicles, two drivers and a few months of 2024 activity."""
    second_driver = await drivers.create({"full_name": "Jane Roe", "license_number": "LIC-0002"})

    def trip_on(day, vehicle, who, status=TripStatus.COMPLETED, fuel_used=10, distance=100):
        return trips.create({
            "route_from": "Depot", "route_to": "Site", "trip_date": day,
            "vehicle_id": vehicle["id"], "driver_id": who["id"], "status": status,
            "estimated_fuel": fuel_used, "distance_km": distance,
        })

    await trip_on(date(2024, 1, 5), bus, driver)
    await trip_on(date(2024, 1, 20), van, second_driver)
    await trip_on(date(2024, 1, 22), bus, driver, status=TripStatus.CANCELLED, fuel_used=5, distance=50)
    await trip_on(date(2024, 2, 14), bus, driver, status=TripStatus.IN_PROGRESS)

    for vehicle, who, day, liters, price in [
        (bus, driver, date(2024, 1, 6), 50, 1.5),
        (van, second_driver, date(2024, 1, 21), 20, 2.0),
        (bus, driver, date(2024, 3, 3), 10, 2.0),
    ]:
        await fuel.create({
            "vehicle_id": vehicle["id"], "driver_id": who["id"], "fuel_date": day,
            "fuel_liters": liters, "cost_per_liter": price,
        })

    for vehicle, day, cost in [
        (bus, date(2024, 1, 10), 100),
        (van, date(2024, 1, 12), 60),
        (bus, date(2024, 2, 2), 40),
    ]:
        await maintenance.create({
            "vehicle_id": vehicle["id"], "service_date": day,
            "service_type": "Inspection", "cost": cost,
        })

    return {"second_driver": second_driver}


@pytest.mark.asyncio
async def test_month_label():
    assert month_label(1) == "January"
    assert month_label(12) == "December"


@pytest.mark.asyncio
async def test_filter_conditions_only_cover_given_filters():
    assert build_filter_conditions(ReportFilters(), date_column=Trip.trip_date) == []

    conditions = build_filter_conditions(
        ReportFilters(start_date=date(2024, 1, 1), vehicle_id=3, driver_id=4),
        date_column=Trip.trip_date,
        vehicle_column=Trip.vehicle_id,
    )
    # driver filter is dropped when the report has no driver column
    assert len(conditions) == 2


@pytest.mark.asyncio
async def test_dashboard_stats(reporting, fleet_history, trip):
    dashboard = await reporting.get_dashboard(today=date.today())
    stats = dashboard["stats"]

    assert stats["vehicles"]["total"] == 2
    assert stats["drivers"]["total"] == 2
    assert stats["drivers"]["assigned"] == 1
    assert stats["trips"]["total"] == 5
    assert stats["trips"]["today"] == 1
    assert stats["maintenance"]["total_services"] == 3

    for bucket, keys in {
        "vehicles": ("active", "maintenance", "inactive"),
        "trips": ("scheduled", "in_progress", "completed", "cancelled"),
    }.items():
        assert sum(stats[bucket][key] for key in keys) == stats[bucket]["total"]

    recent = dashboard["recentTrips"]
    assert len(recent) == 5
    assert recent[0]["id"] == trip["id"]


@pytest.mark.asyncio
async def test_dashboard_recent_trips_limit(database, fleet_history):
    reporting = ReportingService(database, config=Settings(dashboard_recent_trips=2))
    dashboard = await reporting.get_dashboard(today=date(2024, 6, 1))

    assert len(dashboard["recentTrips"]) == 2


@pytest.mark.asyncio
async def test_dashboard_cost_charts(reporting, fleet_history):
    charts = (await reporting.get_dashboard(today=date(2024, 6, 1)))["charts"]

    assert charts["fuelCosts"] == [
        {"month": "January", "cost": pytest.approx(115)},
        {"month": "March", "cost": pytest.approx(20)},
    ]

    # one entry per month with trips; fuel and maintenance counted once per month
    operational = charts["operationalCosts"]
    assert [point["month"] for point in operational] == ["January", "February"]
    assert operational[0]["fuel_cost"] == pytest.approx(115)
    assert operational[0]["maintenance_cost"] == pytest.approx(160)
    assert operational[0]["total_cost"] == pytest.approx(275)
    assert operational[1]["fuel_cost"] == 0
    assert operational[1]["maintenance_cost"] == pytest.approx(40)


@pytest.mark.asyncio
async def test_dashboard_on_empty_fleet(reporting):
    dashboard = await reporting.get_dashboard(today=date(2024, 6, 1))

    assert dashboard["stats"]["vehicles"] == {"total": 0, "active": 0, "maintenance": 0, "inactive": 0}
    assert dashboard["charts"] == {"fuelCosts": [], "operationalCosts": []}
    assert dashboard["recentTrips"] == []


@pytest.mark.asyncio
async def test_fuel_consumption_summary_matches_records(reporting, fleet_history, bus):
    report = await reporting.get_fuel_consumption(ReportFilters(vehicle_id=bus["id"]))

    assert len(report["records"]) == 2
    assert report["summary"]["total_records"] == 2
    assert report["summary"]["total_fuel"] == pytest.approx(60)
    assert report["summary"]["total_cost"] == pytest.approx(sum(r["total_cost"] for r in report["records"]))


@pytest.mark.asyncio
async def test_fuel_consumption_date_range(reporting, fleet_history):
    report = await reporting.get_fuel_consumption(
        ReportFilters(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
    )

    assert [r["fuel_date"] for r in report["records"]] == [date(2024, 1, 21), date(2024, 1, 6)]
    assert report["summary"]["total_cost"] == pytest.approx(115)


@pytest.mark.asyncio
async def test_trip_summary_by_driver(reporting, fleet_history, driver):
    report = await reporting.get_trip_summary(ReportFilters(driver_id=driver["id"]))
    summary = report["summary"]

    assert len(report["trips"]) == summary["total_trips"] == 3
    assert summary["completed_trips"] == 1
    assert summary["ongoing_trips"] == 1
    assert summary["cancelled_trips"] == 1
    assert summary["total_estimated_fuel"] == pytest.approx(25)


@pytest.mark.asyncio
async def test_trip_summary_with_no_matches(reporting, fleet_history):
    report = await reporting.get_trip_summary(ReportFilters(start_date=date(2030, 1, 1)))

    assert report["trips"] == []
    assert report["summary"]["total_trips"] == 0
    assert report["summary"]["total_estimated_fuel"] == 0


@pytest.mark.asyncio
async def test_vehicle_utilization_keeps_idle_vehicles(reporting, fleet_history, bus, van):
    rows = await reporting.get_vehicle_utilization(
        ReportFilters(start_date=date(2024, 2, 1), end_date=date(2024, 2, 28))
    )
    by_plate = {row["plate_number"]: row for row in rows}

    assert list(by_plate) == ["ABC-123", "XYZ-789"]
    assert by_plate["ABC-123"]["total_trips"] == 1
    assert by_plate["ABC-123"]["completed_trips"] == 0
    assert by_plate["XYZ-789"]["total_trips"] == 0
    assert by_plate["XYZ-789"]["total_distance"] == 0


@pytest.mark.asyncio
async def test_vehicle_utilization_totals(reporting, fleet_history, bus):
    rows = await reporting.get_vehicle_utilization(ReportFilters(vehicle_id=bus["id"]))

    assert len(rows) == 1
    assert rows[0]["total_trips"] == 3
    assert rows[0]["completed_trips"] == 1
    assert rows[0]["total_fuel_consumed"] == pytest.approx(25)
    assert rows[0]["total_distance"] == pytest.approx(250)


@pytest.mark.asyncio
async def test_dashboard_fails_when_one_read_fails(reporting, fleet_history, mocker):
    mocker.patch.object(VehicleRepository, "get_stats", side_effect=RuntimeError("vehicle stats unavailable"))
    maintenance_stats = mocker.spy(MaintenanceRepository, "get_stats")

    with pytest.raises(RuntimeError, match="vehicle stats unavailable"):
        await reporting.get_dashboard(today=date(2024, 6, 1))

    # sibling reads are still issued; no partial dashboard comes back
    assert maintenance_stats.call_count == 1


@pytest.mark.asyncio
async def test_gather_settled_waits_for_every_read():
    finished = []

    async def slow_read():
        await asyncio.sleep(0.01)
        finished.append("slow")
        return "slow"

    async def broken_read():
        raise ValueError("broken")

    with pytest.raises(ValueError, match="broken"):
        await gather_settled(broken_read(), slow_read())
    assert finished == ["slow"]

    assert await gather_settled(slow_read(), slow_read()) == ["slow", "slow"]
