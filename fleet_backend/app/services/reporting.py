"""
Reporting Service.

Handles cross-entity aggregation for the dashboard and the filtered reports.
Focused on READ-ONLY operations.
"""

import asyncio
import calendar
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func, select, true

from fleet_backend.app.core.config import Settings, settings as default_settings
from fleet_backend.app.db.session import Database
from fleet_backend.app.models.enums import TripStatus
from fleet_backend.app.models.fuel_record import FuelRecord
from fleet_backend.app.models.maintenance_record import MaintenanceRecord
from fleet_backend.app.models.trip import Trip
from fleet_backend.app.models.vehicle import Vehicle
from fleet_backend.app.repositories.base import count_where
from fleet_backend.app.repositories.drivers import DriverRepository
from fleet_backend.app.repositories.fuel import FuelRecordRepository
from fleet_backend.app.repositories.maintenance import MaintenanceRepository, service_month, service_year
from fleet_backend.app.repositories.trips import TripRepository
from fleet_backend.app.repositories.vehicles import VehicleRepository

logger = logging.getLogger(__name__)


@dataclass
class ReportFilters:
    """Optional report filters taken from the query string."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    vehicle_id: Optional[int] = None
    driver_id: Optional[int] = None


def build_filter_conditions(filters: ReportFilters, *, date_column, vehicle_column=None, driver_column=None) -> list:
    """
    Translate report filters into SQL conditions.

    The same list feeds both the row query and its summary query, so the two
    always describe the same set of records.
    """
    conditions = []
    if filters.start_date is not None:
        conditions.append(date_column >= filters.start_date)
    if filters.end_date is not None:
        conditions.append(date_column <= filters.end_date)
    if filters.vehicle_id is not None and vehicle_column is not None:
        conditions.append(vehicle_column == filters.vehicle_id)
    if filters.driver_id is not None and driver_column is not None:
        conditions.append(driver_column == filters.driver_id)
    return conditions


def where_all(conditions: list):
    # WHERE 1=1 AND ...
    return and_(true(), *conditions)


def month_label(month: int) -> str:
    return calendar.month_name[int(month)]


async def gather_settled(*reads):
    """
    Run independent reads concurrently and wait for all of them to finish.

    Re-raises the first failure only once every read has settled, so no
    query is left running on a pooled connection after the caller gives up.
    """
    results = await asyncio.gather(*reads, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


class ReportingService:

    def __init__(self, db: Database, config: Settings = default_settings):
        self.db = db
        self.config = config
        self.vehicles = VehicleRepository(db)
        self.drivers = DriverRepository(db)
        self.trips = TripRepository(db)
        self.maintenance = MaintenanceRepository(db)
        self.fuel = FuelRecordRepository(db)

    # Dashboard

    async def get_dashboard(self, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Composite overview for the dashboard screen.

        The status buckets and the latest trips are independent reads and run
        concurrently; a failure in any of them fails the whole dashboard.
        """
        today = today or date.today()

        vehicle_stats, driver_stats, trip_stats, maintenance_stats, recent_trips = await gather_settled(
            self.vehicles.get_stats(),
            self.drivers.get_stats(),
            self.trips.get_stats(today),
            self.maintenance.get_stats(today, self.config.maintenance_recent_days),
            self.trips.get_latest_created(self.config.dashboard_recent_trips),
        )

        fuel_by_month, maintenance_by_month, trip_months = await gather_settled(
            self._monthly_fuel_costs(today.year),
            self._monthly_maintenance_costs(today.year),
            self._trip_months(today.year),
        )

        return {
            "stats": {
                "vehicles": vehicle_stats,
                "drivers": driver_stats,
                "trips": trip_stats,
                "maintenance": maintenance_stats,
            },
            "charts": {
                "fuelCosts": [
                    {"month": month_label(month), "cost": cost}
                    for month, cost in sorted(fuel_by_month.items())
                ],
                "operationalCosts": self._operational_costs(trip_months, fuel_by_month, maintenance_by_month),
            },
            "recentTrips": recent_trips,
        }

    async def _monthly_fuel_costs(self, year: int) -> Dict[int, float]:
        month_col = service_month(FuelRecord.fuel_date)
        query = (
            select(month_col.label("month"), func.coalesce(func.sum(FuelRecord.total_cost), 0).label("cost"))
            .where(service_year(FuelRecord.fuel_date) == year)
            .group_by(month_col)
        )
        return {row["month"]: row["cost"] for row in await self.db.fetch_all(query)}

    async def _monthly_maintenance_costs(self, year: int) -> Dict[int, float]:
        rows = await self.maintenance.get_monthly_costs(year)
        return {row["month"]: row["total_cost"] for row in rows}

    async def _trip_months(self, year: int) -> List[int]:
        month_col = service_month(Trip.trip_date)
        query = select(month_col.label("month")).where(service_year(Trip.trip_date) == year).distinct()
        return sorted(row["month"] for row in await self.db.fetch_all(query))

    @staticmethod
    def _operational_costs(
        trip_months: List[int], fuel_by_month: Dict[int, float], maintenance_by_month: Dict[int, float]
    ) -> List[Dict[str, Any]]:
        """
        Monthly operating cost for every month of the year that has trips.

        Fuel and maintenance are totalled per month independently, so a month
        with several trips or several vehicles is counted once.
        """
        series = []
        for month in trip_months:
            fuel_cost = fuel_by_month.get(month, 0) or 0
            maintenance_cost = maintenance_by_month.get(month, 0) or 0
            series.append({
                "month": month_label(month),
                "fuel_cost": fuel_cost,
                "maintenance_cost": maintenance_cost,
                "total_cost": fuel_cost + maintenance_cost,
            })
        return series

    # Filtered reports

    async def get_fuel_consumption(self, filters: ReportFilters) -> Dict[str, Any]:
        conditions = build_filter_conditions(
            filters,
            date_column=FuelRecord.fuel_date,
            vehicle_column=FuelRecord.vehicle_id,
            driver_column=FuelRecord.driver_id,
        )

        records_query = self.fuel.base_query().where(where_all(conditions)).order_by(*FuelRecordRepository.default_order)
        summary_query = select(
            func.count().label("total_records"),
            func.coalesce(func.sum(FuelRecord.fuel_liters), 0).label("total_fuel"),
            func.coalesce(func.sum(FuelRecord.total_cost), 0).label("total_cost"),
            func.coalesce(func.avg(FuelRecord.cost_per_liter), 0).label("avg_cost_per_liter"),
        ).select_from(FuelRecord).where(where_all(conditions))

        records, summary = await gather_settled(
            self.db.fetch_all(records_query),
            self.db.fetch_one(summary_query),
        )
        return {"records": records, "summary": summary}

    async def get_trip_summary(self, filters: ReportFilters) -> Dict[str, Any]:
        conditions = build_filter_conditions(
            filters,
            date_column=Trip.trip_date,
            vehicle_column=Trip.vehicle_id,
            driver_column=Trip.driver_id,
        )

        trips_query = self.trips.base_query().where(where_all(conditions)).order_by(*TripRepository.default_order)
        summary_query = select(
            func.count().label("total_trips"),
            func.coalesce(func.sum(Trip.estimated_fuel), 0).label("total_estimated_fuel"),
            count_where(Trip.status == TripStatus.COMPLETED).label("completed_trips"),
            count_where(Trip.status == TripStatus.IN_PROGRESS).label("ongoing_trips"),
            count_where(Trip.status == TripStatus.CANCELLED).label("cancelled_trips"),
        ).select_from(Trip).where(where_all(conditions))

        trips, summary = await gather_settled(
            self.db.fetch_all(trips_query),
            self.db.fetch_one(summary_query),
        )
        return {"trips": trips, "summary": summary}

    async def get_vehicle_utilization(self, filters: ReportFilters) -> List[Dict[str, Any]]:
        """
        Trip totals per vehicle.

        Trip filters sit in the join condition so vehicles without matching
        trips are still listed with zero totals.
        """
        trip_conditions = build_filter_conditions(
            filters,
            date_column=Trip.trip_date,
            driver_column=Trip.driver_id,
        )
        vehicle_conditions = build_filter_conditions(
            ReportFilters(vehicle_id=filters.vehicle_id),
            date_column=None,
            vehicle_column=Vehicle.id,
        )

        query = (
            select(
                Vehicle.id,
                Vehicle.plate_number,
                Vehicle.model,
                Vehicle.status,
                func.count(Trip.id).label("total_trips"),
                count_where(Trip.status == TripStatus.COMPLETED).label("completed_trips"),
                func.coalesce(func.sum(Trip.estimated_fuel), 0).label("total_fuel_consumed"),
                func.coalesce(func.sum(Trip.distance_km), 0).label("total_distance"),
            )
            .select_from(Vehicle)
            .outerjoin(Trip, and_(Trip.vehicle_id == Vehicle.id, *trip_conditions))
            .where(where_all(vehicle_conditions))
            .group_by(Vehicle.id, Vehicle.plate_number, Vehicle.model, Vehicle.status)
            .order_by(Vehicle.plate_number)
        )
        return await self.db.fetch_all(query)
