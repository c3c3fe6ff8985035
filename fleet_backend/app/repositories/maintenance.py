"""
Maintenance repository.

Besides CRUD this owns the service-window queries (upcoming / overdue
services), the monthly cost rollup and the next-service-date cascade onto
vehicles.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Integer, Select, cast, extract, func, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from fleet_backend.app.models.enums import VehicleStatus
from fleet_backend.app.models.maintenance_record import MaintenanceRecord
from fleet_backend.app.models.vehicle import Vehicle
from fleet_backend.app.repositories.base import BaseRepository, count_where

logger = logging.getLogger(__name__)


def service_month(column=MaintenanceRecord.service_date):
    return cast(extract("month", column), Integer)


def service_year(column=MaintenanceRecord.service_date):
    return cast(extract("year", column), Integer)


class MaintenanceRepository(BaseRepository):
    model = MaintenanceRecord
    resource_name = "Maintenance record"
    updatable_fields = frozenset({
        "vehicle_id", "service_date", "service_type", "cost", "mileage_at_service",
        "next_service_date", "service_provider", "notes",
    })
    default_order = (MaintenanceRecord.service_date.desc(), MaintenanceRecord.id.desc())

    def base_query(self) -> Select:
        return select(
            MaintenanceRecord.__table__,
            Vehicle.plate_number,
            Vehicle.model.label("vehicle_model"),
        ).join(Vehicle, MaintenanceRecord.vehicle_id == Vehicle.id)

    async def _after_write(self, conn: AsyncConnection, record_id: int, changes: Mapping[str, Any]) -> None:
        next_service_date = changes.get("next_service_date")
        if next_service_date is None:
            return

        vehicle_id = changes.get("vehicle_id")
        if vehicle_id is None:
            row = await self.db.fetch_one(
                select(MaintenanceRecord.vehicle_id).where(MaintenanceRecord.id == record_id), conn=conn
            )
            vehicle_id = row["vehicle_id"]

        await self.db.execute(
            update(Vehicle).where(Vehicle.id == vehicle_id).values(next_service_date=next_service_date),
            conn=conn,
        )
        logger.info("Vehicle %s next service date set to %s", vehicle_id, next_service_date)

    async def get_by_vehicle(self, vehicle_id: int) -> List[Dict[str, Any]]:
        query = self.base_query().where(MaintenanceRecord.vehicle_id == vehicle_id).order_by(*self.default_order)
        return await self.db.fetch_all(query)

    # Service windows

    async def get_upcoming_services(self, today: Optional[date] = None, window_days: int = 30) -> List[Dict[str, Any]]:
        """Active vehicles due for service between today and today + window_days."""
        today = today or date.today()
        query = (
            select(Vehicle.__table__)
            .where(
                Vehicle.next_service_date.is_not(None),
                Vehicle.next_service_date >= today,
                Vehicle.next_service_date <= today + timedelta(days=window_days),
                Vehicle.status == VehicleStatus.ACTIVE,
            )
            .order_by(Vehicle.next_service_date.asc(), Vehicle.id)
        )
        rows = await self.db.fetch_all(query)
        for row in rows:
            row["days_until_service"] = (row["next_service_date"] - today).days
        return rows

    async def get_overdue_services(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Active vehicles whose next service date has passed."""
        today = today or date.today()
        query = (
            select(Vehicle.__table__)
            .where(
                Vehicle.next_service_date.is_not(None),
                Vehicle.next_service_date < today,
                Vehicle.status == VehicleStatus.ACTIVE,
            )
            .order_by(Vehicle.next_service_date.asc(), Vehicle.id)
        )
        rows = await self.db.fetch_all(query)
        for row in rows:
            row["days_overdue"] = (today - row["next_service_date"]).days
        return rows

    # Aggregates

    async def get_monthly_costs(self, year: int, month: Optional[int] = None) -> List[Dict[str, Any]]:
        month_col = service_month()
        year_col = service_year()

        query = select(
            month_col.label("month"),
            year_col.label("year"),
            func.coalesce(func.sum(MaintenanceRecord.cost), 0).label("total_cost"),
            func.count().label("service_count"),
        ).where(year_col == year)

        if month:
            query = query.where(month_col == month)

        query = query.group_by(month_col, year_col).order_by(month_col)
        return await self.db.fetch_all(query)

    async def get_stats(self, today: Optional[date] = None, recent_days: int = 30) -> Dict[str, Any]:
        today = today or date.today()
        query = select(
            func.count().label("total_services"),
            func.coalesce(func.sum(MaintenanceRecord.cost), 0).label("total_cost"),
            func.coalesce(func.avg(MaintenanceRecord.cost), 0).label("avg_cost"),
            count_where(MaintenanceRecord.service_date >= today - timedelta(days=recent_days)).label("last_30_days"),
            count_where(MaintenanceRecord.service_date >= today - timedelta(days=7)).label("last_7_days"),
        ).select_from(MaintenanceRecord)
        return await self.db.fetch_one(query)

    async def get_service_type_stats(self) -> List[Dict[str, Any]]:
        count_col = func.count().label("count")
        query = (
            select(
                MaintenanceRecord.service_type,
                count_col,
                func.coalesce(func.sum(MaintenanceRecord.cost), 0).label("total_cost"),
                func.coalesce(func.avg(MaintenanceRecord.cost), 0).label("avg_cost"),
            )
            .group_by(MaintenanceRecord.service_type)
            .order_by(count_col.desc(), MaintenanceRecord.service_type)
        )
        return await self.db.fetch_all(query)
