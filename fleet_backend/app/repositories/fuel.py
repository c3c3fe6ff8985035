"""
Fuel record repository.
"""

from typing import Any, Dict, List

from sqlalchemy import Select, func, select

from fleet_backend.app.models.driver import Driver
from fleet_backend.app.models.fuel_record import FuelRecord
from fleet_backend.app.models.vehicle import Vehicle
from fleet_backend.app.repositories.base import BaseRepository


class FuelRecordRepository(BaseRepository):
    model = FuelRecord
    resource_name = "Fuel record"
    updatable_fields = frozenset({
        "vehicle_id", "driver_id", "fuel_date", "fuel_type", "fuel_liters",
        "cost_per_liter", "total_cost", "odometer_reading", "notes",
    })
    default_order = (FuelRecord.fuel_date.desc(), FuelRecord.id.desc())

    def base_query(self) -> Select:
        return (
            select(
                FuelRecord.__table__,
                Vehicle.plate_number,
                Vehicle.model.label("vehicle_model"),
                Driver.full_name.label("driver_name"),
            )
            .join(Vehicle, FuelRecord.vehicle_id == Vehicle.id)
            .outerjoin(Driver, FuelRecord.driver_id == Driver.id)
        )

    def _prepare_create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        values = super()._prepare_create(fields)
        if values.get("total_cost") is None and values.get("fuel_liters") is not None \
                and values.get("cost_per_liter") is not None:
            values["total_cost"] = round(values["fuel_liters"] * values["cost_per_liter"], 2)
        return values

    async def get_by_vehicle(self, vehicle_id: int) -> List[Dict[str, Any]]:
        query = self.base_query().where(FuelRecord.vehicle_id == vehicle_id).order_by(*self.default_order)
        return await self.db.fetch_all(query)

    async def get_stats(self) -> Dict[str, Any]:
        query = select(
            func.count().label("total_records"),
            func.coalesce(func.sum(FuelRecord.fuel_liters), 0).label("total_fuel"),
            func.coalesce(func.sum(FuelRecord.total_cost), 0).label("total_cost"),
            func.coalesce(func.avg(FuelRecord.cost_per_liter), 0).label("avg_cost_per_liter"),
        ).select_from(FuelRecord)
        return await self.db.fetch_one(query)
