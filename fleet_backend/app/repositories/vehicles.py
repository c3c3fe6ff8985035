"""
Vehicle repository.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import Select, func, select

from fleet_backend.app.models.driver import Driver
from fleet_backend.app.models.enums import VehicleStatus
from fleet_backend.app.models.vehicle import Vehicle
from fleet_backend.app.repositories.base import BaseRepository, count_where


def _assigned_driver(column):
    # First driver pointing at the vehicle; several drivers may share one.
    return (
        select(column)
        .where(Driver.assigned_vehicle_id == Vehicle.id)
        .order_by(Driver.id)
        .limit(1)
        .scalar_subquery()
    )


class VehicleRepository(BaseRepository):
    model = Vehicle
    resource_name = "Vehicle"
    updatable_fields = frozenset({
        "plate_number", "vehicle_type", "model", "manufacture_year", "status",
        "fuel_capacity", "current_fuel", "mileage", "next_service_date",
    })
    default_order = (Vehicle.created_at.desc(), Vehicle.id.desc())

    def base_query(self) -> Select:
        return select(
            Vehicle.__table__,
            _assigned_driver(Driver.full_name).label("assigned_driver_name"),
            _assigned_driver(Driver.driver_id).label("assigned_driver_code"),
        )

    async def get_by_plate_number(self, plate_number: str) -> Optional[Dict[str, Any]]:
        return await self.db.fetch_one(self.base_query().where(Vehicle.plate_number == plate_number))

    get_by_natural_key = get_by_plate_number

    async def get_available(self) -> List[Dict[str, Any]]:
        """Active vehicles ordered by plate number."""
        query = self.base_query().where(Vehicle.status == VehicleStatus.ACTIVE).order_by(Vehicle.plate_number)
        return await self.db.fetch_all(query)

    async def get_stats(self) -> Dict[str, int]:
        query = select(
            func.count().label("total"),
            count_where(Vehicle.status == VehicleStatus.ACTIVE).label("active"),
            count_where(Vehicle.status == VehicleStatus.UNDER_MAINTENANCE).label("maintenance"),
            count_where(Vehicle.status == VehicleStatus.INACTIVE).label("inactive"),
        ).select_from(Vehicle)
        return await self.db.fetch_one(query)
