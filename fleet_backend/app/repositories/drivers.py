"""
Driver repository.
"""

from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Select, func, select

from fleet_backend.app.models.driver import Driver
from fleet_backend.app.models.enums import DriverStatus
from fleet_backend.app.models.vehicle import Vehicle
from fleet_backend.app.repositories.base import BaseRepository, UpdateResult, count_where
from fleet_backend.app.services.sequences import SequenceService


class DriverRepository(BaseRepository):
    model = Driver
    resource_name = "Driver"
    updatable_fields = frozenset({
        "full_name", "license_number", "experience_years", "phone", "email",
        "assigned_vehicle_id", "status",
    })
    default_order = (Driver.created_at.desc(), Driver.id.desc())

    def base_query(self) -> Select:
        return select(
            Driver.__table__,
            Vehicle.plate_number,
            Vehicle.model.label("vehicle_model"),
        ).outerjoin(Vehicle, Driver.assigned_vehicle_id == Vehicle.id)

    async def get_by_driver_id(self, driver_code: str) -> Optional[Dict[str, Any]]:
        return await self.db.fetch_one(self.base_query().where(Driver.driver_id == driver_code))

    get_by_natural_key = get_by_driver_id

    async def create(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        values = self._prepare_create(dict(fields))
        async with self.db.transaction() as conn:
            if not values.get("driver_id"):
                values["driver_id"] = await SequenceService(self.db).next_driver_code(conn)
            new_id = await self._insert(values, conn)
            return await self.get_by_id(new_id, conn=conn)

    async def get_active(self) -> List[Dict[str, Any]]:
        query = self.base_query().where(Driver.status == DriverStatus.ACTIVE).order_by(Driver.full_name)
        return await self.db.fetch_all(query)

    async def assign_vehicle(self, driver_id: int, vehicle_id: Optional[int]) -> UpdateResult:
        return await self.update(driver_id, {"assigned_vehicle_id": vehicle_id})

    async def unassign_vehicle(self, driver_id: int) -> UpdateResult:
        return await self.update(driver_id, {"assigned_vehicle_id": None})

    async def get_stats(self) -> Dict[str, int]:
        query = select(
            func.count().label("total"),
            count_where(Driver.status == DriverStatus.ACTIVE).label("active"),
            count_where(Driver.status == DriverStatus.INACTIVE).label("inactive"),
            count_where(Driver.status == DriverStatus.ON_LEAVE).label("on_leave"),
            count_where(Driver.assigned_vehicle_id.is_not(None)).label("assigned"),
        ).select_from(Driver)
        return await self.db.fetch_one(query)
