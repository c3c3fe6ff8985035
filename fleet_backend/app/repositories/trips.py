"""
Trip repository.

Trip reads always join the driver and vehicle so list screens can show names
and plate numbers without extra lookups.
"""

from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Select, func, select

from fleet_backend.app.models.driver import Driver
from fleet_backend.app.models.enums import TripStatus
from fleet_backend.app.models.trip import Trip
from fleet_backend.app.models.vehicle import Vehicle
from fleet_backend.app.repositories.base import BaseRepository, UpdateResult, count_where
from fleet_backend.app.services.sequences import SequenceService

ACTIVE_TRIP_STATUSES = (TripStatus.SCHEDULED, TripStatus.IN_PROGRESS)


class TripRepository(BaseRepository):
    model = Trip
    resource_name = "Trip"
    updatable_fields = frozenset({
        "route_from", "route_to", "driver_id", "vehicle_id", "trip_date", "trip_time",
        "estimated_fuel", "distance_km", "notes", "status",
    })
    default_order = (Trip.trip_date.desc(), Trip.trip_time.desc(), Trip.id.desc())

    def base_query(self) -> Select:
        return (
            select(
                Trip.__table__,
                Driver.full_name.label("driver_name"),
                Driver.driver_id.label("driver_code"),
                Vehicle.plate_number,
                Vehicle.model.label("vehicle_model"),
            )
            .join(Driver, Trip.driver_id == Driver.id)
            .join(Vehicle, Trip.vehicle_id == Vehicle.id)
        )

    async def get_by_trip_id(self, trip_code: str) -> Optional[Dict[str, Any]]:
        return await self.db.fetch_one(self.base_query().where(Trip.trip_id == trip_code))

    get_by_natural_key = get_by_trip_id

    async def create(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        values = self._prepare_create(dict(fields))
        async with self.db.transaction() as conn:
            if not values.get("trip_id"):
                values["trip_id"] = await SequenceService(self.db).next_trip_code(conn)
            new_id = await self._insert(values, conn)
            return await self.get_by_id(new_id, conn=conn)

    def _expand_patch(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        status = changes.get("status")
        if status == TripStatus.IN_PROGRESS:
            changes["start_time"] = func.now()
        elif status == TripStatus.COMPLETED:
            changes["end_time"] = func.now()
        return changes

    async def update_status(self, trip_id: int, status: TripStatus) -> UpdateResult:
        return await self.update(trip_id, {"status": status})

    # Time windows

    async def get_today(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        today = today or date.today()
        query = self.base_query().where(Trip.trip_date == today).order_by(Trip.trip_time.asc())
        return await self.db.fetch_all(query)

    async def get_upcoming(self, today: Optional[date] = None, limit: int = 10) -> List[Dict[str, Any]]:
        today = today or date.today()
        query = (
            self.base_query()
            .where(Trip.trip_date >= today, Trip.status.in_(ACTIVE_TRIP_STATUSES))
            .order_by(Trip.trip_date.asc(), Trip.trip_time.asc())
            .limit(limit)
        )
        return await self.db.fetch_all(query)

    async def get_recent(self, limit: int = 10) -> List[Dict[str, Any]]:
        query = (
            self.base_query()
            .where(Trip.status == TripStatus.COMPLETED)
            .order_by(Trip.trip_date.desc(), Trip.trip_time.desc())
            .limit(limit)
        )
        return await self.db.fetch_all(query)

    async def get_latest_created(self, limit: int = 5) -> List[Dict[str, Any]]:
        query = self.base_query().order_by(Trip.created_at.desc(), Trip.id.desc()).limit(limit)
        return await self.db.fetch_all(query)

    async def get_stats(self, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        query = select(
            func.count().label("total"),
            count_where(Trip.status == TripStatus.SCHEDULED).label("scheduled"),
            count_where(Trip.status == TripStatus.IN_PROGRESS).label("in_progress"),
            count_where(Trip.status == TripStatus.COMPLETED).label("completed"),
            count_where(Trip.status == TripStatus.CANCELLED).label("cancelled"),
            count_where(Trip.trip_date == today).label("today"),
            func.coalesce(func.sum(Trip.estimated_fuel), 0).label("total_estimated_fuel"),
        ).select_from(Trip)
        return await self.db.fetch_one(query)
