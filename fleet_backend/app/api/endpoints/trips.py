"""
Trip API Endpoints.

Trip scheduling, status changes and the dated trip listings.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from fleet_backend.app.api.utils import require_found, unwrap_update
from fleet_backend.app.core.config import settings
from fleet_backend.app.core.dependencies import get_current_user, get_trip_repository
from fleet_backend.app.core.exceptions import ResourceNotFoundError
from fleet_backend.app.repositories.trips import TripRepository
from fleet_backend.app.schemas.common import ApiResponse, ok
from fleet_backend.app.schemas.trip import TripCreate, TripResponse, TripStats, TripStatusUpdate, TripUpdate

router = APIRouter(prefix="/trips", tags=["Trips"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=ApiResponse[List[TripResponse]])
async def list_trips(trips: TripRepository = Depends(get_trip_repository)):
    """List all trips with driver and vehicle details, newest first."""
    return ok(await trips.get_all(), "Trips retrieved successfully")


@router.get("/today/list", response_model=ApiResponse[List[TripResponse]])
async def list_today_trips(trips: TripRepository = Depends(get_trip_repository)):
    return ok(await trips.get_today(), "Today's trips retrieved successfully")


@router.get("/upcoming/list", response_model=ApiResponse[List[TripResponse]])
async def list_upcoming_trips(trips: TripRepository = Depends(get_trip_repository)):
    """Scheduled or running trips from today on, soonest first."""
    return ok(await trips.get_upcoming(limit=settings.trip_list_limit), "Upcoming trips retrieved successfully")


@router.get("/recent/list", response_model=ApiResponse[List[TripResponse]])
async def list_recent_trips(trips: TripRepository = Depends(get_trip_repository)):
    """Most recently completed trips."""
    return ok(await trips.get_recent(limit=settings.trip_list_limit), "Recent trips retrieved successfully")


@router.get("/stats/summary", response_model=ApiResponse[TripStats])
async def trip_stats(trips: TripRepository = Depends(get_trip_repository)):
    return ok(await trips.get_stats(), "Trip statistics retrieved successfully")


@router.get("/code/{trip_code}", response_model=ApiResponse[TripResponse])
async def get_trip_by_code(
    trip_code: str = Path(..., description="Business code, e.g. TR-2024-003"),
    trips: TripRepository = Depends(get_trip_repository)
):
    trip = require_found(await trips.get_by_trip_id(trip_code), "Trip", trip_code)
    return ok(trip, "Trip retrieved successfully")


@router.get("/{trip_id}", response_model=ApiResponse[TripResponse])
async def get_trip(
    trip_id: int = Path(..., description="Trip ID"),
    trips: TripRepository = Depends(get_trip_repository)
):
    trip = require_found(await trips.get_by_id(trip_id), "Trip", trip_id)
    return ok(trip, "Trip retrieved successfully")


@router.post("", response_model=ApiResponse[TripResponse], status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    trips: TripRepository = Depends(get_trip_repository)
):
    """
    Schedule a trip.

    A ``TR-YYYY-NNN`` code is generated when the body does not carry one.
    Unknown driver or vehicle ids are rejected by the store's foreign keys.
    """
    trip = await trips.create(trip_data.model_dump())
    return ok(trip, "Trip created successfully")


@router.put("/{trip_id}", response_model=ApiResponse[TripResponse])
async def update_trip(
    trip_data: TripUpdate,
    trip_id: int = Path(..., description="Trip ID"),
    trips: TripRepository = Depends(get_trip_repository)
):
    result = await trips.update(trip_id, trip_data.model_dump(exclude_unset=True))
    return ok(unwrap_update(result, "Trip", trip_id), "Trip updated successfully")


@router.put("/{trip_id}/status", response_model=ApiResponse[TripResponse])
async def update_trip_status(
    status_data: TripStatusUpdate,
    trip_id: int = Path(..., description="Trip ID"),
    trips: TripRepository = Depends(get_trip_repository)
):
    """
    Move a trip to a new status.

    Entering In Progress stamps the start time; entering Completed stamps the
    end time.
    """
    result = await trips.update_status(trip_id, status_data.status)
    return ok(unwrap_update(result, "Trip", trip_id), "Trip status updated successfully")


@router.delete("/{trip_id}", response_model=ApiResponse[None])
async def delete_trip(
    trip_id: int = Path(..., description="Trip ID"),
    trips: TripRepository = Depends(get_trip_repository)
):
    if not await trips.delete(trip_id):
        raise ResourceNotFoundError("Trip", trip_id)
    return ok(message="Trip deleted successfully")
