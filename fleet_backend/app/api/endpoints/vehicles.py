"""
Vehicle API Endpoints.

CRUD over the vehicle register plus availability and status counts.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from fleet_backend.app.api.utils import require_found, unwrap_update
from fleet_backend.app.core.dependencies import get_current_user, get_vehicle_repository
from fleet_backend.app.core.exceptions import DuplicateResourceError, ResourceNotFoundError
from fleet_backend.app.repositories.vehicles import VehicleRepository
from fleet_backend.app.schemas.common import ApiResponse, ok
from fleet_backend.app.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleStats, VehicleUpdate

router = APIRouter(prefix="/vehicles", tags=["Vehicles"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=ApiResponse[List[VehicleResponse]])
async def list_vehicles(vehicles: VehicleRepository = Depends(get_vehicle_repository)):
    """List all vehicles, newest first."""
    return ok(await vehicles.get_all(), "Vehicles retrieved successfully")


@router.get("/available/list", response_model=ApiResponse[List[VehicleResponse]])
async def list_available_vehicles(vehicles: VehicleRepository = Depends(get_vehicle_repository)):
    """List active vehicles ordered by plate number."""
    return ok(await vehicles.get_available(), "Available vehicles retrieved successfully")


@router.get("/stats/summary", response_model=ApiResponse[VehicleStats])
async def vehicle_stats(vehicles: VehicleRepository = Depends(get_vehicle_repository)):
    """Vehicle counts per status."""
    return ok(await vehicles.get_stats(), "Vehicle statistics retrieved successfully")


@router.get("/plate/{plate_number}", response_model=ApiResponse[VehicleResponse])
async def get_vehicle_by_plate(
    plate_number: str = Path(..., description="Plate number"),
    vehicles: VehicleRepository = Depends(get_vehicle_repository)
):
    vehicle = require_found(await vehicles.get_by_plate_number(plate_number), "Vehicle", plate_number)
    return ok(vehicle, "Vehicle retrieved successfully")


@router.get("/{vehicle_id}", response_model=ApiResponse[VehicleResponse])
async def get_vehicle(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    vehicles: VehicleRepository = Depends(get_vehicle_repository)
):
    vehicle = require_found(await vehicles.get_by_id(vehicle_id), "Vehicle", vehicle_id)
    return ok(vehicle, "Vehicle retrieved successfully")


@router.post("", response_model=ApiResponse[VehicleResponse], status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    vehicles: VehicleRepository = Depends(get_vehicle_repository)
):
    """
    Register a new vehicle.

    Plate numbers are unique; a duplicate is rejected with 400.
    """
    if await vehicles.get_by_plate_number(vehicle_data.plate_number):
        raise DuplicateResourceError(
            "Vehicle with this plate number already exists",
            details={"plate_number": vehicle_data.plate_number}
        )

    vehicle = await vehicles.create(vehicle_data.model_dump())
    return ok(vehicle, "Vehicle created successfully")


@router.put("/{vehicle_id}", response_model=ApiResponse[VehicleResponse])
async def update_vehicle(
    vehicle_data: VehicleUpdate,
    vehicle_id: int = Path(..., description="Vehicle ID"),
    vehicles: VehicleRepository = Depends(get_vehicle_repository)
):
    """Update only the fields present in the body."""
    result = await vehicles.update(vehicle_id, vehicle_data.model_dump(exclude_unset=True))
    return ok(unwrap_update(result, "Vehicle", vehicle_id), "Vehicle updated successfully")


@router.delete("/{vehicle_id}", response_model=ApiResponse[None])
async def delete_vehicle(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    vehicles: VehicleRepository = Depends(get_vehicle_repository)
):
    if not await vehicles.delete(vehicle_id):
        raise ResourceNotFoundError("Vehicle", vehicle_id)
    return ok(message="Vehicle deleted successfully")
