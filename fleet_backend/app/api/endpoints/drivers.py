"""
Driver API Endpoints.

Driver register, lookups by business code and vehicle assignment.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from fleet_backend.app.api.utils import require_found, unwrap_update
from fleet_backend.app.core.dependencies import get_current_user, get_driver_repository, get_vehicle_repository
from fleet_backend.app.core.exceptions import ResourceNotFoundError
from fleet_backend.app.repositories.drivers import DriverRepository
from fleet_backend.app.repositories.vehicles import VehicleRepository
from fleet_backend.app.schemas.common import ApiResponse, ok
from fleet_backend.app.schemas.driver import (
    DriverCreate,
    DriverResponse,
    DriverStats,
    DriverUpdate,
    VehicleAssignment,
)

router = APIRouter(prefix="/drivers", tags=["Drivers"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=ApiResponse[List[DriverResponse]])
async def list_drivers(drivers: DriverRepository = Depends(get_driver_repository)):
    """List all drivers with their assigned vehicle, newest first."""
    return ok(await drivers.get_all(), "Drivers retrieved successfully")


@router.get("/active/list", response_model=ApiResponse[List[DriverResponse]])
async def list_active_drivers(drivers: DriverRepository = Depends(get_driver_repository)):
    return ok(await drivers.get_active(), "Active drivers retrieved successfully")


@router.get("/stats/summary", response_model=ApiResponse[DriverStats])
async def driver_stats(drivers: DriverRepository = Depends(get_driver_repository)):
    """Driver counts per status plus how many hold a vehicle."""
    return ok(await drivers.get_stats(), "Driver statistics retrieved successfully")


@router.get("/code/{driver_code}", response_model=ApiResponse[DriverResponse])
async def get_driver_by_code(
    driver_code: str = Path(..., description="Business code, e.g. DRV-001"),
    drivers: DriverRepository = Depends(get_driver_repository)
):
    driver = require_found(await drivers.get_by_driver_id(driver_code), "Driver", driver_code)
    return ok(driver, "Driver retrieved successfully")


@router.get("/{driver_id}", response_model=ApiResponse[DriverResponse])
async def get_driver(
    driver_id: int = Path(..., description="Driver ID"),
    drivers: DriverRepository = Depends(get_driver_repository)
):
    driver = require_found(await drivers.get_by_id(driver_id), "Driver", driver_id)
    return ok(driver, "Driver retrieved successfully")


@router.post("", response_model=ApiResponse[DriverResponse], status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    drivers: DriverRepository = Depends(get_driver_repository)
):
    """
    Register a driver.

    A ``DRV-NNN`` code is generated when the body does not carry one.
    """
    driver = await drivers.create(driver_data.model_dump())
    return ok(driver, "Driver created successfully")


@router.put("/{driver_id}", response_model=ApiResponse[DriverResponse])
async def update_driver(
    driver_data: DriverUpdate,
    driver_id: int = Path(..., description="Driver ID"),
    drivers: DriverRepository = Depends(get_driver_repository)
):
    result = await drivers.update(driver_id, driver_data.model_dump(exclude_unset=True))
    return ok(unwrap_update(result, "Driver", driver_id), "Driver updated successfully")


@router.put("/{driver_id}/assign-vehicle", response_model=ApiResponse[DriverResponse])
async def assign_vehicle(
    assignment: VehicleAssignment,
    driver_id: int = Path(..., description="Driver ID"),
    drivers: DriverRepository = Depends(get_driver_repository),
    vehicles: VehicleRepository = Depends(get_vehicle_repository)
):
    """Give the driver a vehicle. Several drivers may share one vehicle."""
    if not await vehicles.exists(assignment.vehicle_id):
        raise ResourceNotFoundError("Vehicle", assignment.vehicle_id)

    result = await drivers.assign_vehicle(driver_id, assignment.vehicle_id)
    return ok(unwrap_update(result, "Driver", driver_id), "Vehicle assigned successfully")


@router.put("/{driver_id}/unassign-vehicle", response_model=ApiResponse[DriverResponse])
async def unassign_vehicle(
    driver_id: int = Path(..., description="Driver ID"),
    drivers: DriverRepository = Depends(get_driver_repository)
):
    result = await drivers.unassign_vehicle(driver_id)
    return ok(unwrap_update(result, "Driver", driver_id), "Vehicle unassigned successfully")


@router.delete("/{driver_id}", response_model=ApiResponse[None])
async def delete_driver(
    driver_id: int = Path(..., description="Driver ID"),
    drivers: DriverRepository = Depends(get_driver_repository)
):
    if not await drivers.delete(driver_id):
        raise ResourceNotFoundError("Driver", driver_id)
    return ok(message="Driver deleted successfully")
