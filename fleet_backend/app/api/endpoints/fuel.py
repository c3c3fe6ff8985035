"""
Fuel API Endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from fleet_backend.app.api.utils import require_found, unwrap_update
from fleet_backend.app.core.dependencies import get_current_user, get_fuel_repository
from fleet_backend.app.core.exceptions import ResourceNotFoundError
from fleet_backend.app.repositories.fuel import FuelRecordRepository
from fleet_backend.app.schemas.common import ApiResponse, ok
from fleet_backend.app.schemas.fuel import FuelRecordCreate, FuelRecordResponse, FuelRecordUpdate, FuelStats

router = APIRouter(prefix="/fuel", tags=["Fuel"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=ApiResponse[List[FuelRecordResponse]])
async def list_fuel_records(fuel: FuelRecordRepository = Depends(get_fuel_repository)):
    return ok(await fuel.get_all(), "Fuel records retrieved successfully")


@router.get("/vehicle/{vehicle_id}", response_model=ApiResponse[List[FuelRecordResponse]])
async def list_vehicle_fuel_records(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    fuel: FuelRecordRepository = Depends(get_fuel_repository)
):
    return ok(await fuel.get_by_vehicle(vehicle_id), "Fuel records retrieved successfully")


@router.get("/stats/summary", response_model=ApiResponse[FuelStats])
async def fuel_stats(fuel: FuelRecordRepository = Depends(get_fuel_repository)):
    """Totals over every fuel record."""
    return ok(await fuel.get_stats(), "Fuel statistics retrieved successfully")


@router.get("/{record_id}", response_model=ApiResponse[FuelRecordResponse])
async def get_fuel_record(
    record_id: int = Path(..., description="Fuel record ID"),
    fuel: FuelRecordRepository = Depends(get_fuel_repository)
):
    record = require_found(await fuel.get_by_id(record_id), "Fuel record", record_id)
    return ok(record, "Fuel record retrieved successfully")


@router.post("", response_model=ApiResponse[FuelRecordResponse], status_code=status.HTTP_201_CREATED)
async def create_fuel_record(
    record_data: FuelRecordCreate,
    fuel: FuelRecordRepository = Depends(get_fuel_repository)
):
    """Log a refuelling. ``total_cost`` defaults to liters times price per liter."""
    record = await fuel.create(record_data.model_dump())
    return ok(record, "Fuel record created successfully")


@router.put("/{record_id}", response_model=ApiResponse[FuelRecordResponse])
async def update_fuel_record(
    record_data: FuelRecordUpdate,
    record_id: int = Path(..., description="Fuel record ID"),
    fuel: FuelRecordRepository = Depends(get_fuel_repository)
):
    result = await fuel.update(record_id, record_data.model_dump(exclude_unset=True))
    return ok(unwrap_update(result, "Fuel record", record_id), "Fuel record updated successfully")


@router.delete("/{record_id}", response_model=ApiResponse[None])
async def delete_fuel_record(
    record_id: int = Path(..., description="Fuel record ID"),
    fuel: FuelRecordRepository = Depends(get_fuel_repository)
):
    if not await fuel.delete(record_id):
        raise ResourceNotFoundError("Fuel record", record_id)
    return ok(message="Fuel record deleted successfully")
