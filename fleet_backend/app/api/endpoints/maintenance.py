"""
Maintenance API Endpoints.

Service log plus the upcoming/overdue service windows and cost rollups.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from fleet_backend.app.api.utils import require_found, unwrap_update
from fleet_backend.app.core.config import settings
from fleet_backend.app.core.dependencies import get_current_user, get_maintenance_repository
from fleet_backend.app.core.exceptions import ResourceNotFoundError
from fleet_backend.app.repositories.maintenance import MaintenanceRepository
from fleet_backend.app.schemas.common import ApiResponse, ok
from fleet_backend.app.schemas.maintenance import (
    MaintenanceCreate,
    MaintenanceResponse,
    MaintenanceStats,
    MaintenanceUpdate,
    MonthlyCost,
    OverdueServiceResponse,
    ServiceTypeStats,
    UpcomingServiceResponse,
)

router = APIRouter(prefix="/maintenance", tags=["Maintenance"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=ApiResponse[List[MaintenanceResponse]])
async def list_maintenance(maintenance: MaintenanceRepository = Depends(get_maintenance_repository)):
    return ok(await maintenance.get_all(), "Maintenance records retrieved successfully")


@router.get("/vehicle/{vehicle_id}", response_model=ApiResponse[List[MaintenanceResponse]])
async def list_vehicle_maintenance(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    maintenance: MaintenanceRepository = Depends(get_maintenance_repository)
):
    """Service history of one vehicle, latest service first."""
    return ok(await maintenance.get_by_vehicle(vehicle_id), "Maintenance records retrieved successfully")


@router.get("/upcoming/list", response_model=ApiResponse[List[UpcomingServiceResponse]])
async def list_upcoming_services(maintenance: MaintenanceRepository = Depends(get_maintenance_repository)):
    """Active vehicles due for service within the configured window."""
    rows = await maintenance.get_upcoming_services(window_days=settings.service_window_days)
    return ok(rows, "Upcoming services retrieved successfully")


@router.get("/overdue/list", response_model=ApiResponse[List[OverdueServiceResponse]])
async def list_overdue_services(maintenance: MaintenanceRepository = Depends(get_maintenance_repository)):
    return ok(await maintenance.get_overdue_services(), "Overdue services retrieved successfully")


@router.get("/costs/monthly", response_model=ApiResponse[List[MonthlyCost]])
async def monthly_costs(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Defaults to the current year"),
    month: Optional[int] = Query(None, ge=1, le=12),
    maintenance: MaintenanceRepository = Depends(get_maintenance_repository)
):
    """Maintenance spend per calendar month of a year."""
    rows = await maintenance.get_monthly_costs(year or date.today().year, month)
    return ok(rows, "Monthly maintenance costs retrieved successfully")


@router.get("/stats/summary", response_model=ApiResponse[MaintenanceStats])
async def maintenance_stats(maintenance: MaintenanceRepository = Depends(get_maintenance_repository)):
    stats = await maintenance.get_stats(recent_days=settings.maintenance_recent_days)
    return ok(stats, "Maintenance statistics retrieved successfully")


@router.get("/stats/types", response_model=ApiResponse[List[ServiceTypeStats]])
async def service_type_stats(maintenance: MaintenanceRepository = Depends(get_maintenance_repository)):
    """Count and spend per service type, most frequent first."""
    return ok(await maintenance.get_service_type_stats(), "Service type statistics retrieved successfully")


@router.get("/{record_id}", response_model=ApiResponse[MaintenanceResponse])
async def get_maintenance(
    record_id: int = Path(..., description="Maintenance record ID"),
    maintenance: MaintenanceRepository = Depends(get_maintenance_repository)
):
    record = require_found(await maintenance.get_by_id(record_id), "Maintenance record", record_id)
    return ok(record, "Maintenance record retrieved successfully")


@router.post("", response_model=ApiResponse[MaintenanceResponse], status_code=status.HTTP_201_CREATED)
async def create_maintenance(
    record_data: MaintenanceCreate,
    maintenance: MaintenanceRepository = Depends(get_maintenance_repository)
):
    """
    Log a service.

    A ``next_service_date`` on the record is copied onto the vehicle in the
    same transaction.
    """
    record = await maintenance.create(record_data.model_dump())
    return ok(record, "Maintenance record created successfully")


@router.put("/{record_id}", response_model=ApiResponse[MaintenanceResponse])
async def update_maintenance(
    record_data: MaintenanceUpdate,
    record_id: int = Path(..., description="Maintenance record ID"),
    maintenance: MaintenanceRepository = Depends(get_maintenance_repository)
):
    result = await maintenance.update(record_id, record_data.model_dump(exclude_unset=True))
    return ok(unwrap_update(result, "Maintenance record", record_id), "Maintenance record updated successfully")


@router.delete("/{record_id}", response_model=ApiResponse[None])
async def delete_maintenance(
    record_id: int = Path(..., description="Maintenance record ID"),
    maintenance: MaintenanceRepository = Depends(get_maintenance_repository)
):
    if not await maintenance.delete(record_id):
        raise ResourceNotFoundError("Maintenance record", record_id)
    return ok(message="Maintenance record deleted successfully")
