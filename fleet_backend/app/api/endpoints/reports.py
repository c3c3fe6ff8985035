"""
Reporting API Endpoints.

Dashboard overview and the filtered fuel, trip and utilization reports.
All filters are optional and combine with AND.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from fleet_backend.app.core.dependencies import get_current_user, get_reporting_service
from fleet_backend.app.schemas.common import ApiResponse, ok
from fleet_backend.app.schemas.reports import (
    DashboardData,
    FuelConsumptionReport,
    TripSummaryReport,
    VehicleUtilization,
)
from fleet_backend.app.services.reporting import ReportFilters, ReportingService

router = APIRouter(prefix="/reports", tags=["Reports"], dependencies=[Depends(get_current_user)])


def report_filters(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    vehicle_id: Optional[int] = Query(None, alias="vehicleId"),
    driver_id: Optional[int] = Query(None, alias="driverId"),
) -> ReportFilters:
    return ReportFilters(start_date=start_date, end_date=end_date, vehicle_id=vehicle_id, driver_id=driver_id)


@router.get("/dashboard", response_model=ApiResponse[DashboardData])
async def dashboard(reporting: ReportingService = Depends(get_reporting_service)):
    """
    Dashboard overview.

    Status counts for every entity, this year's monthly fuel and operating
    costs, and the latest scheduled trips.
    """
    return ok(await reporting.get_dashboard(), "Dashboard data retrieved successfully")


@router.get("/fuel-consumption", response_model=ApiResponse[FuelConsumptionReport])
async def fuel_consumption(
    filters: ReportFilters = Depends(report_filters),
    reporting: ReportingService = Depends(get_reporting_service)
):
    return ok(await reporting.get_fuel_consumption(filters), "Fuel consumption report generated successfully")


@router.get("/trip-summary", response_model=ApiResponse[TripSummaryReport])
async def trip_summary(
    filters: ReportFilters = Depends(report_filters),
    reporting: ReportingService = Depends(get_reporting_service)
):
    return ok(await reporting.get_trip_summary(filters), "Trip summary report generated successfully")


@router.get("/vehicle-utilization", response_model=ApiResponse[List[VehicleUtilization]])
async def vehicle_utilization(
    filters: ReportFilters = Depends(report_filters),
    reporting: ReportingService = Depends(get_reporting_service)
):
    """Trip totals per vehicle; vehicles with no matching trips report zeros."""
    return ok(await reporting.get_vehicle_utilization(filters), "Vehicle utilization report generated successfully")
