"""
Reporting Schemas.
"""

from pydantic import BaseModel
from typing import List

from fleet_backend.app.models.enums import VehicleStatus
from fleet_backend.app.schemas.driver import DriverStats
from fleet_backend.app.schemas.fuel import FuelRecordResponse, FuelStats
from fleet_backend.app.schemas.maintenance import MaintenanceStats
from fleet_backend.app.schemas.trip import TripResponse, TripStats
from fleet_backend.app.schemas.vehicle import VehicleStats


class DashboardStats(BaseModel):
    vehicles: VehicleStats
    drivers: DriverStats
    trips: TripStats
    maintenance: MaintenanceStats


class FuelCostPoint(BaseModel):
    month: str
    cost: float


class OperationalCostPoint(BaseModel):
    month: str
    fuel_cost: float
    maintenance_cost: float
    total_cost: float


class DashboardCharts(BaseModel):
    fuelCosts: List[FuelCostPoint]
    operationalCosts: List[OperationalCostPoint]


class DashboardData(BaseModel):
    """Composite overview for the dashboard screen."""
    stats: DashboardStats
    charts: DashboardCharts
    recentTrips: List[TripResponse]


class FuelConsumptionReport(BaseModel):
    records: List[FuelRecordResponse]
    summary: FuelStats


class TripSummary(BaseModel):
    total_trips: int
    total_estimated_fuel: float
    completed_trips: int
    ongoing_trips: int
    cancelled_trips: int


class TripSummaryReport(BaseModel):
    trips: List[TripResponse]
    summary: TripSummary


class VehicleUtilization(BaseModel):
    """Trip totals for one vehicle."""
    id: int
    plate_number: str
    model: str
    status: VehicleStatus
    total_trips: int
    completed_trips: int
    total_fuel_consumed: float
    total_distance: float
