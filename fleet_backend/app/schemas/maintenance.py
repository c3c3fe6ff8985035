"""
Maintenance schemas.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional

from fleet_backend.app.schemas.vehicle import VehicleResponse


class MaintenanceCreate(BaseModel):
    """Schema for logging a service."""
    vehicle_id: int
    service_date: date
    service_type: str = Field(..., min_length=1, max_length=100)
    cost: float = Field(0, ge=0)
    mileage_at_service: Optional[int] = Field(None, ge=0)
    next_service_date: Optional[date] = Field(None, description="Copied onto the vehicle when provided")
    service_provider: Optional[str] = Field(None, max_length=150)
    notes: Optional[str] = None


class MaintenanceUpdate(BaseModel):
    """Schema for a partial maintenance record update."""
    vehicle_id: Optional[int] = None
    service_date: Optional[date] = None
    service_type: Optional[str] = Field(None, min_length=1, max_length=100)
    cost: Optional[float] = Field(None, ge=0)
    mileage_at_service: Optional[int] = Field(None, ge=0)
    next_service_date: Optional[date] = None
    service_provider: Optional[str] = Field(None, max_length=150)
    notes: Optional[str] = None


class MaintenanceResponse(BaseModel):
    """Schema for maintenance record response."""
    id: int
    vehicle_id: int
    service_date: date
    service_type: str
    cost: float
    mileage_at_service: Optional[int] = None
    next_service_date: Optional[date] = None
    service_provider: Optional[str] = None
    notes: Optional[str] = None
    plate_number: Optional[str] = None
    vehicle_model: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UpcomingServiceResponse(VehicleResponse):
    """Vehicle due for service within the window."""
    days_until_service: int


class OverdueServiceResponse(VehicleResponse):
    """Vehicle past its next service date."""
    days_overdue: int


class MonthlyCost(BaseModel):
    month: int
    year: int
    total_cost: float
    service_count: int


class MaintenanceStats(BaseModel):
    total_services: int
    total_cost: float
    avg_cost: float
    last_30_days: int
    last_7_days: int


class ServiceTypeStats(BaseModel):
    service_type: str
    count: int
    total_cost: float
    avg_cost: float
