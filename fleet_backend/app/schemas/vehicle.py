"""
Vehicle Pydantic schemas.

Defines request and response models for vehicle management.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional

from fleet_backend.app.models.enums import VehicleType, VehicleStatus


class VehicleCreate(BaseModel):
    """Schema for registering a new vehicle."""
    plate_number: str = Field(..., min_length=1, max_length=20, description="Unique plate number")
    vehicle_type: VehicleType = Field(..., description="Vehicle body type")
    model: str = Field(..., min_length=1, max_length=100)
    manufacture_year: int = Field(..., ge=1950, le=2100)
    status: VehicleStatus = Field(default=VehicleStatus.ACTIVE)

    # Fuel and odometer
    fuel_capacity: Optional[float] = Field(None, ge=0, description="Tank capacity in liters")
    current_fuel: float = Field(0, ge=0)
    mileage: int = Field(0, ge=0)

    next_service_date: Optional[date] = None


class VehicleUpdate(BaseModel):
    """Schema for a partial vehicle update. Only provided fields are changed."""
    plate_number: Optional[str] = Field(None, min_length=1, max_length=20)
    vehicle_type: Optional[VehicleType] = None
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    manufacture_year: Optional[int] = Field(None, ge=1950, le=2100)
    status: Optional[VehicleStatus] = None
    fuel_capacity: Optional[float] = Field(None, ge=0)
    current_fuel: Optional[float] = Field(None, ge=0)
    mileage: Optional[int] = Field(None, ge=0)
    next_service_date: Optional[date] = None


class VehicleResponse(BaseModel):
    """Schema for vehicle response."""
    id: int
    plate_number: str
    vehicle_type: VehicleType
    model: str
    manufacture_year: int
    status: VehicleStatus
    fuel_capacity: Optional[float] = None
    current_fuel: Optional[float] = None
    mileage: Optional[int] = None
    next_service_date: Optional[date] = None
    assigned_driver_name: Optional[str] = None
    assigned_driver_code: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class VehicleStats(BaseModel):
    """Vehicle counts per status."""
    total: int
    active: int
    maintenance: int
    inactive: int
