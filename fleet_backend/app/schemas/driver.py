"""
Driver Pydantic schemas.
"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from fleet_backend.app.models.enums import DriverStatus


class DriverCreate(BaseModel):
    """Schema for registering a driver. ``driver_id`` is generated when omitted."""
    driver_id: Optional[str] = Field(None, max_length=20, description="Business code, e.g. DRV-001")
    full_name: str = Field(..., min_length=1, max_length=100)
    license_number: str = Field(..., min_length=1, max_length=50)
    experience_years: int = Field(0, ge=0)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    assigned_vehicle_id: Optional[int] = None
    status: DriverStatus = Field(default=DriverStatus.ACTIVE)


class DriverUpdate(BaseModel):
    """Schema for a partial driver update."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    license_number: Optional[str] = Field(None, min_length=1, max_length=50)
    experience_years: Optional[int] = Field(None, ge=0)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    assigned_vehicle_id: Optional[int] = None
    status: Optional[DriverStatus] = None


class VehicleAssignment(BaseModel):
    """Body of PUT /drivers/{id}/assign-vehicle."""
    vehicle_id: int = Field(..., description="Vehicle to assign")


class DriverResponse(BaseModel):
    """Schema for driver response."""
    id: int
    driver_id: str
    full_name: str
    license_number: str
    experience_years: int
    phone: Optional[str] = None
    email: Optional[str] = None
    assigned_vehicle_id: Optional[int] = None
    status: DriverStatus
    plate_number: Optional[str] = None
    vehicle_model: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class DriverStats(BaseModel):
    """Driver counts per status."""
    total: int
    active: int
    inactive: int
    on_leave: int
    assigned: int
