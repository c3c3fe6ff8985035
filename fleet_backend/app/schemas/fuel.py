"""
Fuel record schemas.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class FuelRecordCreate(BaseModel):
    """Schema for logging a refuelling. ``total_cost`` defaults to liters x price."""
    vehicle_id: int
    driver_id: Optional[int] = None
    fuel_date: date
    fuel_type: str = Field("Petrol", max_length=50)
    fuel_liters: float = Field(..., gt=0)
    cost_per_liter: float = Field(..., ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    odometer_reading: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class FuelRecordUpdate(BaseModel):
    vehicle_id: Optional[int] = None
    driver_id: Optional[int] = None
    fuel_date: Optional[date] = None
    fuel_type: Optional[str] = Field(None, max_length=50)
    fuel_liters: Optional[float] = Field(None, gt=0)
    cost_per_liter: Optional[float] = Field(None, ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    odometer_reading: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class FuelRecordResponse(BaseModel):
    id: int
    vehicle_id: int
    driver_id: Optional[int] = None
    fuel_date: date
    fuel_type: str
    fuel_liters: float
    cost_per_liter: float
    total_cost: float
    odometer_reading: Optional[int] = None
    notes: Optional[str] = None
    plate_number: Optional[str] = None
    vehicle_model: Optional[str] = None
    driver_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class FuelStats(BaseModel):
    total_records: int
    total_fuel: float
    total_cost: float
    avg_cost_per_liter: float
