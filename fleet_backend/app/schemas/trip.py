"""
Trip schemas.

Schemas for trip scheduling, status changes and listings.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime, time
from typing import Optional

from fleet_backend.app.models.enums import TripStatus


class TripCreate(BaseModel):
    """Schema for scheduling a trip. ``trip_id`` is generated when omitted."""
    trip_id: Optional[str] = Field(None, max_length=30, description="Business code, e.g. TR-2024-003")
    route_from: str = Field(..., min_length=1, max_length=200)
    route_to: str = Field(..., min_length=1, max_length=200)
    driver_id: int
    vehicle_id: int
    trip_date: date
    trip_time: Optional[time] = None
    estimated_fuel: Optional[float] = Field(None, ge=0)
    distance_km: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    status: TripStatus = Field(default=TripStatus.SCHEDULED)


class TripUpdate(BaseModel):
    """Schema for a partial trip update."""
    route_from: Optional[str] = Field(None, min_length=1, max_length=200)
    route_to: Optional[str] = Field(None, min_length=1, max_length=200)
    driver_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    trip_date: Optional[date] = None
    trip_time: Optional[time] = None
    estimated_fuel: Optional[float] = Field(None, ge=0)
    distance_km: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    status: Optional[TripStatus] = None


class TripStatusUpdate(BaseModel):
    """Body of PUT /trips/{id}/status."""
    status: TripStatus


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: int
    trip_id: str
    route_from: str
    route_to: str
    driver_id: int
    vehicle_id: int
    trip_date: date
    trip_time: Optional[time] = None
    estimated_fuel: Optional[float] = None
    distance_km: Optional[float] = None
    notes: Optional[str] = None
    status: TripStatus
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    driver_name: Optional[str] = None
    driver_code: Optional[str] = None
    plate_number: Optional[str] = None
    vehicle_model: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TripStats(BaseModel):
    """Trip counts per status."""
    total: int
    scheduled: int
    in_progress: int
    completed: int
    cancelled: int
    today: int
    total_estimated_fuel: float
