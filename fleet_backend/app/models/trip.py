"""
Trip database model.

Trips are scheduled for a driver and a vehicle on a given date and time.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Date, Time, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleet_backend.app.db.session import Base
from fleet_backend.app.models.enums import TripStatus, enum_column


class Trip(Base):
    """
    Trip model.

    ``start_time`` and ``end_time`` are stamped when the status moves to
    In Progress and Completed respectively.
    """
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Business code, e.g. TR-2024-003
    trip_id = Column(String(30), unique=True, nullable=False, index=True)

    # Route
    route_from = Column(String(200), nullable=False)
    route_to = Column(String(200), nullable=False)

    # Assignment
    driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)

    # Schedule
    trip_date = Column(Date, nullable=False, index=True)
    trip_time = Column(Time, nullable=True)

    estimated_fuel = Column(Numeric(8, 2, asdecimal=False), nullable=True)
    distance_km = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    notes = Column(Text, nullable=True)

    # Status
    status = Column(enum_column(TripStatus), default=TripStatus.SCHEDULED, nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Trip(id={self.id}, code='{self.trip_id}', status='{self.status}')>"
