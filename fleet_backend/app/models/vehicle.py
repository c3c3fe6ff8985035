"""
Vehicle database model.

Vehicles are registered through the admin UI and identified by their
plate number.
"""

from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime
from sqlalchemy.sql import func
from fleet_backend.app.db.session import Base
from fleet_backend.app.models.enums import VehicleType, VehicleStatus, enum_column


class Vehicle(Base):
    """
    Vehicle model.

    ``next_service_date`` is a derived field: it is overwritten whenever a
    maintenance record for the vehicle is saved with a next service date.
    """
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Identification
    plate_number = Column(String(20), unique=True, nullable=False, index=True)
    vehicle_type = Column(enum_column(VehicleType), nullable=False)
    model = Column(String(100), nullable=False)
    manufacture_year = Column(Integer, nullable=False)

    # Status
    status = Column(enum_column(VehicleStatus), default=VehicleStatus.ACTIVE, nullable=False, index=True)

    # Fuel and odometer
    fuel_capacity = Column(Numeric(8, 2, asdecimal=False), nullable=True)
    current_fuel = Column(Numeric(8, 2, asdecimal=False), default=0, nullable=False)
    mileage = Column(Integer, default=0, nullable=False)

    next_service_date = Column(Date, nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Vehicle(id={self.id}, plate='{self.plate_number}', status='{self.status}')>"
