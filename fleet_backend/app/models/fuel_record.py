"""
Fuel record database model.

Fuel purchases feed the fuel consumption report and the dashboard cost charts.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleet_backend.app.db.session import Base


class FuelRecord(Base):
    """A single refuelling of a vehicle."""
    __tablename__ = "fuel_records"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("drivers.id", ondelete="SET NULL"), nullable=True, index=True)

    fuel_date = Column(Date, nullable=False, index=True)
    fuel_type = Column(String(50), default="Petrol", nullable=False)
    fuel_liters = Column(Numeric(8, 2, asdecimal=False), nullable=False)
    cost_per_liter = Column(Numeric(8, 2, asdecimal=False), nullable=False)
    total_cost = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    odometer_reading = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<FuelRecord(id={self.id}, vehicle_id={self.vehicle_id}, liters={self.fuel_liters})>"
