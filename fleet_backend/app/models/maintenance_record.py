"""
Maintenance record database model.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleet_backend.app.db.session import Base


class MaintenanceRecord(Base):
    """
    A completed service on a vehicle.

    Saving a record with ``next_service_date`` copies that date onto the
    parent vehicle (last write wins).
    """
    __tablename__ = "maintenance_records"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)

    # Service details
    service_date = Column(Date, nullable=False, index=True)
    service_type = Column(String(100), nullable=False)
    cost = Column(Numeric(10, 2, asdecimal=False), default=0, nullable=False)
    mileage_at_service = Column(Integer, nullable=True)
    next_service_date = Column(Date, nullable=True)
    service_provider = Column(String(150), nullable=True)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<MaintenanceRecord(id={self.id}, vehicle_id={self.vehicle_id}, type='{self.service_type}')>"
