"""
Driver database model.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleet_backend.app.db.session import Base
from fleet_backend.app.models.enums import DriverStatus, enum_column


class Driver(Base):
    """
    Driver model.

    ``assigned_vehicle_id`` is a weak back-pointer to a vehicle. Nothing
    prevents two drivers from pointing at the same vehicle.
    """
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Business code, e.g. DRV-001
    driver_id = Column(String(20), unique=True, nullable=False, index=True)

    full_name = Column(String(100), nullable=False)
    license_number = Column(String(50), unique=True, nullable=False)
    experience_years = Column(Integer, default=0, nullable=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)

    # Assignment
    assigned_vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True, index=True
    )

    status = Column(enum_column(DriverStatus), default=DriverStatus.ACTIVE, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Driver(id={self.id}, code='{self.driver_id}', name='{self.full_name}')>"
