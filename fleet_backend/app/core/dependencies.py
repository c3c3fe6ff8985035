"""
FastAPI dependencies.

Authentication for protected routes, plus factories that hand each request
repositories bound to the shared database gateway.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from fleet_backend.app.core.jwt import decode_access_token
from fleet_backend.app.db.session import Database, get_database
from fleet_backend.app.models.user import User
from fleet_backend.app.repositories.drivers import DriverRepository
from fleet_backend.app.repositories.fuel import FuelRecordRepository
from fleet_backend.app.repositories.maintenance import MaintenanceRepository
from fleet_backend.app.repositories.trips import TripRepository
from fleet_backend.app.repositories.vehicles import VehicleRepository
from fleet_backend.app.services.reporting import ReportingService

# HTTP Bearer security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Database = Depends(get_database)
) -> dict:
    """
    FastAPI dependency for JWT authentication.

    1. Requires a bearer token
    2. Validates JWT signature and expiry
    3. Verifies the user still exists and is active

    Returns:
        Decoded token payload containing user information

    Raises:
        HTTPException: 401 if authentication fails for any reason
    """
    if credentials is None:
        raise _unauthorized("No token provided")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid token")

    user_id = payload.get("user_id")
    if not user_id:
        raise _unauthorized("Invalid token payload")

    user = await db.fetch_one(select(User.id, User.is_active).where(User.id == user_id))
    if not user:
        raise _unauthorized("User not found")

    if not user["is_active"]:
        raise _unauthorized("Account is deactivated")

    return payload


def get_vehicle_repository(db: Database = Depends(get_database)) -> VehicleRepository:
    return VehicleRepository(db)


def get_driver_repository(db: Database = Depends(get_database)) -> DriverRepository:
    return DriverRepository(db)


def get_trip_repository(db: Database = Depends(get_database)) -> TripRepository:
    return TripRepository(db)


def get_maintenance_repository(db: Database = Depends(get_database)) -> MaintenanceRepository:
    return MaintenanceRepository(db)


def get_fuel_repository(db: Database = Depends(get_database)) -> FuelRecordRepository:
    return FuelRecordRepository(db)


def get_reporting_service(db: Database = Depends(get_database)) -> ReportingService:
    return ReportingService(db)
