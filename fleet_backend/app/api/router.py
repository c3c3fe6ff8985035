"""
API Router.

Aggregates all endpoint routers; mounted under the configured API prefix.
"""

from fastapi import APIRouter
from fleet_backend.app.api.endpoints import auth, drivers, fuel, maintenance, reports, trips, vehicles

router = APIRouter()

router.include_router(auth.router)

# Records
router.include_router(vehicles.router)
router.include_router(drivers.router)
router.include_router(trips.router)
router.include_router(maintenance.router)
router.include_router(fuel.router)

# Aggregates
router.include_router(reports.router)
