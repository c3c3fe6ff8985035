"""
FastAPI Application Entry Point.

This is the main application file for the Fleet Records Backend.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fleet_backend.app.core.config import settings
from fleet_backend.app.api.router import router as api_router
from fleet_backend.app.db.session import create_database
from fleet_backend.app.core.observability import RequestContextMiddleware, configure_logging
from fleet_backend.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    integrity_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from fleet_backend.app.models.user import User  # noqa: F401
from fleet_backend.app.models.vehicle import Vehicle  # noqa: F401
from fleet_backend.app.models.driver import Driver  # noqa: F401
from fleet_backend.app.models.trip import Trip  # noqa: F401
from fleet_backend.app.models.maintenance_record import MaintenanceRecord  # noqa: F401
from fleet_backend.app.models.fuel_record import FuelRecord  # noqa: F401
from fleet_backend.app.models.sequence_counter import SequenceCounter  # noqa: F401

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Builds the database gateway and creates tables on startup.
    2. Releases the connection pool on shutdown.
    """
    database = create_database(settings)
    app.state.database = database
    await database.create_all()
    logger.info("%s started", settings.app_name)
    yield
    await database.dispose()
    logger.info("%s stopped", settings.app_name)


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    description="Record keeping and reporting backend for a vehicle fleet",
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
    }


# Include API router
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links
    """
    return {
        "message": "Welcome to Fleet Records Backend API",
        "docs": "/docs",
        "health": "/health",
    }
