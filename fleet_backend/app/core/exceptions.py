"""
Custom exceptions and error handlers for consistent error responses.

Every error leaves the API in the same envelope the success path uses:
``{"success": false, "message": ..., "error": <error code>}``.
"""

import logging
from typing import Any, Dict

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class NoFieldsToUpdateError(AppException):
    """Raised when an update request carries no applicable fields."""

    def __init__(self, resource: str):
        super().__init__(
            message=f"No fields to update for {resource}",
            error_code="ERR_NO_FIELDS",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"resource": resource}
        )


class DuplicateResourceError(AppException):
    """Raised when a natural key is already taken."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_DUPLICATE",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class ConstraintViolationError(AppException):
    """Raised when the store rejects a write on a unique or foreign key constraint."""

    def __init__(self, message: str = "Operation violates a database constraint"):
        super().__init__(
            message=message,
            error_code="ERR_CONSTRAINT",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class AuthenticationError(AppException):
    """Raised for authentication failures."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class DatabaseTimeoutError(AppException):
    """Raised when a connection cannot be acquired or a statement runs too long."""

    def __init__(self, message: str = "Database operation timed out"):
        super().__init__(
            message=message,
            error_code="ERR_DB_TIMEOUT",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )


def error_envelope(message: str, error_code: str) -> Dict[str, Any]:
    return {"success": False, "message": message, "error": error_code}


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.message, exc.error_code)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_AUTH",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        500: "ERR_INTERNAL"
    }

    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(str(exc.detail), error_code),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope("Validation error: " + "; ".join(problems), "ERR_VALIDATION")
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handler for unique / foreign key violations raised by the store."""
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    violation = ConstraintViolationError()
    return JSONResponse(
        status_code=violation.status_code,
        content=error_envelope(violation.message, violation.error_code)
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("An internal server error occurred", "ERR_INTERNAL")
    )
