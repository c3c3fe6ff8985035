"""
Response envelope shared by every endpoint.

Success: ``{"success": true, "data": ..., "message": ...}``
Failure: ``{"success": false, "message": ..., "error": ...}`` (see core.exceptions)
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard JSON envelope."""
    success: bool = True
    data: Optional[T] = None
    message: str


def ok(data: Any = None, message: str = "OK") -> dict:
    """Build a success envelope; FastAPI validates it against the route's response model."""
    return {"success": True, "data": data, "message": message}
