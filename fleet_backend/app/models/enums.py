"""
Status and type enumerations for fleet records.

Enum values are the human-readable labels stored in the database and
returned by the API (e.g. "Under Maintenance").
"""

import enum

from sqlalchemy import Enum as SAEnum


class VehicleType(str, enum.Enum):
    """Vehicle body type."""
    BUS = "Bus"
    MINIBUS = "Minibus"
    SUV = "SUV"
    SEDAN = "Sedan"
    PICKUP = "Pickup"
    VAN = "Van"


class VehicleStatus(str, enum.Enum):
    """Vehicle status. Any status may follow any other."""
    ACTIVE = "Active"
    UNDER_MAINTENANCE = "Under Maintenance"
    INACTIVE = "Inactive"


class DriverStatus(str, enum.Enum):
    """Driver status."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


class TripStatus(str, enum.Enum):
    """Trip status. No transition table is enforced."""
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        ADMIN: Full administrative access
        MANAGER: Fleet manager
        DRIVER: Driver account
        STAFF: Default role for registered users
    """
    ADMIN = "admin"
    MANAGER = "manager"
    DRIVER = "driver"
    STAFF = "staff"


def enum_column(enum_cls) -> SAEnum:
    """Column type that persists enum values (not member names) as plain strings."""
    return SAEnum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        validate_strings=True,
        length=30,
    )
