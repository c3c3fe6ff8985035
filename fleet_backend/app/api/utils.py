"""
Helpers shared by the endpoint modules.
"""

from typing import Any, Dict

from fleet_backend.app.core.exceptions import NoFieldsToUpdateError, ResourceNotFoundError
from fleet_backend.app.repositories.base import UpdateResult, WriteOutcome


def require_found(entity, resource: str, resource_id: Any = None):
    """Map an empty repository read to a 404."""
    if entity is None:
        raise ResourceNotFoundError(resource, resource_id)
    return entity


def unwrap_update(result: UpdateResult, resource: str, resource_id: Any) -> Dict[str, Any]:
    """Map a tagged update outcome to the updated entity or the matching error."""
    if result.outcome == WriteOutcome.NOT_FOUND:
        raise ResourceNotFoundError(resource, resource_id)
    if result.outcome == WriteOutcome.NO_OP:
        raise NoFieldsToUpdateError(resource)
    return result.entity
