"""
Shared repository behaviour.

Every entity repository reads through one joined SELECT (so responses carry
denormalized display fields such as a plate number or driver name) and writes
partial updates through ``BaseRepository.update``.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional

from sqlalchemy import Select, Table, case, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from fleet_backend.app.db.session import Database

logger = logging.getLogger(__name__)


def count_where(condition):
    """Conditional count, used to flatten status buckets into one row."""
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class WriteOutcome(str, enum.Enum):
    """Result of a partial update."""
    UPDATED = "UPDATED"
    NOT_FOUND = "NOT_FOUND"
    NO_OP = "NO_OP"  # nothing applicable in the patch


@dataclass
class UpdateResult:
    outcome: WriteOutcome
    entity: Optional[Dict[str, Any]] = None

    @property
    def updated(self) -> bool:
        return self.outcome == WriteOutcome.UPDATED


class BaseRepository:
    """
    CRUD over one table.

    Subclasses set ``model``, ``resource_name`` and ``updatable_fields`` and
    override ``base_query`` to add their joins.
    """

    model: ClassVar[Any]
    resource_name: ClassVar[str] = "Record"
    updatable_fields: ClassVar[FrozenSet[str]] = frozenset()
    default_order: ClassVar[tuple] = ()

    def __init__(self, db: Database):
        self.db = db

    @property
    def table(self) -> Table:
        return self.model.__table__

    def base_query(self) -> Select:
        return select(self.table)

    # Reads

    async def get_all(self) -> List[Dict[str, Any]]:
        return await self.db.fetch_all(self.base_query().order_by(*self.default_order))

    async def get_by_id(self, record_id: int, conn: Optional[AsyncConnection] = None) -> Optional[Dict[str, Any]]:
        query = self.base_query().where(self.table.c.id == record_id)
        return await self.db.fetch_one(query, conn=conn)

    async def exists(self, record_id: int) -> bool:
        row = await self.db.fetch_one(select(self.table.c.id).where(self.table.c.id == record_id))
        return row is not None

    # Writes

    async def _insert(self, values: Mapping[str, Any], conn: AsyncConnection) -> int:
        result = await self.db.execute(insert(self.table).values(**values), conn=conn)
        logger.debug("Inserted %s id=%s", self.resource_name, result.inserted_id)
        return result.inserted_id

    async def create(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        async with self.db.transaction() as conn:
            new_id = await self._insert(self._prepare_create(dict(fields)), conn)
            await self._after_write(conn, new_id, fields)
            return await self.get_by_id(new_id, conn=conn)

    def _prepare_create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in fields.items() if key in self.table.c}

    def filter_patch(self, patch: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep only allow-listed columns. Absent keys stay unchanged; ``None`` means NULL."""
        ignored = [key for key in patch if key not in self.updatable_fields]
        if ignored:
            logger.info("Ignoring non-updatable %s fields: %s", self.resource_name, ", ".join(sorted(ignored)))
        return {key: value for key, value in patch.items() if key in self.updatable_fields}

    def _expand_patch(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for columns derived from the patch itself (e.g. status timestamps)."""
        return changes

    async def _after_write(self, conn: AsyncConnection, record_id: int, changes: Mapping[str, Any]) -> None:
        """Hook for cascades that must commit together with the write."""

    async def update(self, record_id: int, patch: Mapping[str, Any]) -> UpdateResult:
        changes = self.filter_patch(patch)

        if not changes:
            current = await self.get_by_id(record_id)
            if current is None:
                return UpdateResult(WriteOutcome.NOT_FOUND)
            return UpdateResult(WriteOutcome.NO_OP, current)

        values = self._expand_patch(dict(changes))

        async with self.db.transaction() as conn:
            result = await self.db.execute(
                update(self.table).where(self.table.c.id == record_id).values(**values),
                conn=conn,
            )
            if result.rowcount == 0:
                return UpdateResult(WriteOutcome.NOT_FOUND)

            await self._after_write(conn, record_id, changes)
            entity = await self.get_by_id(record_id, conn=conn)

        logger.debug("Updated %s id=%s fields=%s", self.resource_name, record_id, sorted(values))
        return UpdateResult(WriteOutcome.UPDATED, entity)

    async def delete(self, record_id: int) -> bool:
        result = await self.db.execute(delete(self.table).where(self.table.c.id == record_id))
        return result.rowcount == 1
