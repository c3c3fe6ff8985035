"""
Business code generation.

Codes such as ``DRV-004`` or ``TR-2026-012`` come from named counters that
are bumped atomically in the same transaction as the insert that uses them,
so two concurrent creates never receive the same number.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncConnection

from fleet_backend.app.db.session import Database
from fleet_backend.app.models.sequence_counter import SequenceCounter

logger = logging.getLogger(__name__)

counters = SequenceCounter.__table__

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SequenceService:

    def __init__(self, db: Database):
        self.db = db

    async def _ensure_counter(self, conn: AsyncConnection, name: str) -> None:
        dialect_insert = _UPSERT_DIALECTS.get(conn.dialect.name)
        if dialect_insert is None:
            raise NotImplementedError(f"Sequence counters are not supported on {conn.dialect.name}")

        statement = (
            dialect_insert(counters)
            .values(name=name, value=0)
            .on_conflict_do_nothing(index_elements=[counters.c.name])
            .returning(counters.c.name)
        )
        created = await self.db.fetch_all(statement, conn=conn)
        if created:
            logger.info("Initialised sequence counter %s", name)

    async def next_value(self, conn: AsyncConnection, name: str) -> int:
        """Increment counter ``name`` and return its new value, starting at 1."""
        await self._ensure_counter(conn, name)
        row = await self.db.fetch_one(
            update(counters)
            .where(counters.c.name == name)
            .values(value=counters.c.value + 1)
            .returning(counters.c.value),
            conn=conn,
        )
        return row["value"]

    async def next_driver_code(self, conn: AsyncConnection) -> str:
        return f"DRV-{await self.next_value(conn, 'driver'):03d}"

    async def next_trip_code(self, conn: AsyncConnection, on: Optional[date] = None) -> str:
        year = (on or date.today()).year
        return f"TR-{year}-{await self.next_value(conn, f'trip-{year}'):03d}"
