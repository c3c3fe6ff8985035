"""
Database session configuration.

This module owns the persistence gateway: a pooled async SQLAlchemy engine
wrapped by ``Database``. Every statement is a SQLAlchemy expression, so values
always reach the driver as bound parameters.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine
from sqlalchemy.orm import declarative_base

from fleet_backend.app.core.config import Settings
from fleet_backend.app.core.exceptions import DatabaseTimeoutError

logger = logging.getLogger(__name__)

# Create declarative base for models
Base = declarative_base()


@dataclass
class ExecuteResult:
    """Outcome of a write statement."""
    rowcount: int
    inserted_id: Optional[int] = None


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Persistence gateway around an async connection pool.

    Failures propagate to the caller untouched; the only translation is that
    pool acquire timeouts and statement timeouts surface as
    ``DatabaseTimeoutError``. Nothing is retried.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 10.0,
        statement_timeout: float = 30.0,
    ):
        self.url = url
        self.statement_timeout = statement_timeout

        engine_kwargs: Dict[str, Any] = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_pre_ping=True,
            )

        self.engine = create_async_engine(url, **engine_kwargs)

        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Check a plain connection out of the pool."""
        try:
            async with self.engine.connect() as conn:
                yield conn
        except PoolTimeoutError as exc:
            raise DatabaseTimeoutError("Timed out waiting for a database connection") from exc

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Unit of work: commits on success, rolls back if the block raises."""
        try:
            async with self.engine.begin() as conn:
                yield conn
        except PoolTimeoutError as exc:
            raise DatabaseTimeoutError("Timed out waiting for a database connection") from exc

    async def _run(self, conn: AsyncConnection, statement):
        try:
            return await asyncio.wait_for(conn.execute(statement), timeout=self.statement_timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Statement exceeded %.1fs timeout", self.statement_timeout)
            raise DatabaseTimeoutError() from exc

    async def fetch_all(self, statement, conn: Optional[AsyncConnection] = None) -> List[Dict[str, Any]]:
        """Run a read and return every row as a plain dict."""
        if conn is not None:
            result = await self._run(conn, statement)
            return [dict(row) for row in result.mappings().all()]

        async with self.connection() as own_conn:
            result = await self._run(own_conn, statement)
            return [dict(row) for row in result.mappings().all()]

    async def fetch_one(self, statement, conn: Optional[AsyncConnection] = None) -> Optional[Dict[str, Any]]:
        rows = await self.fetch_all(statement, conn=conn)
        return rows[0] if rows else None

    async def execute(self, statement, conn: Optional[AsyncConnection] = None) -> ExecuteResult:
        """Run a write. Without ``conn`` the statement commits on its own."""
        if conn is not None:
            return self._write_result(await self._run(conn, statement))

        async with self.transaction() as own_conn:
            return self._write_result(await self._run(own_conn, statement))

    @staticmethod
    def _write_result(result) -> ExecuteResult:
        inserted_id = None
        if result.is_insert:
            primary_key = result.inserted_primary_key
            if primary_key:
                inserted_id = primary_key[0]
        return ExecuteResult(rowcount=result.rowcount, inserted_id=inserted_id)

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_database(settings: Settings) -> Database:
    """Build the process-wide gateway from settings."""
    return Database(
        settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        statement_timeout=settings.db_statement_timeout,
    )


def get_database(request: Request) -> Database:
    """
    FastAPI dependency for the database gateway.

    The gateway is created in the application lifespan and stored on
    ``app.state``; tests override this dependency.
    """
    return request.app.state.database
