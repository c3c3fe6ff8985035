"""
Persistence gateway and sequence counter tests.
"""

import asyncio
from datetime import date

import pytest
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncEngine

from fleet_backend.app.core.exceptions import DatabaseTimeoutError
from fleet_backend.app.models.enums import VehicleType
from fleet_backend.app.models.maintenance_record import MaintenanceRecord
from fleet_backend.app.models.vehicle import Vehicle
from fleet_backend.app.services.sequences import SequenceService


def vehicle_row(plate):
    return {
        "plate_number": plate,
        "vehicle_type": VehicleType.VAN,
        "model": "Sprinter",
        "manufacture_year": 2022,
    }


@pytest.mark.asyncio
async def test_execute_reports_inserted_id_and_rowcount(database):
    result = await database.execute(insert(Vehicle).values(**vehicle_row("GW-001")))

    assert result.inserted_id is not None
    assert result.rowcount == 1

    row = await database.fetch_one(select(Vehicle.__table__).where(Vehicle.id == result.inserted_id))
    assert row["plate_number"] == "GW-001"
    assert isinstance(row, dict)


@pytest.mark.asyncio
async def test_fetch_on_empty_table(database):
    assert await database.fetch_all(select(Vehicle.__table__)) == []
    assert await database.fetch_one(select(Vehicle.__table__)) is None


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(database):
    with pytest.raises(RuntimeError):
        async with database.transaction() as conn:
            await database.execute(insert(Vehicle).values(**vehicle_row("GW-002")), conn=conn)
            raise RuntimeError("abort")

    assert await database.fetch_all(select(Vehicle.__table__)) == []


@pytest.mark.asyncio
async def test_unique_violation_propagates(database):
    await database.execute(insert(Vehicle).values(**vehicle_row("GW-003")))

    with pytest.raises(IntegrityError):
        await database.execute(insert(Vehicle).values(**vehicle_row("GW-003")))


@pytest.mark.asyncio
async def test_foreign_keys_are_enforced(database):
    with pytest.raises(IntegrityError):
        await database.execute(insert(MaintenanceRecord).values(
            vehicle_id=999, service_date=date(2024, 1, 1), service_type="Oil Change"
        ))


@pytest.mark.asyncio
async def test_statement_timeout_raises_database_timeout(database, mocker):
    async def never_finishes(awaitable, timeout):
        awaitable.close()
        raise asyncio.TimeoutError

    mocker.patch("fleet_backend.app.db.session.asyncio.wait_for", side_effect=never_finishes)

    with pytest.raises(DatabaseTimeoutError) as exc_info:
        await database.fetch_all(select(Vehicle.__table__))

    assert exc_info.value.status_code == 503
    assert exc_info.value.error_code == "ERR_DB_TIMEOUT"


@pytest.mark.asyncio
async def test_pool_exhaustion_raises_database_timeout(database, mocker):
    exhausted = PoolTimeoutError("QueuePool limit of size 5 overflow 10 reached")
    mocker.patch.object(AsyncEngine, "connect", side_effect=exhausted)
    mocker.patch.object(AsyncEngine, "begin", side_effect=exhausted)

    with pytest.raises(DatabaseTimeoutError) as exc_info:
        await database.fetch_all(select(Vehicle.__table__))
    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Timed out waiting for a database connection"

    with pytest.raises(DatabaseTimeoutError):
        await database.execute(insert(Vehicle).values(**vehicle_row("GW-004")))


# Sequence counters

@pytest.mark.asyncio
async def test_counters_start_at_one_and_increment(database):
    sequences = SequenceService(database)

    async with database.transaction() as conn:
        assert await sequences.next_value(conn, "invoice") == 1
        assert await sequences.next_value(conn, "invoice") == 2
        assert await sequences.next_value(conn, "other") == 1

    async with database.transaction() as conn:
        assert await sequences.next_value(conn, "invoice") == 3


@pytest.mark.asyncio
async def test_counter_rolls_back_with_transaction(database):
    sequences = SequenceService(database)

    with pytest.raises(RuntimeError):
        async with database.transaction() as conn:
            await sequences.next_value(conn, "driver")
            raise RuntimeError("abort")

    async with database.transaction() as conn:
        assert await sequences.next_driver_code(conn) == "DRV-001"


@pytest.mark.asyncio
async def test_trip_codes_are_numbered_per_year(database):
    sequences = SequenceService(database)

    async with database.transaction() as conn:
        assert await sequences.next_trip_code(conn, on=date(2024, 5, 1)) == "TR-2024-001"
        assert await sequences.next_trip_code(conn, on=date(2024, 12, 31)) == "TR-2024-002"
        assert await sequences.next_trip_code(conn, on=date(2025, 1, 1)) == "TR-2025-001"
