"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest

from row_bag.core.connection import (
    AsyncConnectionManager,
    ConnectionConfig,
    ConnectionManager,
)
from row_bag.core.mapper import AsyncMapper, Mapper

TEST_TABLE_DDL = (
    "CREATE TABLE Test ("
    "Id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "DataInt INTEGER, "
    "DataLong BIGINT, "
    "DataString TEXT)"
)


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config.

    One connection only: every pooled ``:memory:`` connection would be a
    separate database.
    """
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def manager(sqlite_config: ConnectionConfig) -> Iterator[ConnectionManager]:
    """Connection manager with the ``Test`` table created."""
    cm = ConnectionManager(sqlite_config)
    with cm.get_connection() as conn:
        conn.execute(TEST_TABLE_DDL)
        conn.commit()
    yield cm
    cm.close_pool()


@pytest.fixture
def mapper(manager: ConnectionManager) -> Mapper:
    return Mapper(manager)


@pytest.fixture
def values() -> dict[str, object]:
    return {"DataInt": 5, "DataLong": 3000000000, "DataString": "hello world"}


@pytest.fixture
async def async_mapper(sqlite_config: ConnectionConfig) -> AsyncIterator[AsyncMapper]:
    """AsyncMapper over aiosqlite with the ``Test`` table created."""
    cm = AsyncConnectionManager(sqlite_config)
    async with cm.get_connection() as conn:
        await conn.execute(TEST_TABLE_DDL)
        await conn.commit()
    mapper = AsyncMapper(cm)
    yield mapper
    await mapper.close()
