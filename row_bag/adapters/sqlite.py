"""SQLite adapter - sync (sqlite3 stdlib) and async (aiosqlite)."""

from __future__ import annotations

import sqlite3
from typing import Any

from row_bag.adapters.base import AsyncListPool, ListPool, double_quote
from row_bag.core.connection import ConnectionConfig


def _connect_kwargs(config: ConnectionConfig) -> dict[str, Any]:
    # Pooled connections are handed to whichever thread asks next.
    return {"check_same_thread": False, **config.extra}


class SqliteSyncAdapter(ListPool):
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def quote_identifier(self, name: str) -> str:
        return double_quote(name)

    def create_pool(self, config: ConnectionConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite."""
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            conn = sqlite3.connect(config.database, **_connect_kwargs(config))
            conn.execute("PRAGMA journal_mode=WAL")
            pool.append(conn)
        return pool

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        if params is None:
            return connection.execute(sql)
        return connection.execute(sql, params)

    def last_insert_id(self, connection: sqlite3.Connection, cursor: sqlite3.Cursor) -> Any:
        return cursor.lastrowid


class SqliteAsyncAdapter(AsyncListPool):
    """Asynchronous SQLite adapter using aiosqlite."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def quote_identifier(self, name: str) -> str:
        return double_quote(name)

    async def create_pool_async(self, config: ConnectionConfig) -> list[Any]:
        """Create async SQLite connection pool."""
        import aiosqlite

        pool: list[Any] = []
        for _ in range(config.pool_size):
            conn = await aiosqlite.connect(config.database, **_connect_kwargs(config))
            await conn.execute("PRAGMA journal_mode=WAL")
            pool.append(conn)
        return pool

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Execute SQL asynchronously and return a cursor."""
        if params is None:
            return await connection.execute(sql)
        return await connection.execute(sql, params)

    async def last_insert_id_async(self, connection: Any, cursor: Any) -> Any:
        return cursor.lastrowid
