"""PostgreSQL adapter - sync and async using psycopg (v3+).

The identity of an insert is ``lastval()``: the value most recently drawn
from any sequence in the session, which for a SERIAL / IDENTITY key is the
new row's id.
"""

from __future__ import annotations

from typing import Any

from row_bag.adapters.base import AsyncListPool, ListPool, double_quote
from row_bag.core.connection import ConnectionConfig

_LASTVAL_SQL = "SELECT lastval()"


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


class PostgresqlSyncAdapter(ListPool):
    """Synchronous PostgreSQL adapter using psycopg (v3+)."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def quote_identifier(self, name: str) -> str:
        return double_quote(name)

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        import psycopg

        conninfo = _build_conninfo(config)
        return [psycopg.connect(conninfo, **config.extra) for _ in range(config.pool_size)]

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        return connection.execute(sql, params)

    def last_insert_id(self, connection: Any, cursor: Any) -> Any:
        return connection.execute(_LASTVAL_SQL).fetchone()[0]


class PostgresqlAsyncAdapter(AsyncListPool):
    """Asynchronous PostgreSQL adapter using psycopg (v3+) async support."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def quote_identifier(self, name: str) -> str:
        return double_quote(name)

    async def create_pool_async(self, config: ConnectionConfig) -> list[Any]:
        import psycopg

        conninfo = _build_conninfo(config)
        pool: list[Any] = []
        for _ in range(config.pool_size):
            conn = await psycopg.AsyncConnection.connect(conninfo, **config.extra)
            pool.append(conn)
        return pool

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        return await connection.execute(sql, params)

    async def last_insert_id_async(self, connection: Any, cursor: Any) -> Any:
        lastval = await connection.execute(_LASTVAL_SQL)
        row = await lastval.fetchone()
        return row[0]
