"""MySQL adapter - sync (mysql-connector-python) and async (aiomysql)."""

from __future__ import annotations

from typing import Any

from row_bag.adapters.base import AsyncListPool, ListPool
from row_bag.core.connection import ConnectionConfig


def _quote(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def _connect_kwargs(config: ConnectionConfig, database_key: str) -> dict[str, Any]:
    # mysql-connector names the schema "database", aiomysql names it "db"
    return {
        "host": config.host,
        "port": config.port,
        "user": config.user,
        "password": config.password,
        database_key: config.database,
        **config.extra,
    }


class MysqlSyncAdapter(ListPool):
    """Synchronous MySQL adapter using mysql-connector-python."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def quote_identifier(self, name: str) -> str:
        return _quote(name)

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        import mysql.connector

        kwargs = _connect_kwargs(config, "database")
        return [mysql.connector.connect(**kwargs) for _ in range(config.pool_size)]

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Execute SQL and return a buffered cursor.

        Buffered so a partially read result does not block the connection.
        """
        cursor = connection.cursor(buffered=True)
        cursor.execute(sql, params)
        return cursor

    def last_insert_id(self, connection: Any, cursor: Any) -> Any:
        return cursor.lastrowid


class MysqlAsyncAdapter(AsyncListPool):
    """Asynchronous MySQL adapter using aiomysql."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def quote_identifier(self, name: str) -> str:
        return _quote(name)

    async def create_pool_async(self, config: ConnectionConfig) -> list[Any]:
        import aiomysql

        kwargs = _connect_kwargs(config, "db")
        return [await aiomysql.connect(**kwargs) for _ in range(config.pool_size)]

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        cursor = await connection.cursor()
        await cursor.execute(sql, params)
        return cursor

    async def last_insert_id_async(self, connection: Any, cursor: Any) -> Any:
        return cursor.lastrowid
