"""Oracle adapter - sync and async using oracledb.

Identifiers are emitted unquoted so Oracle folds them to upper case the
same way it does for unquoted DDL. The identity of an insert is the ROWID
of the new row, since Oracle has no session-wide "last inserted id".
"""

from __future__ import annotations

from typing import Any

from row_bag.adapters.base import AsyncListPool, ListPool
from row_bag.core.connection import ConnectionConfig


def _connect_kwargs(config: ConnectionConfig) -> dict[str, Any]:
    return {
        "user": config.user,
        "password": config.password,
        "dsn": f"{config.host}:{config.port}/{config.database}",
        **config.extra,
    }


class OracleSyncAdapter(ListPool):
    """Synchronous Oracle adapter using oracledb."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def quote_identifier(self, name: str) -> str:
        return name

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        import oracledb

        kwargs = _connect_kwargs(config)
        return [oracledb.connect(**kwargs) for _ in range(config.pool_size)]

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        cursor = connection.cursor()
        cursor.execute(sql, params or {})
        return cursor

    def last_insert_id(self, connection: Any, cursor: Any) -> Any:
        return cursor.lastrowid


class OracleAsyncAdapter(AsyncListPool):
    """Asynchronous Oracle adapter using oracledb async support."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def quote_identifier(self, name: str) -> str:
        return name

    async def create_pool_async(self, config: ConnectionConfig) -> list[Any]:
        import oracledb

        kwargs = _connect_kwargs(config)
        return [await oracledb.connect_async(**kwargs) for _ in range(config.pool_size)]

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        cursor = connection.cursor()
        await cursor.execute(sql, params or {})
        return cursor

    async def last_insert_id_async(self, connection: Any, cursor: Any) -> Any:
        return cursor.lastrowid
