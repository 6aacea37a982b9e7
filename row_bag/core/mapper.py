"""Mapper facade.

The Mapper saves record-like objects as inserted rows and reads arbitrary
SQL back as dynamically-shaped rows. It owns nothing but a connection
manager and an interceptor registry; every call acquires its own pooled
connection and releases it on every exit path.

Driver exceptions are never wrapped: a rejected INSERT (unknown column,
constraint violation, ...) reaches the caller as the driver raised it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from row_bag.core.connection import (
    AsyncConnectionManager,
    ConnectionConfig,
    ConnectionManager,
)
from row_bag.core.exceptions import InvalidArgumentError, MultipleRowsError
from row_bag.core.interceptors import Interceptors
from row_bag.core.materializer import Row
from row_bag.core.statement import Statement, build_insert
from row_bag.core.stream import AsyncRowStream, RowStream
from row_bag.core.values import as_field_map

logger = logging.getLogger(__name__)


def _insert_statement(
    adapter: Any,
    interceptors: Interceptors,
    table: str,
    record: Any,
    include: Sequence[str] | None,
    exclude: Sequence[str] | None,
) -> Statement:
    statement = build_insert(
        table,
        as_field_map(record),
        interceptors,
        paramstyle=adapter.paramstyle,
        quote=adapter.quote_identifier,
        include=include,
        exclude=exclude,
    )
    logger.debug("Executing %s with %d parameter(s)", statement.sql, len(statement.params))
    return statement


def _check_sql(sql: str) -> None:
    if not sql or not sql.strip():
        raise InvalidArgumentError("sql text is required")


class Mapper:
    """Synchronous record mapper.

    Args:
        connection_manager: Source of pooled connections and the driver adapter.
        interceptors: Conversion hooks for non-native values. A fresh
            registry with the identity hook is created when omitted.
    """

    def __init__(
        self,
        connection_manager: ConnectionManager,
        interceptors: Interceptors | None = None,
    ) -> None:
        self._connection_manager = connection_manager
        self._interceptors = interceptors if interceptors is not None else Interceptors()

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        interceptors: Interceptors | None = None,
    ) -> Mapper:
        """Create a Mapper from a ConnectionConfig."""
        return cls(ConnectionManager(config), interceptors)

    @property
    def interceptors(self) -> Interceptors:
        return self._interceptors

    def save(
        self,
        table: str,
        record: Any,
        *,
        include: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
    ) -> Any:
        """Insert *record* into *table* and return the generated identity.

        Args:
            table: Target table name.
            record: Mapping, dataclass, Pydantic model, named tuple or plain
                object whose fields become columns.
            include: Only insert these fields.
            exclude: Insert every field but these.

        Returns:
            The identity reported by the driver for the new row.

        Raises:
            InvalidArgumentError: On a missing table or record, an empty
                selection, or when both include and exclude are given.
        """
        adapter = self._connection_manager.adapter
        statement = _insert_statement(
            adapter, self._interceptors, table, record, include, exclude
        )

        with self._connection_manager.get_connection() as conn:
            try:
                cursor = adapter.execute(conn, statement.sql, statement.bind())
                identity = adapter.last_insert_id(conn, cursor)
                conn.commit()
            except Exception:
                conn.rollback()
                raise

        logger.debug("Saved row into %s with identity %r", table, identity)
        return identity

    def read(self, sql: str) -> RowStream:
        """Run *sql* as-is and return a lazy stream of rows.

        Nothing is executed until the first row is pulled. The statement is
        committed when the stream closes, or rolled back if it closes on an
        error.
        """
        _check_sql(sql)
        return RowStream(self._connection_manager, sql, self._interceptors)

    def read_one(self, sql: str, *, strict: bool = False) -> Row | None:
        """Run *sql* as-is and return its first row.

        Returns None if zero rows match. Further rows are discarded unless
        *strict* is set, in which case MultipleRowsError is raised.
        """
        with self.read(sql) as rows:
            first = next(rows, None)
            if strict and first is not None and next(rows, None) is not None:
                raise MultipleRowsError(sql)
        return first

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._connection_manager.close_pool()

    def __enter__(self) -> Mapper:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()


class AsyncMapper:
    """Asynchronous record mapper."""

    def __init__(
        self,
        connection_manager: AsyncConnectionManager,
        interceptors: Interceptors | None = None,
    ) -> None:
        self._connection_manager = connection_manager
        self._interceptors = interceptors if interceptors is not None else Interceptors()

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        interceptors: Interceptors | None = None,
    ) -> AsyncMapper:
        """Create an AsyncMapper from a ConnectionConfig."""
        return cls(AsyncConnectionManager(config), interceptors)

    @property
    def interceptors(self) -> Interceptors:
        return self._interceptors

    async def save(
        self,
        table: str,
        record: Any,
        *,
        include: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
    ) -> Any:
        """Insert *record* into *table* asynchronously and return its identity."""
        adapter = self._connection_manager.adapter
        statement = _insert_statement(
            adapter, self._interceptors, table, record, include, exclude
        )

        async with self._connection_manager.get_connection() as conn:
            try:
                cursor = await adapter.execute_async(conn, statement.sql, statement.bind())
                identity = await adapter.last_insert_id_async(conn, cursor)
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

        logger.debug("Saved row into %s with identity %r", table, identity)
        return identity

    def read(self, sql: str) -> AsyncRowStream:
        """Run *sql* as-is and return a lazy async stream of rows."""
        _check_sql(sql)
        return AsyncRowStream(self._connection_manager, sql, self._interceptors)

    async def read_one(self, sql: str, *, strict: bool = False) -> Row | None:
        """Run *sql* as-is asynchronously and return its first row, or None."""
        async with self.read(sql) as rows:
            first = await anext(rows, None)
            if strict and first is not None and await anext(rows, None) is not None:
                raise MultipleRowsError(sql)
        return first

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._connection_manager.close_pool()

    async def __aenter__(self) -> AsyncMapper:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()
