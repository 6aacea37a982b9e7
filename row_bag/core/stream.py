"""Lazy row streams.

A stream runs one SQL text and yields materialized rows one at a time. The
connection and cursor are acquired on the first pull, not at construction,
and released as soon as the stream is exhausted, closed, left through its
context manager, or fails. A stream is single-pass and cannot be restarted.

Whatever the SQL did is committed when the stream closes normally and rolled
back when it closes because of an error, so a pooled connection never goes
back with an open transaction.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from contextlib import AsyncExitStack, ExitStack
from typing import Any

from row_bag.core.interceptors import Interceptors
from row_bag.core.materializer import Row, column_names, materialize

logger = logging.getLogger(__name__)


def _close_cursor(cursor: Any) -> None:
    close = getattr(cursor, "close", None)
    if close is not None:
        close()


async def _aclose_cursor(cursor: Any) -> None:
    close = getattr(cursor, "close", None)
    if close is None:
        return
    # aiosqlite, psycopg and aiomysql return a coroutine, oracledb does not
    result = close()
    if inspect.isawaitable(result):
        await result


def _end_transaction(connection: Any) -> Any:
    def end(exc_type: type[BaseException] | None, exc: Any, tb: Any) -> bool:
        if exc_type is None:
            connection.commit()
        else:
            connection.rollback()
        return False

    return end


def _end_transaction_async(connection: Any) -> Any:
    async def end(exc_type: type[BaseException] | None, exc: Any, tb: Any) -> bool:
        if exc_type is None:
            await connection.commit()
        else:
            await connection.rollback()
        return False

    return end


def _exc_details(exc: BaseException | None) -> tuple[Any, Any, Any]:
    if exc is None:
        return None, None, None
    return type(exc), exc, exc.__traceback__


class RowStream:
    """Synchronous, forward-only iterator of Rows.

    Usage:
        with mapper.read("SELECT * FROM Test") as rows:
            for row in rows:
                ...

    Breaking out of the loop without closing releases the connection when
    the stream is garbage collected; the ``with`` block releases it at once.
    """

    def __init__(self, connection_manager: Any, sql: str, interceptors: Interceptors) -> None:
        self._connection_manager = connection_manager
        self._sql = sql
        self._interceptors = interceptors
        self._scope: ExitStack | None = None
        self._cursor: Any = None
        self._columns: list[str] | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> RowStream:
        return self

    def __next__(self) -> Row:
        if self._closed:
            raise StopIteration
        if self._scope is None:
            self._open()
        if self._columns is None:
            # Statement produced no result set
            self.close()
            raise StopIteration
        try:
            raw_row = self._cursor.fetchone()
            if raw_row is not None:
                return materialize(self._columns, raw_row, self._interceptors)
        except BaseException as e:
            self._finish(e)
            raise
        self.close()
        raise StopIteration

    def _open(self) -> None:
        scope = ExitStack()
        try:
            adapter = self._connection_manager.adapter
            connection = scope.enter_context(self._connection_manager.get_connection())
            scope.push(_end_transaction(connection))
            cursor = adapter.execute(connection, self._sql)
            scope.callback(_close_cursor, cursor)
            columns = column_names(cursor)
        except BaseException as e:
            self._closed = True
            scope.__exit__(*_exc_details(e))
            raise
        self._scope = scope
        self._cursor = cursor
        self._columns = columns
        logger.debug("Opened row stream: %s", self._sql)

    def _finish(self, exc: BaseException | None) -> None:
        if self._closed:
            return
        self._closed = True
        scope, self._scope, self._cursor = self._scope, None, None
        if scope is not None:
            scope.__exit__(*_exc_details(exc))
            logger.debug("Closed row stream: %s", self._sql)

    def close(self) -> None:
        """Commit, then release the cursor and connection. Safe to call more than once."""
        self._finish(None)

    def __enter__(self) -> RowStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self._finish(exc_val)

    def __del__(self) -> None:
        self.close()


class AsyncRowStream:
    """Asynchronous counterpart of RowStream.

    A stream dropped while still open (``break`` out of ``async for``) hands
    its close to the connection manager, which finishes it before the next
    connection is handed out. ``async with`` or ``aclose()`` release at once.
    """

    def __init__(self, connection_manager: Any, sql: str, interceptors: Interceptors) -> None:
        self._connection_manager = connection_manager
        self._sql = sql
        self._interceptors = interceptors
        self._scope: AsyncExitStack | None = None
        self._cursor: Any = None
        self._columns: list[str] | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> AsyncRowStream:
        return self

    async def __anext__(self) -> Row:
        if self._closed:
            raise StopAsyncIteration
        if self._scope is None:
            await self._open()
        if self._columns is None:
            await self.aclose()
            raise StopAsyncIteration
        try:
            raw_row = await self._cursor.fetchone()
            if raw_row is not None:
                return materialize(self._columns, raw_row, self._interceptors)
        except BaseException as e:
            await self._finish(e)
            raise
        await self.aclose()
        raise StopAsyncIteration

    async def _open(self) -> None:
        scope = AsyncExitStack()
        try:
            adapter = self._connection_manager.adapter
            connection = await scope.enter_async_context(
                self._connection_manager.get_connection()
            )
            scope.push_async_exit(_end_transaction_async(connection))
            cursor = await adapter.execute_async(connection, self._sql)
            scope.push_async_callback(_aclose_cursor, cursor)
            columns = column_names(cursor)
        except BaseException as e:
            self._closed = True
            await scope.__aexit__(*_exc_details(e))
            raise
        self._scope = scope
        self._cursor = cursor
        self._columns = columns
        logger.debug("Opened async row stream: %s", self._sql)

    async def _finish(self, exc: BaseException | None) -> None:
        if self._closed:
            return
        self._closed = True
        scope, self._scope, self._cursor = self._scope, None, None
        if scope is not None:
            await scope.__aexit__(*_exc_details(exc))
            logger.debug("Closed async row stream: %s", self._sql)

    async def aclose(self) -> None:
        """Commit, then release the cursor and connection. Safe to call more than once."""
        await self._finish(None)

    async def __aenter__(self) -> AsyncRowStream:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self._finish(exc_val)

    def __del__(self) -> None:
        if self._closed:
            return
        self._closed = True
        scope, self._scope, self._cursor = self._scope, None, None
        if scope is None:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Async row stream dropped outside an event loop: %s", self._sql)
            return
        self._connection_manager.release_later(scope.aclose())
        logger.debug("Deferred close of dropped async row stream: %s", self._sql)
