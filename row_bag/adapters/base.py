"""Pieces shared by every adapter.

A pool is a plain list of open connections: acquiring pops one, releasing
pushes it back, and an empty list means every connection is checked out.
"""

from __future__ import annotations

import inspect
from typing import Any

from row_bag.core.exceptions import PoolError


def double_quote(name: str) -> str:
    """ANSI identifier quoting, as used by SQLite and PostgreSQL."""
    return '"' + name.replace('"', '""') + '"'


class ListPool:
    """Synchronous list-backed pool operations."""

    def acquire_connection(self, pool: list[Any]) -> Any:
        """Acquire a connection from the pool."""
        if not pool:
            raise PoolError("No connections available in pool")
        return pool.pop()

    def release_connection(self, connection: Any, pool: list[Any]) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[Any]) -> None:
        """Close every idle connection in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()


class AsyncListPool:
    """Asynchronous list-backed pool operations."""

    async def acquire_connection_async(self, pool: list[Any]) -> Any:
        """Acquire an async connection from the pool."""
        if not pool:
            raise PoolError("No connections available in pool")
        return pool.pop()

    async def release_connection_async(self, connection: Any, pool: list[Any]) -> None:
        """Release an async connection back to the pool."""
        pool.append(connection)

    async def close_pool_async(self, pool: list[Any]) -> None:
        """Close every idle async connection in the pool."""
        for conn in pool:
            # aiomysql closes synchronously, the other drivers return a coroutine
            result = conn.close()
            if inspect.isawaitable(result):
                await result
        pool.clear()
