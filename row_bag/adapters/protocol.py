"""Database adapter protocols.

Every adapter module MUST implement these protocols so the mapper can stay
driver-agnostic: pooling, placeholder style, identifier quoting and identity
retrieval are the only places where databases differ.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_bag.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """What the sync mapper needs from a driver."""

    @property
    def paramstyle(self) -> str:
        """DB-API placeholder style: 'named', 'pyformat', 'qmark', 'format' or 'numeric'."""
        ...

    def quote_identifier(self, name: str) -> str:
        """Render a table or column name for this dialect."""
        ...

    def create_pool(self, config: ConnectionConfig) -> Any:
        """Open `config.pool_size` connections."""
        ...

    def acquire_connection(self, pool: Any) -> Any:
        """Check a connection out; raise PoolError when none is idle."""
        ...

    def release_connection(self, connection: Any, pool: Any) -> None:
        """Return a checked-out connection."""
        ...

    def close_pool(self, pool: Any) -> None:
        """Close every idle connection."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Run *sql*, binding *params* when given, and return the DB-API cursor."""
        ...

    def last_insert_id(self, connection: Any, cursor: Any) -> Any:
        """Identity generated by the INSERT that produced *cursor*."""
        ...


@runtime_checkable
class AsyncAdapter(Protocol):
    """What the async mapper needs from a driver."""

    @property
    def paramstyle(self) -> str:
        """DB-API placeholder style: 'named', 'pyformat', 'qmark', 'format' or 'numeric'."""
        ...

    def quote_identifier(self, name: str) -> str:
        """Render a table or column name for this dialect."""
        ...

    async def create_pool_async(self, config: ConnectionConfig) -> Any:
        """Open `config.pool_size` connections."""
        ...

    async def acquire_connection_async(self, pool: Any) -> Any:
        """Check a connection out; raise PoolError when none is idle."""
        ...

    async def release_connection_async(self, connection: Any, pool: Any) -> None:
        """Return a checked-out connection."""
        ...

    async def close_pool_async(self, pool: Any) -> None:
        """Close every idle connection."""
        ...

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | tuple[Any, ...] | None = None,
    ) -> Any:
        """Run *sql*, binding *params* when given, and return the cursor."""
        ...

    async def last_insert_id_async(self, connection: Any, cursor: Any) -> Any:
        """Identity generated by the INSERT that produced *cursor*."""
        ...
