"""Connection configuration and pooled connection managers.

A manager owns one adapter and one pool. The pool is opened lazily on the
first ``get_connection`` and every connection handed out is returned to it
when the ``with`` block exits, whatever happened inside.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
import threading
from collections.abc import Coroutine
from contextlib import asynccontextmanager, contextmanager
from typing import Any

from pydantic import BaseModel, Field

from row_bag.core.enums import DatabaseBackend
from row_bag.core.exceptions import AdapterError

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Where to connect and how many connections to keep open."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    pool_size: int = Field(5, ge=1)
    # Passed through to the driver's connect() unchanged
    extra: dict[str, Any] = {}


# backend -> (adapter module, class name prefix)
_ADAPTERS: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("row_bag.adapters.sqlite", "Sqlite"),
    DatabaseBackend.POSTGRESQL: ("row_bag.adapters.postgresql", "Postgresql"),
    DatabaseBackend.MYSQL: ("row_bag.adapters.mysql", "Mysql"),
    DatabaseBackend.ORACLE: ("row_bag.adapters.oracle", "Oracle"),
}


def _load_adapter(driver: str, kind: str) -> Any:
    """Instantiate the ``kind`` ("Sync" or "Async") adapter for *driver*.

    Raises:
        AdapterError: If the driver is unknown or its adapter cannot be imported.
    """
    try:
        backend = DatabaseBackend(driver.lower())
    except ValueError:
        raise AdapterError(f"Unsupported database driver: {driver}") from None

    module_path, prefix = _ADAPTERS[backend]
    try:
        module = importlib.import_module(module_path)
        adapter_cls = getattr(module, f"{prefix}{kind}Adapter")
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load {kind.lower()} adapter for '{driver}': {e}") from e
    return adapter_cls()


class ConnectionManager:
    """Hands out pooled connections through a synchronous adapter.

    Safe to share between threads: the pool is created once even when
    several threads make their first call at the same time.
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._adapter = _load_adapter(config.driver, "Sync")
        self._pool: Any = None
        self._pool_lock = threading.Lock()

    @property
    def adapter(self) -> Any:
        return self._adapter

    def _ensure_pool(self) -> Any:
        pool = self._pool
        if pool is not None:
            return pool
        with self._pool_lock:
            if self._pool is None:
                logger.debug(
                    "Opening %s pool of %d connection(s)",
                    self.config.driver,
                    self.config.pool_size,
                )
                self._pool = self._adapter.create_pool(self.config)
            return self._pool

    @contextmanager
    def get_connection(self):  # type: ignore[no-untyped-def]
        """Borrow a connection for the duration of a ``with`` block."""
        pool = self._ensure_pool()
        connection = self._adapter.acquire_connection(pool)
        try:
            yield connection
        finally:
            self._adapter.release_connection(connection, pool)

    def close_pool(self) -> None:
        """Close idle connections and forget the pool. No-op when never opened."""
        with self._pool_lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            self._adapter.close_pool(pool)
            logger.debug("Closed %s pool", self.config.driver)


class AsyncConnectionManager:
    """Hands out pooled connections through an asynchronous adapter.

    Also finishes closing async row streams that were dropped while still
    holding a connection (see ``release_later``).
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._adapter = _load_adapter(config.driver, "Async")
        self._pool: Any = None
        self._pool_lock = asyncio.Lock()
        self._releasing: set[asyncio.Task[Any]] = set()

    @property
    def adapter(self) -> Any:
        return self._adapter

    async def _ensure_pool(self) -> Any:
        pool = self._pool
        if pool is not None:
            return pool
        async with self._pool_lock:
            if self._pool is None:
                logger.debug(
                    "Opening async %s pool of %d connection(s)",
                    self.config.driver,
                    self.config.pool_size,
                )
                self._pool = await self._adapter.create_pool_async(self.config)
            return self._pool

    def release_later(self, closing: Coroutine[Any, Any, Any]) -> None:
        """Run *closing* as a task; borrowers wait for it before taking a connection.

        Must be called with a running event loop.
        """
        task = asyncio.get_running_loop().create_task(closing)
        self._releasing.add(task)
        task.add_done_callback(self._release_done)

    def _release_done(self, task: asyncio.Task[Any]) -> None:
        self._releasing.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning("Closing a dropped row stream failed", exc_info=task.exception())

    async def _settle_releases(self) -> None:
        if self._releasing:
            await asyncio.wait(list(self._releasing))

    @asynccontextmanager
    async def get_connection(self):  # type: ignore[no-untyped-def]
        """Borrow a connection for the duration of an ``async with`` block."""
        await self._settle_releases()
        pool = await self._ensure_pool()
        connection = await self._adapter.acquire_connection_async(pool)
        try:
            yield connection
        finally:
            await self._adapter.release_connection_async(connection, pool)

    async def close_pool(self) -> None:
        """Close idle connections and forget the pool. No-op when never opened."""
        await self._settle_releases()
        async with self._pool_lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            await self._adapter.close_pool_async(pool)
            logger.debug("Closed async %s pool", self.config.driver)
