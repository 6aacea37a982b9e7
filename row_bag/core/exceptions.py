"""RowBag exception hierarchy.

Errors raised by the database driver itself (``sqlite3.Error``,
``psycopg.Error``, ...) are never wrapped: they reach the caller unchanged so
driver-specific detail stays available.
"""

from __future__ import annotations


class RowBagError(Exception):
    """Base exception for all RowBag errors."""


# --- Arguments ---


class InvalidArgumentError(RowBagError, ValueError):
    """Raised when a call receives a missing or unusable argument."""


class AmbiguousColumnError(InvalidArgumentError):
    """Raised when a result set holds the same column name more than once."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Result set contains duplicate column '{column}'")


# --- Reading ---


class ColumnNotFoundError(RowBagError, AttributeError):
    """Raised when a materialized row is asked for a column it does not hold."""

    def __init__(self, column: str, available: list[str]) -> None:
        self.column = column
        self.available = available
        super().__init__(f"Row has no column '{column}' (columns: {available})")


class MultipleRowsError(RowBagError):
    """Raised by a strict read_one when more than one row comes back."""

    def __init__(self, sql: str) -> None:
        self.sql = sql
        super().__init__(f"read_one returned more than one row for: {sql}")


# --- Adapter ---


class AdapterError(RowBagError):
    """Base for adapter errors."""


class PoolError(AdapterError):
    """Raised on connection pool failures."""
