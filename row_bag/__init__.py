"""RowBag - save ad-hoc records as rows and read rows back as records."""

from __future__ import annotations

from row_bag.core.connection import (
    AsyncConnectionManager,
    ConnectionConfig,
    ConnectionManager,
)
from row_bag.core.enums import DatabaseBackend, ValueKind
from row_bag.core.exceptions import (
    AdapterError,
    AmbiguousColumnError,
    ColumnNotFoundError,
    InvalidArgumentError,
    MultipleRowsError,
    PoolError,
    RowBagError,
)
from row_bag.core.interceptors import UNKNOWN_VALUE_TYPE, Interceptors
from row_bag.core.mapper import AsyncMapper, Mapper
from row_bag.core.materializer import Row
from row_bag.core.settings import RowBagSettings, get_settings
from row_bag.core.statement import Statement, build_insert, select_fields
from row_bag.core.stream import AsyncRowStream, RowStream

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "AsyncConnectionManager",
    # Settings
    "RowBagSettings",
    "get_settings",
    # Mapper
    "Mapper",
    "AsyncMapper",
    # Interceptors
    "Interceptors",
    "UNKNOWN_VALUE_TYPE",
    # Statements
    "Statement",
    "build_insert",
    "select_fields",
    # Rows
    "Row",
    "RowStream",
    "AsyncRowStream",
    # Enums
    "DatabaseBackend",
    "ValueKind",
    # Exceptions
    "RowBagError",
    "InvalidArgumentError",
    "AmbiguousColumnError",
    "ColumnNotFoundError",
    "MultipleRowsError",
    "AdapterError",
    "PoolError",
]
