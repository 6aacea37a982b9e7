"""Row materialization.

Turns one driver row into a read-only ``Row`` whose attributes are the
result set's column names. Values outside the native kinds go through the
unknown-value interceptor on the way out.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from row_bag.core.exceptions import AmbiguousColumnError, ColumnNotFoundError
from row_bag.core.interceptors import Interceptors


class Row(Mapping[str, Any]):
    """A read-only record built from one result row.

    Columns are reachable as attributes (``row.DataInt``) and as items
    (``row["DataInt"]``). Iteration follows result-set column order. A column
    whose name collides with a method of this class (``keys``, ``get``, ...)
    is only reachable as an item.
    """

    __slots__ = ("_data",)

    def __init__(self, columns: Sequence[str], values: Sequence[Any]) -> None:
        object.__setattr__(self, "_data", dict(zip(columns, values, strict=True)))

    def __getattr__(self, name: str) -> Any:
        try:
            data = object.__getattribute__(self, "_data")
        except AttributeError:
            raise AttributeError(name) from None
        try:
            return data[name]
        except KeyError:
            raise ColumnNotFoundError(name, list(data)) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Row is read-only, cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Row is read-only, cannot delete '{name}'")

    def __getitem__(self, column: str) -> Any:
        return self._data[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._data))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._data.items())
        return f"Row({fields})"

    def __reduce__(self) -> tuple[type[Row], tuple[list[str], list[Any]]]:
        # copy and pickle would otherwise restore _data through __setattr__
        return (Row, (list(self._data), list(self._data.values())))

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable copy of the row as a plain dict."""
        return dict(self._data)


def column_names(cursor: Any) -> list[str] | None:
    """Column names from a DB-API cursor, or None for a statement without rows.

    Raises:
        AmbiguousColumnError: If a name appears more than once (e.g. a join
            selecting two ``id`` columns without aliases).
    """
    if cursor.description is None:
        return None
    columns = [desc[0] for desc in cursor.description]
    seen: set[str] = set()
    for name in columns:
        if name in seen:
            raise AmbiguousColumnError(name)
        seen.add(name)
    return columns


def materialize(
    columns: Sequence[str],
    raw_row: Any,
    interceptors: Interceptors,
) -> Row:
    """Build a Row from one driver row.

    Handles both tuple-like rows and dict-like rows from different drivers.
    """
    if isinstance(raw_row, Mapping):
        raw_values = [raw_row[name] for name in columns]
    else:
        raw_values = list(raw_row)
    values = [interceptors.intercept(value) for value in raw_values]
    return Row(columns, values)
