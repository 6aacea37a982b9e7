"""INSERT statement construction.

Turns a table name, a record and an optional field filter into a
parameterized INSERT. Columns are never checked against the table: a field
the table does not have reaches the database, and the driver's own error
propagates to the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from row_bag.core.exceptions import InvalidArgumentError
from row_bag.core.interceptors import Interceptors
from row_bag.core.params import bind_params, param_name, placeholder


def _no_quote(identifier: str) -> str:
    return identifier


@dataclass(frozen=True)
class Statement:
    """A SQL text with its ordered parameter names and values."""

    sql: str
    param_names: tuple[str, ...]
    params: tuple[Any, ...]
    paramstyle: str

    def bind(self) -> dict[str, Any] | tuple[Any, ...]:
        """Parameters in the form the driver's ``execute`` accepts."""
        return bind_params(self.param_names, self.params, self.paramstyle)


def select_fields(
    fields: Iterable[str],
    include: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
) -> list[str]:
    """Apply a field filter, keeping record order.

    Names in *include* or *exclude* that are not in *fields* are ignored.

    Raises:
        InvalidArgumentError: If both *include* and *exclude* are given.
    """
    if include is not None and exclude is not None:
        raise InvalidArgumentError("Pass either include or exclude, not both")
    if include is not None:
        wanted = set(include)
        return [name for name in fields if name in wanted]
    if exclude is not None:
        unwanted = set(exclude)
        return [name for name in fields if name not in unwanted]
    return list(fields)


def build_insert(
    table: str,
    record: Mapping[str, Any],
    interceptors: Interceptors,
    *,
    paramstyle: str,
    quote: Callable[[str], str] = _no_quote,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> Statement:
    """Build ``INSERT INTO <table> (<fields>) VALUES (<placeholders>)``.

    Args:
        table: Target table name.
        record: Ordered field name -> value mapping.
        interceptors: Registry whose unknown-value hook converts values the
            driver cannot bind.
        paramstyle: DB-API placeholder style of the target driver.
        quote: Identifier quoting function of the target dialect.
        include: Only these fields are inserted.
        exclude: These fields are left out.

    Raises:
        InvalidArgumentError: On an empty table name or record, when both
            filters are given, or when the filter leaves no field.
    """
    if not table:
        raise InvalidArgumentError("table name is required")
    if not record:
        raise InvalidArgumentError("record is required")

    selected = select_fields(record.keys(), include, exclude)
    if not selected:
        raise InvalidArgumentError(f"No fields left to insert into '{table}' after filtering")

    names = tuple(param_name(i) for i in range(len(selected)))
    values = tuple(interceptors.intercept(record[field]) for field in selected)
    columns = ", ".join(quote(field) for field in selected)
    placeholders = ", ".join(
        placeholder(name, i, paramstyle) for i, name in enumerate(names)
    )
    sql = f"INSERT INTO {quote(table)} ({columns}) VALUES ({placeholders})"
    return Statement(sql=sql, param_names=names, params=values, paramstyle=paramstyle)
