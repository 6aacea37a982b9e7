"""Value classification and record normalization.

A record reaches the mapper as any record-like object: a mapping, a
dataclass, a Pydantic model, a named tuple, or a plain object carrying its
fields as attributes. ``as_field_map`` turns all of them into one ordered
dict so the rest of the pipeline only ever sees ``dict[str, Any]``.
"""

from __future__ import annotations

import dataclasses
import datetime
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel

from row_bag.core.enums import ValueKind
from row_bag.core.exceptions import InvalidArgumentError

# Checked in order: bool is an int subclass and must match first.
_NATIVE_KINDS: tuple[tuple[type | tuple[type, ...], ValueKind], ...] = (
    (bool, ValueKind.BOOLEAN),
    (int, ValueKind.INTEGER),
    (float, ValueKind.FLOAT),
    (str, ValueKind.STRING),
    ((bytes, bytearray, memoryview), ValueKind.BYTES),
    (
        (datetime.datetime, datetime.date, datetime.time, datetime.timedelta),
        ValueKind.DATETIME,
    ),
)


def classify(value: Any) -> ValueKind:
    """Return the kind tag for *value*.

    Enum members are ``OTHER`` even when they subclass ``int`` or ``str``:
    drivers bind them inconsistently, so they always go through the
    interceptor.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, Enum):
        return ValueKind.OTHER
    for types, kind in _NATIVE_KINDS:
        if isinstance(value, types):
            return kind
    return ValueKind.OTHER


def is_native(value: Any) -> bool:
    """True if drivers can bind *value* without interception."""
    return classify(value) is not ValueKind.OTHER


def as_field_map(record: Any) -> dict[str, Any]:
    """Normalize a record-like object to an ordered field dict.

    Detection order:
    1. Mapping -> its items
    2. Pydantic BaseModel -> model_dump()
    3. dataclass instance -> its fields
    4. named tuple -> _asdict()
    5. plain object -> public entries of vars()

    Raises:
        InvalidArgumentError: If *record* is None, empty, has a non-string
            field name, or cannot be read as a record.
    """
    if record is None:
        raise InvalidArgumentError("record is required")

    if isinstance(record, Mapping):
        fields = dict(record.items())
    elif isinstance(record, BaseModel):
        fields = record.model_dump()
    elif dataclasses.is_dataclass(record) and not isinstance(record, type):
        fields = {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
    elif isinstance(record, tuple) and hasattr(record, "_asdict"):
        fields = dict(record._asdict())
    elif hasattr(record, "__dict__") and not isinstance(record, type):
        fields = {k: v for k, v in vars(record).items() if not k.startswith("_")}
    else:
        raise InvalidArgumentError(
            f"Cannot read fields from record of type {type(record).__name__}"
        )

    if not fields:
        raise InvalidArgumentError("record has no fields")
    for name in fields:
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"Invalid field name: {name!r}")
    return fields
