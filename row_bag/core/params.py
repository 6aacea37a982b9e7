"""SQL parameter rendering.

Renders placeholders in any DB-API ``paramstyle`` and packs bound values in
the shape the driver expects for that style.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from row_bag.core.exceptions import InvalidArgumentError

# Styles whose drivers take a mapping of name -> value
NAMED_STYLES = frozenset({"named", "pyformat"})
# Styles whose drivers take a sequence of values
POSITIONAL_STYLES = frozenset({"qmark", "format", "numeric"})


def placeholder(name: str, index: int, paramstyle: str) -> str:
    """Return the placeholder text for one parameter.

    Args:
        name: Parameter name, used by the named styles.
        index: Zero-based position, used by ``numeric``.
        paramstyle: One of the DB-API 2.0 paramstyles.
    """
    if paramstyle == "named":
        return f":{name}"
    if paramstyle == "pyformat":
        return f"%({name})s"
    if paramstyle == "qmark":
        return "?"
    if paramstyle == "format":
        return "%s"
    if paramstyle == "numeric":
        return f":{index + 1}"
    raise InvalidArgumentError(f"Unsupported paramstyle: {paramstyle}")


def bind_params(
    names: Sequence[str],
    values: Sequence[Any],
    paramstyle: str,
) -> dict[str, Any] | tuple[Any, ...]:
    """Pack *values* for the driver: a dict for named styles, a tuple otherwise."""
    if paramstyle in NAMED_STYLES:
        return dict(zip(names, values, strict=True))
    if paramstyle in POSITIONAL_STYLES:
        return tuple(values)
    raise InvalidArgumentError(f"Unsupported paramstyle: {paramstyle}")


def param_name(index: int) -> str:
    """Name of the *index*-th bound parameter.

    Field names are not reused as parameter names: they may contain
    characters that are legal in a quoted identifier but not in a
    placeholder.
    """
    return f"p{index}"
