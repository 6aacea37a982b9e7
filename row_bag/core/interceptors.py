"""Type interceptor registry.

Holds the conversion hooks consulted whenever a value falls outside the
natively supported kinds (see ``row_bag.core.values``). The write path runs
record values through the hook before binding; the read path runs column
values through it after fetching.

A registry is owned by one mapper and shared by reference. It is not
synchronized: configure it before the mapper is used from several threads.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from row_bag.core.exceptions import InvalidArgumentError
from row_bag.core.values import is_native

logger = logging.getLogger(__name__)

Interceptor = Callable[[Any], Any]

UNKNOWN_VALUE_TYPE = "unknown_value_type"


def _identity(value: Any) -> Any:
    return value


class Interceptors:
    """Registry of value-conversion hooks, one per key.

    The ``UNKNOWN_VALUE_TYPE`` key is always present and starts as the
    identity function. No key can ever hold ``None``.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, Interceptor] = {UNKNOWN_VALUE_TYPE: _identity}

    def get(self, key: str) -> Interceptor:
        """Return the hook registered under *key*.

        Raises:
            InvalidArgumentError: If nothing is registered under *key*.
        """
        try:
            return self._hooks[key]
        except KeyError:
            raise InvalidArgumentError(f"No interceptor registered for '{key}'") from None

    def set(self, key: str, fn: Interceptor) -> None:
        """Register *fn* under *key*, replacing any previous hook.

        Raises:
            InvalidArgumentError: If *key* is empty or *fn* is not callable.
                The previous hook stays in place.
        """
        if not key:
            raise InvalidArgumentError("Interceptor key must be a non-empty string")
        if fn is None or not callable(fn):
            raise InvalidArgumentError(f"Interceptor for '{key}' cannot be {fn!r}")
        self._hooks[key] = fn
        logger.debug("Interceptor '%s' set to %r", key, fn)

    def has(self, key: str) -> bool:
        """Check if a hook is registered under *key*."""
        return key in self._hooks

    @property
    def unknown_value_type(self) -> Interceptor:
        return self._hooks[UNKNOWN_VALUE_TYPE]

    @unknown_value_type.setter
    def unknown_value_type(self, fn: Interceptor) -> None:
        self.set(UNKNOWN_VALUE_TYPE, fn)

    def intercept(self, value: Any) -> Any:
        """Run *value* through the unknown-value hook unless it is native."""
        if is_native(value):
            return value
        return self._hooks[UNKNOWN_VALUE_TYPE](value)

    def __len__(self) -> int:
        return len(self._hooks)
