"""Unit tests for the Interceptors registry."""

from __future__ import annotations

from enum import Enum

import pytest

from row_bag.core.exceptions import InvalidArgumentError
from row_bag.core.interceptors import UNKNOWN_VALUE_TYPE, Interceptors


class Color(Enum):
    RED = "red"


class TestInterceptors:
    def test_default_is_identity(self) -> None:
        interceptors = Interceptors()
        hook = interceptors.get(UNKNOWN_VALUE_TYPE)
        marker = object()
        assert hook(marker) is marker

    def test_set_then_get_returns_same_function(self) -> None:
        interceptors = Interceptors()

        def to_str(value: object) -> str:
            return str(value)

        interceptors.set(UNKNOWN_VALUE_TYPE, to_str)
        assert interceptors.get(UNKNOWN_VALUE_TYPE) is to_str

    def test_set_none_raises_and_keeps_previous(self) -> None:
        interceptors = Interceptors()

        def to_str(value: object) -> str:
            return str(value)

        interceptors.set(UNKNOWN_VALUE_TYPE, to_str)
        with pytest.raises(InvalidArgumentError):
            interceptors.set(UNKNOWN_VALUE_TYPE, None)  # type: ignore[arg-type]
        assert interceptors.get(UNKNOWN_VALUE_TYPE) is to_str

    def test_set_non_callable_raises(self) -> None:
        interceptors = Interceptors()
        with pytest.raises(InvalidArgumentError):
            interceptors.set(UNKNOWN_VALUE_TYPE, "not a function")  # type: ignore[arg-type]

    def test_property_setter_rejects_none(self) -> None:
        interceptors = Interceptors()
        previous = interceptors.unknown_value_type
        with pytest.raises(InvalidArgumentError):
            interceptors.unknown_value_type = None  # type: ignore[assignment]
        assert interceptors.unknown_value_type is previous

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Interceptors().set(UNKNOWN_VALUE_TYPE, None)  # type: ignore[arg-type]

    def test_get_unknown_key_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="no_such_key"):
            Interceptors().get("no_such_key")

    def test_set_empty_key_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Interceptors().set("", str)

    def test_custom_key(self) -> None:
        interceptors = Interceptors()
        interceptors.set("audit", repr)
        assert interceptors.has("audit")
        assert interceptors.get("audit") is repr
        assert len(interceptors) == 2

    def test_intercept_leaves_native_values_alone(self) -> None:
        interceptors = Interceptors()
        interceptors.unknown_value_type = lambda v: "intercepted"
        for value in (None, True, 1, 1.5, "s", b"b"):
            assert interceptors.intercept(value) == value

    def test_intercept_routes_other_values_through_hook(self) -> None:
        interceptors = Interceptors()
        interceptors.unknown_value_type = lambda v: v.value
        assert interceptors.intercept(Color.RED) == "red"
