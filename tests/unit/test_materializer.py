"""Unit tests for Row and row materialization."""

from __future__ import annotations

import copy
import pickle
from types import SimpleNamespace

import pytest

from row_bag.core.exceptions import (
    AmbiguousColumnError,
    ColumnNotFoundError,
    InvalidArgumentError,
)
from row_bag.core.interceptors import Interceptors
from row_bag.core.materializer import Row, column_names, materialize


class Money:
    def __init__(self, cents: int) -> None:
        self.cents = cents


def _cursor(*names: str) -> SimpleNamespace:
    description = [(name, None, None, None, None, None, None) for name in names]
    return SimpleNamespace(description=description)


class TestRow:
    def test_attribute_access(self) -> None:
        row = Row(["Id", "DataString"], [1, "hello"])
        assert row.Id == 1
        assert row.DataString == "hello"

    def test_item_access(self) -> None:
        row = Row(["Id"], [1])
        assert row["Id"] == 1

    def test_column_order_preserved(self) -> None:
        row = Row(["b", "a", "c"], [1, 2, 3])
        assert list(row) == ["b", "a", "c"]
        assert list(row.values()) == [1, 2, 3]

    def test_unknown_attribute_raises_column_not_found(self) -> None:
        row = Row(["Id"], [1])
        with pytest.raises(ColumnNotFoundError) as exc_info:
            row.Missing  # noqa: B018
        assert exc_info.value.column == "Missing"
        assert exc_info.value.available == ["Id"]

    def test_column_not_found_is_attribute_error(self) -> None:
        row = Row(["Id"], [1])
        assert getattr(row, "Missing", "default") == "default"
        assert not hasattr(row, "Missing")

    def test_unknown_item_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            Row(["Id"], [1])["Missing"]

    def test_read_only(self) -> None:
        row = Row(["Id"], [1])
        with pytest.raises(AttributeError):
            row.Id = 2  # type: ignore[misc]
        with pytest.raises(AttributeError):
            del row.Id
        assert row.Id == 1

    def test_column_names_are_case_sensitive(self) -> None:
        row = Row(["Id"], [1])
        with pytest.raises(ColumnNotFoundError):
            row.id  # noqa: B018

    def test_equality_with_mapping(self) -> None:
        assert Row(["Id", "Name"], [1, "a"]) == {"Id": 1, "Name": "a"}
        assert Row(["Id"], [1]) == Row(["Id"], [1])
        assert Row(["Id"], [1]) != Row(["Id"], [2])

    def test_as_dict_returns_copy(self) -> None:
        row = Row(["Id"], [1])
        data = row.as_dict()
        data["Id"] = 99
        assert row.Id == 1

    def test_dir_lists_columns(self) -> None:
        assert "DataInt" in dir(Row(["DataInt"], [5]))

    def test_repr(self) -> None:
        assert repr(Row(["Id", "Name"], [1, "a"])) == "Row(Id=1, Name='a')"

    def test_mismatched_lengths_raise(self) -> None:
        with pytest.raises(ValueError):
            Row(["Id", "Name"], [1])

    def test_copy_keeps_columns(self) -> None:
        row = Row(["Id", "Name"], [1, "a"])
        for clone in (copy.copy(row), copy.deepcopy(row)):
            assert clone == row
            assert clone.Name == "a"
            assert list(clone) == ["Id", "Name"]

    def test_pickle_round_trip(self) -> None:
        row = Row(["Id", "Name"], [1, "a"])
        restored = pickle.loads(pickle.dumps(row))
        assert isinstance(restored, Row)
        assert restored.as_dict() == {"Id": 1, "Name": "a"}


class TestColumnNames:
    def test_names_from_description(self) -> None:
        assert column_names(_cursor("Id", "DataInt")) == ["Id", "DataInt"]

    def test_no_result_set(self) -> None:
        assert column_names(SimpleNamespace(description=None)) is None

    def test_duplicate_names_raise(self) -> None:
        with pytest.raises(AmbiguousColumnError) as exc_info:
            column_names(_cursor("id", "name", "id"))
        assert exc_info.value.column == "id"

    def test_ambiguous_column_is_invalid_argument(self) -> None:
        with pytest.raises(InvalidArgumentError):
            column_names(_cursor("id", "id"))


class TestMaterialize:
    def test_tuple_row(self) -> None:
        row = materialize(["Id", "DataInt"], (1, 5), Interceptors())
        assert row == {"Id": 1, "DataInt": 5}

    def test_mapping_row(self) -> None:
        row = materialize(["Id", "DataInt"], {"DataInt": 5, "Id": 1}, Interceptors())
        assert list(row.items()) == [("Id", 1), ("DataInt", 5)]

    def test_unknown_values_go_through_interceptor(self) -> None:
        interceptors = Interceptors()
        interceptors.unknown_value_type = lambda v: v.cents if isinstance(v, Money) else v
        row = materialize(["Id", "Price"], (1, Money(250)), interceptors)
        assert row.Price == 250

    def test_native_values_skip_interceptor(self) -> None:
        interceptors = Interceptors()
        interceptors.unknown_value_type = lambda v: "intercepted"
        row = materialize(["Id", "Name", "Blob"], (1, None, b"x"), interceptors)
        assert row == {"Id": 1, "Name": None, "Blob": b"x"}
