"""Tests for value classification and record-set location."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from analysis.values import (
    coerce_json_value,
    find_records,
    is_numeric,
    locate_record_set,
    parse_datetime_value,
    semantic_type_of,
)

pytestmark = pytest.mark.unit


def test_semantic_type_distinguishes_booleans_from_integers() -> None:
    """Classify booleans before integers since bool subclasses int."""

    assert semantic_type_of(True) == "boolean"
    assert semantic_type_of(3) == "integer"
    assert semantic_type_of(3.5) == "float"
    assert semantic_type_of(Decimal("1.25")) == "float"
    assert semantic_type_of(None) is None


def test_semantic_type_recognizes_date_strings_and_containers() -> None:
    """Tag parseable date strings as datetime and nested values by container kind."""

    assert semantic_type_of("2024-03-01") == "datetime"
    assert semantic_type_of(date(2024, 3, 1)) == "datetime"
    assert semantic_type_of("North") == "string"
    assert semantic_type_of("room 12") == "string"
    assert semantic_type_of({"a": 1}) == "object"
    assert semantic_type_of([1, 2]) == "array"


def test_parse_datetime_value_accepts_common_formats() -> None:
    """Parse ISO, slash and month-name formats; reject plain words."""

    assert parse_datetime_value("2024-01-05") == datetime(2024, 1, 5)
    assert parse_datetime_value("2024/01/05 10:30") == datetime(2024, 1, 5, 10, 30)
    assert parse_datetime_value("Jan 05, 2024") == datetime(2024, 1, 5)
    assert parse_datetime_value("2024-01-05T08:15:00") == datetime(2024, 1, 5, 8, 15)
    assert parse_datetime_value("Monday") is None
    assert parse_datetime_value(20240105) is None


def test_is_numeric_rejects_booleans_and_non_finite_floats() -> None:
    """Only finite, non-boolean numbers count as numeric."""

    assert is_numeric(1)
    assert is_numeric(2.5)
    assert not is_numeric(True)
    assert not is_numeric(float("nan"))
    assert not is_numeric(float("inf"))
    assert not is_numeric("3")


def test_coerce_json_value_decodes_text_and_returns_none_for_garbage() -> None:
    """Decode JSON text (str or bytes); invalid JSON becomes None."""

    assert coerce_json_value('[{"a": 1}]') == [{"a": 1}]
    assert coerce_json_value(b'{"a": 1}') == {"a": 1}
    assert coerce_json_value("{not json") is None
    assert coerce_json_value(({"a": 1},)) == [{"a": 1}]


def test_locate_record_set_prefers_longest_array_property() -> None:
    """Pick the longest list-valued property of a wrapper object."""

    payload = {"meta": [1], "rows": [{"a": 1}, {"a": 2}], "total": 2}
    record_set = locate_record_set(payload)

    assert record_set.source == "property"
    assert record_set.property_name == "rows"
    assert record_set.row_count == 2
    assert record_set.records == ({"a": 1}, {"a": 2})


def test_locate_record_set_keeps_first_property_on_ties() -> None:
    """Break equal-length ties in favor of the first property."""

    payload = {"first": [{"a": 1}], "second": [{"b": 2}]}

    assert locate_record_set(payload).property_name == "first"


def test_locate_record_set_treats_plain_object_as_single_record() -> None:
    """An object without list properties is one record."""

    record_set = locate_record_set({"region": "North", "sales": 10})

    assert record_set.source == "single"
    assert record_set.row_count == 1
    assert record_set.records == ({"region": "North", "sales": 10},)


def test_locate_record_set_returns_empty_for_scalars() -> None:
    """Scalars carry no records."""

    assert locate_record_set(42).source == "empty"
    assert locate_record_set(42).row_count == 0


def test_find_records_skips_non_mapping_rows() -> None:
    """Drop array items that are not records."""

    assert find_records([{"a": 1}, 5, "x", {"a": 2}]) == ({"a": 1}, {"a": 2})
