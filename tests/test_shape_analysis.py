"""Tests for structural analysis of chart payloads."""

from __future__ import annotations

import json
import logging

import pytest

from analysis.shape import analyze_structure

pytestmark = pytest.mark.unit


def test_analyze_structure_splits_dimensions_and_metrics(monthly_sales) -> None:
    """Route string fields to dimensions and numeric fields to metrics."""

    structure = analyze_structure(monthly_sales)

    assert structure.row_count == 5
    assert structure.dimension_fields == ("month",)
    assert structure.metric_fields == ("sales",)
    assert structure.field_types == {"month": "string", "sales": "integer"}
    assert structure.field_samples == {"month": "Jan", "sales": 120}


def test_analyze_structure_partitions_every_field() -> None:
    """Every discovered field lands in exactly one role, in first-record key order."""

    data = [
        {"when": "2024-01-01", "region": "North", "active": True, "units": 3, "price": 9.5, "tags": ["a"]},
        {"when": "2024-01-02", "region": "South", "active": False, "units": 4, "price": 8.0, "tags": []},
    ]
    structure = analyze_structure(data)

    assert structure.metric_fields == ("units", "price")
    assert structure.dimension_fields == ("when", "region", "active", "tags")
    assert set(structure.dimension_fields).isdisjoint(structure.metric_fields)
    assert set(structure.dimension_fields) | set(structure.metric_fields) == set(structure.field_types)
    assert structure.field_types["when"] == "datetime"
    assert structure.field_types["active"] == "boolean"
    assert structure.field_types["tags"] == "array"


def test_analyze_structure_types_null_fields_from_later_rows() -> None:
    """A null in the first row falls back to the first non-null sample."""

    data = [
        {"name": "a", "score": None},
        {"name": "b", "score": 7.5},
    ]
    structure = analyze_structure(data)

    assert structure.metric_fields == ("score",)
    assert structure.field_samples["score"] == 7.5


def test_analyze_structure_defaults_all_null_fields_to_string() -> None:
    """Fields that are never populated become string dimensions."""

    structure = analyze_structure([{"note": None, "value": 1}, {"note": None, "value": 2}])

    assert structure.field_types["note"] == "string"
    assert structure.dimension_fields == ("note",)


def test_analyze_structure_unwraps_array_property() -> None:
    """Analyze the records stored inside a wrapper object."""

    payload = {"total": 2, "items": [{"city": "Oslo", "temp": 3}, {"city": "Rome", "temp": 18}]}
    structure = analyze_structure(payload)

    assert structure.row_count == 2
    assert structure.dimension_fields == ("city",)
    assert structure.metric_fields == ("temp",)


def test_analyze_structure_accepts_json_text(monthly_sales) -> None:
    """JSON text is decoded before analysis."""

    assert analyze_structure(json.dumps(monthly_sales)) == analyze_structure(monthly_sales)


def test_analyze_structure_treats_single_object_as_one_row() -> None:
    """A plain object is analyzed as a single record."""

    structure = analyze_structure({"team": "Blue", "wins": 4, "losses": 1})

    assert structure.row_count == 1
    assert structure.dimension_fields == ("team",)
    assert structure.metric_fields == ("wins", "losses")


@pytest.mark.parametrize("payload", [None, "{oops", 42, []])
def test_analyze_structure_returns_empty_for_unusable_input(payload, caplog) -> None:
    """Null, unparseable, scalar and empty payloads yield an empty structure."""

    with caplog.at_level(logging.WARNING, logger="analysis.shape"):
        structure = analyze_structure(payload)

    assert structure.is_empty
    assert structure.dimension_fields == ()
    assert structure.metric_fields == ()


def test_analyze_structure_is_deterministic(monthly_sales) -> None:
    """Repeated analysis of the same payload yields equal results."""

    assert analyze_structure(monthly_sales) == analyze_structure(list(monthly_sales))
