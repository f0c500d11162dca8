"""Tests for ChartConfig validation and axis-data checks."""

from __future__ import annotations

from datetime import date

import pytest

from core.charting.errors import ChartConfigurationError
from core.charting.schema import (
    AxisConfig,
    ChartConfig,
    ChartDataSource,
    ChartType,
    LegendConfig,
    SeriesConfig,
)
from core.charting.validator import ensure_valid_chart_config, validate_axis_data, validate_chart_config

pytestmark = pytest.mark.unit


def _bar_config(**overrides) -> ChartConfig:
    fields = {
        "type": ChartType.BAR,
        "title": "Sales",
        "x_axis": AxisConfig(type="category", name="month"),
        "y_axis": AxisConfig(type="value"),
        "series": (SeriesConfig(name="sales", type="bar"),),
    }
    fields.update(overrides)
    return ChartConfig(**fields)


def test_category_axis_accepts_anything() -> None:
    """Category axes never reject data."""

    assert validate_axis_data("category", ["a", 1, None, {"x": 1}]).is_valid


def test_value_axis_rejects_non_numeric_values() -> None:
    """Value axes require numbers; nulls are ignored."""

    assert validate_axis_data("value", [1, 2.5, None]).is_valid
    result = validate_axis_data("value", [1, "x"])
    assert result.is_valid is False
    assert "numeric" in (result.message or "")


def test_time_axis_requires_dates() -> None:
    """Time axes accept date objects and parseable strings."""

    assert validate_axis_data("time", ["2024-01-01", date(2024, 1, 2)]).is_valid
    assert not validate_axis_data("time", ["2024-01-01", "soon"]).is_valid


def test_log_axis_requires_positive_numbers() -> None:
    """Log axes reject zero and negative values."""

    assert validate_axis_data("log", [1, 10, 100]).is_valid
    assert not validate_axis_data("log", [1, 0]).is_valid
    assert not validate_axis_data("log", [-3]).is_valid


def test_unknown_axis_type_is_invalid() -> None:
    """Axis types outside the closed set never validate."""

    assert not validate_axis_data("polar", [1]).is_valid


def test_valid_bar_config_passes() -> None:
    """A well-formed bar config has no errors or warnings."""

    result = validate_chart_config(_bar_config())

    assert result.is_valid is True
    assert result.errors == ()
    assert result.warnings == ()


def test_config_without_series_is_invalid() -> None:
    """At least one series is required."""

    result = validate_chart_config(_bar_config(series=()))

    assert result.is_valid is False
    assert any("series must contain" in error for error in result.errors)


def test_axis_types_require_axes() -> None:
    """Bar charts without axes are rejected."""

    result = validate_chart_config(_bar_config(x_axis=None, y_axis=None))

    assert any("requires an xAxis" in error for error in result.errors)
    assert any("requires a yAxis" in error for error in result.errors)


def test_pie_config_rejects_axes() -> None:
    """Pie charts must not declare axes."""

    result = validate_chart_config(_bar_config(type=ChartType.PIE))

    assert result.is_valid is False
    assert any("does not use axes" in error for error in result.errors)


def test_api_data_source_requires_url() -> None:
    """Remote data sources need a URL."""

    result = validate_chart_config(_bar_config(data_source=ChartDataSource(type="api")))

    assert any("api_url is required" in error for error in result.errors)


def test_auto_refresh_requires_positive_interval() -> None:
    """Auto refresh with a non-positive interval is an error."""

    result = validate_chart_config(_bar_config(auto_refresh=True, refresh_interval=0))

    assert any("refresh_interval" in error for error in result.errors)


def test_bad_legend_orient_is_an_error() -> None:
    """Legend orientation is limited to horizontal/vertical."""

    result = validate_chart_config(_bar_config(legend=LegendConfig(orient="diagonal")))  # type: ignore[arg-type]

    assert any("legend.orient" in error for error in result.errors)


def test_unregistered_type_is_a_warning_not_an_error() -> None:
    """Types without dedicated rendering validate with a warning."""

    result = validate_chart_config(_bar_config(type=ChartType.FUNNEL))

    assert result.is_valid is True
    assert any("no dedicated rendering" in warning for warning in result.warnings)


def test_mismatched_axis_data_is_a_warning() -> None:
    """Static axis data that does not fit the axis type is reported, not rejected."""

    config = _bar_config(y_axis=AxisConfig(type="value", data=("low", "high")))
    result = validate_chart_config(config)

    assert result.is_valid is True
    assert any("ignored for value axes" in warning for warning in result.warnings)
    assert any("numeric" in warning for warning in result.warnings)


def test_ensure_valid_chart_config_raises_with_all_errors() -> None:
    """Fail fast with every error joined into one message."""

    with pytest.raises(ChartConfigurationError) as excinfo:
        ensure_valid_chart_config(_bar_config(series=(), x_axis=None))

    message = str(excinfo.value)
    assert "series must contain" in message
    assert "requires an xAxis" in message
