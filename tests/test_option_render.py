"""Tests for rendering ChartConfig objects into option documents."""

from __future__ import annotations

import json
import math

import pytest

from core.charting.recommender import generate_chart_config
from core.charting.render import to_complete_option_document, to_option_document, to_option_json
from core.charting.schema import AxisConfig, ChartConfig, ChartType, SeriesConfig

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("chart_type", list(ChartType))
def test_axes_appear_only_for_axis_chart_types(chart_type, monthly_sales) -> None:
    """Pie and radar documents never carry axes; every other type does."""

    option = to_option_document(generate_chart_config(monthly_sales, chart_type))

    if chart_type in (ChartType.PIE, ChartType.RADAR):
        assert "xAxis" not in option
        assert "yAxis" not in option
    else:
        assert "xAxis" in option
        assert "yAxis" in option
    assert ("radar" in option) is (chart_type == ChartType.RADAR)
    assert option["series"]


def test_option_document_renders_title_toolbox_and_tooltip(monthly_sales) -> None:
    """Top-level blocks mirror the config."""

    option = to_option_document(generate_chart_config(monthly_sales, ChartType.BAR, title="Sales"))

    assert option["title"] == {"text": "Sales", "subtext": "", "left": "center"}
    assert option["tooltip"]["trigger"] == "axis"
    assert option["toolbox"]["feature"]["magicType"] == {"show": True, "type": ["line", "bar", "stack"]}
    assert option["toolbox"]["feature"]["saveAsImage"] == {"show": True}


def test_option_document_does_not_share_state_with_config(monthly_sales) -> None:
    """Mutating a rendered document leaves the config untouched."""

    config = generate_chart_config(monthly_sales, ChartType.PIE)
    option = to_option_document(config)
    option["series"][0]["label"]["show"] = False

    assert config.series[0].label["show"] is True


def test_bar_document_fills_categories_and_values(monthly_sales) -> None:
    """Category axes list per-row labels and series hold per-row numbers."""

    option = to_complete_option_document(generate_chart_config(monthly_sales, ChartType.BAR), monthly_sales)

    assert option["xAxis"]["data"] == ["Jan", "Feb", "Mar", "Apr", "May"]
    assert option["series"][0]["data"] == [120.0, 90.0, 150.0, 110.0, 130.0]


def test_time_axis_document_emits_pairs_and_skips_bad_rows() -> None:
    """Non-category axes get [x, y] pairs; null and non-numeric rows are dropped."""

    data = [
        {"date": "2024-01-01", "value": 1},
        {"date": "2024-01-02", "value": None},
        {"date": None, "value": 3},
        {"date": "2024-01-04", "value": "n/a"},
        {"date": "2024-01-05", "value": 5},
    ]
    config = ChartConfig(
        type=ChartType.LINE,
        x_axis=AxisConfig(type="time", name="date"),
        y_axis=AxisConfig(type="value"),
        series=(SeriesConfig(name="value", type="line"),),
    )
    option = to_complete_option_document(config, data)

    assert option["series"][0]["data"] == [["2024-01-01", 1.0], ["2024-01-05", 5.0]]
    assert "data" not in option["xAxis"]


def test_pie_document_fills_slices_and_legend(monthly_sales) -> None:
    """Pie slices pair category names with values; the legend lists the names."""

    option = to_complete_option_document(generate_chart_config(monthly_sales, ChartType.PIE), monthly_sales)

    assert option["series"][0]["data"][0] == {"name": "Jan", "value": 120.0}
    assert option["legend"]["data"] == ["Jan", "Feb", "Mar", "Apr", "May"]
    assert option["series"][0]["radius"] == "60%"


def test_pie_document_labels_missing_categories_and_zeroes_bad_values() -> None:
    """Missing names become "Unknown"; non-numeric values become 0."""

    data = [{"kind": "a", "n": 2}, {"kind": None, "n": 3}, {"kind": "c", "n": "many"}]
    option = to_complete_option_document(generate_chart_config(data, ChartType.PIE), data)

    assert option["series"][0]["data"] == [
        {"name": "a", "value": 2.0},
        {"name": "Unknown", "value": 3.0},
        {"name": "c", "value": 0.0},
    ]


def test_scatter_document_plots_numeric_pairs(paired_metrics) -> None:
    """Scatter data is one [x, y] pair per row."""

    option = to_complete_option_document(generate_chart_config(paired_metrics, ChartType.SCATTER), paired_metrics)

    assert option["series"][0]["data"] == [[1.0, 2.0], [2.0, 4.0], [3.0, 6.0], [4.0, 8.0], [5.0, 10.0]]
    assert option["tooltip"]["trigger"] == "axis"


def test_unoptimized_scatter_document_falls_back_to_item_tooltip() -> None:
    """A scatter config without an interaction block renders the per-type item trigger."""

    config = ChartConfig(
        type=ChartType.SCATTER,
        x_axis=AxisConfig(type="value"),
        y_axis=AxisConfig(type="value"),
        series=(SeriesConfig(name="points", type="scatter"),),
    )

    option = to_option_document(config)

    assert option["tooltip"] == {"trigger": "item", "formatter": ""}


def test_heatmap_document_covers_full_grid(weekday_grid) -> None:
    """Every (x, y) combination appears once; missing cells are 0."""

    option = to_complete_option_document(generate_chart_config(weekday_grid, ChartType.HEATMAP), weekday_grid)
    cells = option["series"][0]["data"]

    assert option["xAxis"]["data"] == ["Mon", "Tue"]
    assert option["yAxis"]["data"] == ["am", "mid", "pm"]
    assert len(cells) == 6
    assert all(len(cell) == 3 for cell in cells)
    assert {(cell[0], cell[1]) for cell in cells} == {(x, y) for x in range(2) for y in range(3)}
    assert [1, 2, 0] in cells
    assert [0, 1, 7.0] in cells
    assert option["visualMap"]["min"] == 2.0
    assert option["visualMap"]["max"] == 9.0
    assert option["visualMap"]["calculable"] is True


def test_heatmap_visual_map_spans_repeated_cells() -> None:
    """A repeated cell keeps its last value but every sample counts toward the range."""

    data = [
        {"day": "Mon", "slot": "am", "visits": 1},
        {"day": "Mon", "slot": "am", "visits": 100},
        {"day": "Mon", "slot": "am", "visits": 5},
        {"day": "Tue", "slot": "pm", "visits": 3},
    ]
    option = to_complete_option_document(generate_chart_config(data, ChartType.HEATMAP), data)

    assert [0, 0, 5.0] in option["series"][0]["data"]
    assert option["visualMap"]["min"] == 1.0
    assert option["visualMap"]["max"] == 100.0


def test_radar_document_labels_missing_names_unknown() -> None:
    """Rows without a name value are labeled "Unknown" like pie slices."""

    data = [
        {"team": "A", "speed": 10, "power": 4, "skill": 7},
        {"team": None, "speed": 20, "power": 6, "skill": 3},
    ]
    option = to_complete_option_document(generate_chart_config(data, ChartType.RADAR), data)

    assert [item["name"] for item in option["series"][0]["data"]] == ["A", "Unknown"]


def test_radar_document_scales_indicators_with_headroom() -> None:
    """Indicator max is ceil(observed max × 1.2), or 100 for non-positive metrics."""

    data = [
        {"team": "A", "speed": 10, "power": 0, "skill": -5},
        {"team": "B", "speed": 20, "power": 0, "skill": -1},
    ]
    option = to_complete_option_document(generate_chart_config(data, ChartType.RADAR), data)

    assert option["radar"]["indicator"] == [
        {"name": "speed", "max": math.ceil(20 * 1.2)},
        {"name": "power", "max": 100},
        {"name": "skill", "max": 100},
    ]
    assert option["series"][0]["data"] == [
        {"name": "A", "value": [10.0, 0.0, -5.0]},
        {"name": "B", "value": [20.0, 0.0, -1.0]},
    ]


def test_radar_document_names_anonymous_rows() -> None:
    """Without a dimension, the first five rows become "Item n"."""

    data = [{"a": idx, "b": idx * 2, "c": idx * 3} for idx in range(1, 8)]
    option = to_complete_option_document(generate_chart_config(data, ChartType.RADAR), data)

    assert [item["name"] for item in option["series"][0]["data"]] == [f"Item {idx}" for idx in range(1, 6)]


def test_complete_document_tolerates_unusable_data(monthly_sales) -> None:
    """Garbage data still renders a document with empty series."""

    option = to_complete_option_document(generate_chart_config(monthly_sales, ChartType.BAR), "not json")

    assert option["series"][0]["data"] == []


def test_option_json_is_valid_json(daily_trend) -> None:
    """The serialized document parses back to the rendered dict."""

    config = generate_chart_config(daily_trend)
    text = to_option_json(config, daily_trend, indent=2)

    assert json.loads(text) == to_complete_option_document(config, daily_trend)
    assert json.loads(to_option_json(config))["series"][0]["data"] == []
