"""Bar and line charts: one dimension on x, one series per metric on y."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from analysis.dto import DataCorrelation, DataFeatures, DataStructureInfo
from analysis.values import display_label

from ..schema import AxisConfig, ChartConfig, ChartType, LegendConfig, SeriesConfig
from .base import (
    PLACEHOLDER_SERIES_NAME,
    ChartSkeleton,
    ChartTypeSpec,
    OptionDocument,
    TranscodeContext,
    as_float,
    category_labels,
    clamp_score,
    encoded_field,
    option_series,
    series_metric_field,
    warn_axis_data,
)

logger = logging.getLogger(__name__)

VALUE_AXIS_NAME = "Value"


def score_bar(
    structure: DataStructureInfo, features: DataFeatures, correlations: Sequence[DataCorrelation] = ()
) -> float:
    """Score bar charts: categorical comparisons over modest row counts."""

    score = 0.6
    if features.is_categorical:
        score += 0.2
    if structure.row_count <= 20:
        score += 0.1
    if len(structure.metric_fields) > 1:
        score += 0.1
    if features.is_time_series and features.has_trend:
        score -= 0.1
    return clamp_score(score)


def score_line(
    structure: DataStructureInfo, features: DataFeatures, correlations: Sequence[DataCorrelation] = ()
) -> float:
    """Score line charts: trending time series."""

    score = 0.5
    if features.is_time_series:
        score += 0.3
    if features.has_trend:
        score += 0.2
    if structure.row_count >= 5:
        score += 0.1
    if len(structure.metric_fields) > 1 and len(structure.dimension_fields) == 1:
        score += 0.1
    return clamp_score(score)


def _build_cartesian(series_type: str, structure: DataStructureInfo, features: DataFeatures) -> ChartSkeleton:
    x_field = structure.dimension_fields[0] if structure.dimension_fields else ""
    x_axis = AxisConfig(type="time" if features.is_time_series else "category", name=x_field)
    y_axis = AxisConfig(type="value", name=VALUE_AXIS_NAME)

    metric_fields = structure.metric_fields or (PLACEHOLDER_SERIES_NAME,)
    series = tuple(SeriesConfig(name=name, type=series_type) for name in metric_fields)

    legend = None
    if len(structure.metric_fields) > 1:
        legend = LegendConfig(data=tuple(structure.metric_fields))
    return ChartSkeleton(series=series, x_axis=x_axis, y_axis=y_axis, legend=legend)


def build_bar(structure: DataStructureInfo, features: DataFeatures) -> ChartSkeleton:
    """Build a bar chart skeleton."""

    return _build_cartesian("bar", structure, features)


def build_line(structure: DataStructureInfo, features: DataFeatures) -> ChartSkeleton:
    """Build a line chart skeleton."""

    return _build_cartesian("line", structure, features)


def resolve_x_field(config: ChartConfig, structure: DataStructureInfo) -> str | None:
    """Return the x field: explicit encode binding, synthesized axis field, or first dimension."""

    name = encoded_field(config, "x")
    if name:
        return name
    if config.x_axis is not None and config.x_axis.name in structure.field_types:
        return config.x_axis.name
    if structure.dimension_fields:
        return structure.dimension_fields[0]
    return None


def transcode_cartesian(config: ChartConfig, option: OptionDocument, context: TranscodeContext) -> None:
    """Fill x-axis categories or [x, y] pairs for bar/line style documents."""

    records = context.records
    x_field = resolve_x_field(config, context.structure)
    x_axis: dict[str, Any] = option.setdefault("xAxis", {"type": "category"})
    axis_type = str(x_axis.get("type") or "category")
    y_axis_type = str((option.get("yAxis") or {}).get("type") or "value")

    if x_field is None:
        logger.warning("No x field available for %s chart; series left empty.", config.type)
        for _, rendered in option_series(option, config):
            rendered["data"] = []
        return

    x_values = [record.get(x_field) for record in records]
    warn_axis_data(f"xAxis[{x_field}]", axis_type, x_values)

    if axis_type == "category":
        x_axis["data"] = category_labels(records, x_field)
    else:
        x_axis.pop("data", None)

    for index, (series, rendered) in enumerate(option_series(option, config)):
        metric_field = series_metric_field(series, index, context.structure)
        if not rendered.get("name") and metric_field:
            rendered["name"] = metric_field
        if metric_field is None:
            rendered["data"] = []
            continue

        y_values = [record.get(metric_field) for record in records]
        warn_axis_data(f"series[{metric_field}]", y_axis_type, y_values)

        if axis_type == "category":
            rendered["data"] = [as_float(value) for value in y_values]
            continue

        pairs: list[list[Any]] = []
        for record in records:
            x_value = record.get(x_field)
            y_value = record.get(metric_field)
            if x_value is None or y_value is None:
                continue
            number = as_float(y_value)
            if number is None:
                logger.warning("Skipping non-numeric %s value %r.", metric_field, y_value)
                continue
            pairs.append([display_label(x_value), number])
        rendered["data"] = pairs


BAR = ChartTypeSpec(
    chart_type=ChartType.BAR,
    label="Bar chart",
    uses_axes=True,
    series_type="bar",
    tooltip_trigger="axis",
    tooltip_formatter="{a} <br/>{b} : {c}",
    score=score_bar,
    build=build_bar,
    transcode=transcode_cartesian,
)

LINE = ChartTypeSpec(
    chart_type=ChartType.LINE,
    label="Line chart",
    uses_axes=True,
    series_type="line",
    tooltip_trigger="axis",
    tooltip_formatter="{a} <br/>{b} : {c}",
    score=score_line,
    build=build_line,
    transcode=transcode_cartesian,
)
