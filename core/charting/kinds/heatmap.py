"""Heatmaps: one metric over the cross product of two dimensions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from analysis.dto import DataCorrelation, DataFeatures, DataStructureInfo
from analysis.values import display_label

from ..schema import AxisConfig, ChartConfig, ChartType, SeriesConfig
from .base import (
    PLACEHOLDER_SERIES_NAME,
    ChartSkeleton,
    ChartTypeSpec,
    OptionDocument,
    TranscodeContext,
    as_float,
    clamp_score,
    distinct_labels,
    encoded_field,
    option_series,
    series_metric_field,
)

logger = logging.getLogger(__name__)


def score_heatmap(
    structure: DataStructureInfo, features: DataFeatures, correlations: Sequence[DataCorrelation] = ()
) -> float:
    """Score heatmaps: two dimensions and one metric over many rows."""

    score = 0.2
    if len(structure.dimension_fields) >= 2:
        score += 0.3
    if len(structure.metric_fields) == 1:
        score += 0.2
    if structure.row_count > 20:
        score += 0.2
    return clamp_score(score)


def build_heatmap(structure: DataStructureInfo, features: DataFeatures) -> ChartSkeleton:
    """Build a heatmap skeleton; minimal category axes when fewer than two dimensions exist."""

    value_field = structure.metric_fields[0] if structure.metric_fields else PLACEHOLDER_SERIES_NAME
    series = (SeriesConfig(name=value_field, type="heatmap"),)
    extra_styles = {"visualMap": {"show": True, "calculable": True}}

    if len(structure.dimension_fields) < 2:
        logger.warning(
            "Heatmap needs two dimension fields; found %d. Using minimal axes.", len(structure.dimension_fields)
        )
        return ChartSkeleton(
            series=series,
            x_axis=AxisConfig(type="category"),
            y_axis=AxisConfig(type="category"),
            extra_styles=extra_styles,
        )

    return ChartSkeleton(
        series=series,
        x_axis=AxisConfig(type="category", name=structure.dimension_fields[0]),
        y_axis=AxisConfig(type="category", name=structure.dimension_fields[1]),
        extra_styles=extra_styles,
    )


def _resolve_dimension(config: ChartConfig, structure: DataStructureInfo, role: str, position: int) -> str | None:
    name = encoded_field(config, role)
    if name:
        return name
    axis = config.x_axis if role == "x" else config.y_axis
    if axis is not None and axis.name in structure.dimension_fields:
        return axis.name
    if len(structure.dimension_fields) > position:
        return structure.dimension_fields[position]
    return None


def transcode_heatmap(config: ChartConfig, option: OptionDocument, context: TranscodeContext) -> None:
    """Fill `[xIndex, yIndex, value]` triples over the full x × y grid.

    Repeated cells keep their last value; the visual map range still spans
    every sample.
    """

    structure = context.structure
    x_field = _resolve_dimension(config, structure, "x", 0)
    y_field = _resolve_dimension(config, structure, "y", 1)
    value_field = None
    if config.series:
        value_field = series_metric_field(config.series[0], 0, structure)

    if x_field is None or y_field is None or x_field == y_field:
        logger.warning("Heatmap needs two distinct dimension fields; series left empty.")
        for _, rendered in option_series(option, config):
            rendered["data"] = []
        return

    x_labels = distinct_labels(context.records, x_field)
    y_labels = distinct_labels(context.records, y_field)
    lookup: dict[tuple[str, str], float] = {}
    observed: list[float] = []
    for record in context.records:
        x_value = record.get(x_field)
        y_value = record.get(y_field)
        if x_value is None or y_value is None:
            continue
        number = as_float(record.get(value_field)) if value_field else None
        if number is None:
            continue
        lookup[(display_label(x_value), display_label(y_value))] = number
        observed.append(number)

    triples: list[list[Any]] = []
    for x_index, x_label in enumerate(x_labels):
        for y_index, y_label in enumerate(y_labels):
            triples.append([x_index, y_index, lookup.get((x_label, y_label), 0)])

    option.setdefault("xAxis", {"type": "category"})["data"] = x_labels
    option.setdefault("yAxis", {"type": "category"})["data"] = y_labels
    for _, rendered in option_series(option, config):
        if not rendered.get("name") and value_field:
            rendered["name"] = value_field
        rendered["data"] = [list(triple) for triple in triples]

    visual_map: dict[str, Any] = option.setdefault(
        "visualMap",
        {"calculable": True, "orient": "horizontal", "left": "center", "bottom": "5%"},
    )
    if observed:
        visual_map.setdefault("min", min(observed))
        visual_map.setdefault("max", max(observed))


HEATMAP = ChartTypeSpec(
    chart_type=ChartType.HEATMAP,
    label="Heatmap",
    uses_axes=True,
    series_type="heatmap",
    tooltip_trigger="axis",
    tooltip_formatter="",
    score=score_heatmap,
    build=build_heatmap,
    transcode=transcode_heatmap,
)
