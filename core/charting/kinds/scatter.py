"""Scatter charts: the first two metric fields plotted against each other."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from analysis.dto import DataCorrelation, DataFeatures, DataStructureInfo

from ..schema import AxisConfig, ChartConfig, ChartType, SeriesConfig
from .base import (
    PLACEHOLDER_SERIES_NAME,
    ChartSkeleton,
    ChartTypeSpec,
    OptionDocument,
    TranscodeContext,
    as_float,
    clamp_score,
    encoded_field,
    option_series,
    warn_axis_data,
)

logger = logging.getLogger(__name__)

CORRELATION_BONUS_THRESHOLD = 0.5


def score_scatter(
    structure: DataStructureInfo, features: DataFeatures, correlations: Sequence[DataCorrelation] = ()
) -> float:
    """Score scatter charts: many rows of two or more correlated metrics."""

    score = 0.3
    if len(structure.metric_fields) >= 2:
        score += 0.3
    if structure.row_count > 20:
        score += 0.2
    if any(abs(c.coefficient) > CORRELATION_BONUS_THRESHOLD for c in correlations):
        score += 0.2
    return clamp_score(score)


def build_scatter(structure: DataStructureInfo, features: DataFeatures) -> ChartSkeleton:
    """Build a scatter skeleton; minimal value axes when fewer than two metrics exist."""

    if len(structure.metric_fields) < 2:
        logger.warning(
            "Scatter chart needs two metric fields; found %d. Using minimal axes.", len(structure.metric_fields)
        )
        name = structure.metric_fields[0] if structure.metric_fields else PLACEHOLDER_SERIES_NAME
        return ChartSkeleton(
            series=(SeriesConfig(name=name, type="scatter"),),
            x_axis=AxisConfig(type="value"),
            y_axis=AxisConfig(type="value"),
        )

    x_field, y_field = structure.metric_fields[0], structure.metric_fields[1]
    return ChartSkeleton(
        series=(SeriesConfig(name=f"{x_field} vs {y_field}", type="scatter"),),
        x_axis=AxisConfig(type="value", name=x_field),
        y_axis=AxisConfig(type="value", name=y_field),
    )


def _resolve_fields(config: ChartConfig, structure: DataStructureInfo) -> tuple[str | None, str | None]:
    metric_fields = structure.metric_fields
    x_field = encoded_field(config, "x")
    y_field = encoded_field(config, "y")
    if x_field is None and config.x_axis is not None and config.x_axis.name in metric_fields:
        x_field = config.x_axis.name
    if y_field is None and config.y_axis is not None and config.y_axis.name in metric_fields:
        y_field = config.y_axis.name
    if x_field is None and metric_fields:
        x_field = metric_fields[0]
    if y_field is None and len(metric_fields) > 1:
        y_field = metric_fields[1]
    return x_field, y_field


def transcode_scatter(config: ChartConfig, option: OptionDocument, context: TranscodeContext) -> None:
    """Fill numeric `[x, y]` pairs, skipping rows where either value is not a number."""

    x_field, y_field = _resolve_fields(config, context.structure)
    pairs: list[list[float]] = []
    if x_field is None or y_field is None:
        logger.warning("Scatter chart needs two metric fields; series left empty.")
    else:
        warn_axis_data(f"xAxis[{x_field}]", "value", [record.get(x_field) for record in context.records])
        warn_axis_data(f"yAxis[{y_field}]", "value", [record.get(y_field) for record in context.records])
        for record in context.records:
            x_value = as_float(record.get(x_field))
            y_value = as_float(record.get(y_field))
            if x_value is None or y_value is None:
                continue
            pairs.append([x_value, y_value])

    for _, rendered in option_series(option, config):
        rendered["data"] = [list(pair) for pair in pairs]


SCATTER = ChartTypeSpec(
    chart_type=ChartType.SCATTER,
    label="Scatter chart",
    uses_axes=True,
    series_type="scatter",
    tooltip_trigger="item",
    tooltip_formatter="",
    score=score_scatter,
    build=build_scatter,
    transcode=transcode_scatter,
)
