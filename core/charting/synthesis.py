"""Chart configuration synthesis and optimization.

`synthesize_chart_config` builds a type-specific skeleton through the chart-type
registry. `optimize_chart_config` is a second, idempotent pass that tunes axes,
series and interaction blocks from the same structure and features.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Final

from analysis.dto import DataFeatures, DataStructureInfo, MetricStats

from .schema import (
    AxisConfig,
    ChartConfig,
    ChartDataSource,
    ChartType,
    InteractionConfig,
    SeriesConfig,
    ToolboxConfig,
    coerce_chart_type,
)
from .type_registry import DEFAULT_REGISTRY, ChartTypeRegistry

logger = logging.getLogger(__name__)

DEFAULT_CHART_TITLE: Final[str] = "Data analysis chart"

# Outlier clamp heuristics. The asymmetric gate is intentional; keep as-is.
OUTLIER_CLAMP_SIGMA: Final[float] = 2.5
CLAMP_MIN_GATE: Final[float] = 1.5
CLAMP_MAX_GATE: Final[float] = 0.7

BAR_WIDTH_ROW_THRESHOLD: Final[int] = 10
NARROW_BAR_WIDTH: Final[str] = "50%"
PIE_RADIUS: Final[str] = "60%"
PIE_CENTER: Final[tuple[str, str]] = ("50%", "50%")


def synthesize_chart_config(
    structure: DataStructureInfo,
    features: DataFeatures,
    chart_type: ChartType | str,
    *,
    title: str | None = None,
    data_source: ChartDataSource | None = None,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> ChartConfig:
    """Build a ChartConfig skeleton for a chart type.

    Args:
        structure: Structure of the payload.
        features: Features of the payload.
        chart_type: Requested chart type. Types without registered behavior keep
            their tag but are built with the bar skeleton; unknown strings become bar.
        title: Chart title; defaults to a generic title.
        data_source: Optional data source descriptor carried on the config.
        registry: Chart-type registry used for dispatch.

    Returns:
        A fresh ChartConfig with at least one series.
    """

    spec = registry.resolve(chart_type)
    resolved_type = coerce_chart_type(chart_type) or spec.chart_type
    skeleton = spec.build(structure, features)

    return ChartConfig(
        type=resolved_type,
        title=title if title is not None else DEFAULT_CHART_TITLE,
        data_source=data_source,
        x_axis=skeleton.x_axis,
        y_axis=skeleton.y_axis,
        series=skeleton.series,
        legend=skeleton.legend,
        extra_styles=dict(skeleton.extra_styles),
    )


def optimize_chart_config(
    config: ChartConfig,
    structure: DataStructureInfo,
    features: DataFeatures,
    *,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> ChartConfig:
    """Apply data-driven refinements to a ChartConfig.

    Applying the pass twice yields the same config as applying it once.

    Args:
        config: Config to refine (not mutated).
        structure: Structure of the payload.
        features: Features of the payload.
        registry: Chart-type registry used for dispatch.

    Returns:
        A new ChartConfig.
    """

    spec = registry.resolve(config.type)

    x_axis = config.x_axis
    y_axis = config.y_axis
    if spec.uses_axes:
        if x_axis is not None and features.is_time_series:
            x_axis = replace(x_axis, type="time")
        if y_axis is not None and features.has_outliers:
            y_axis = _clamp_value_axis(y_axis, structure, features)

    series = tuple(_optimize_series(item, config.type, structure, features) for item in config.series)

    interaction = config.interaction or InteractionConfig()
    if interaction.tooltip is None:
        interaction = replace(
            interaction,
            tooltip={
                "trigger": "item" if config.type == ChartType.PIE else "axis",
                "formatter": spec.tooltip_formatter,
            },
        )
    if (
        interaction.data_zoom is None
        and config.type == ChartType.LINE
        and features.is_time_series
        and features.has_trend
    ):
        interaction = replace(interaction, data_zoom={"show": True, "type": "slider", "start": 0, "end": 100})

    return replace(
        config,
        x_axis=x_axis,
        y_axis=y_axis,
        series=series,
        interaction=interaction,
        toolbox=config.toolbox or ToolboxConfig(),
    )


def _bound_stats(axis: AxisConfig, structure: DataStructureInfo, features: DataFeatures) -> MetricStats | None:
    stats = features.metric_statistics.get(axis.name)
    if stats is not None:
        return stats
    if structure.metric_fields:
        return features.metric_statistics.get(structure.metric_fields[0])
    return None


def _clamp_value_axis(axis: AxisConfig, structure: DataStructureInfo, features: DataFeatures) -> AxisConfig:
    """Narrow a value axis around mean ± 2.5σ when outliers stretch it substantially."""

    if axis.type not in ("value", "log"):
        return axis
    stats = _bound_stats(axis, structure, features)
    if stats is None:
        return axis

    new_min = max(stats.min, stats.average - OUTLIER_CLAMP_SIGMA * stats.std_dev)
    new_max = min(stats.max, stats.average + OUTLIER_CLAMP_SIGMA * stats.std_dev)
    if not (new_min > CLAMP_MIN_GATE * stats.min or new_max < CLAMP_MAX_GATE * stats.max):
        return axis

    logger.debug("Clamping value axis %r to [%s, %s].", axis.name, new_min, new_max)
    extra_options = dict(axis.extra_options)
    extra_options["min"] = new_min
    extra_options["max"] = new_max
    return replace(axis, extra_options=extra_options)


def _optimize_series(
    series: SeriesConfig,
    chart_type: ChartType,
    structure: DataStructureInfo,
    features: DataFeatures,
) -> SeriesConfig:
    extra_options: dict[str, Any] = dict(series.extra_options)
    if series.type == "line" and features.is_time_series and features.has_trend:
        extra_options["smooth"] = True
    if series.type == "bar" and structure.row_count > BAR_WIDTH_ROW_THRESHOLD:
        extra_options["barWidth"] = NARROW_BAR_WIDTH
    if chart_type == ChartType.PIE or series.type == "pie":
        extra_options["radius"] = PIE_RADIUS
        extra_options["center"] = list(PIE_CENTER)
    if extra_options == series.extra_options:
        return series
    return replace(series, extra_options=extra_options)
