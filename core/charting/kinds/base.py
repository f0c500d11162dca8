"""Shared types for per-chart-type behavior.

Each chart type bundles three behaviors in one `ChartTypeSpec`: a heuristic
score, a skeleton builder used by the synthesizer, and a transcoder that fills
a rendered option document with data. Keeping the three together means adding a
chart type is a single module plus one registry entry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, Literal

from analysis.dto import DataCorrelation, DataFeatures, DataStructureInfo
from analysis.values import display_label, is_numeric

from ..axis_data import validate_axis_data
from ..schema import AxisConfig, ChartConfig, ChartType, LegendConfig, SeriesConfig

logger = logging.getLogger(__name__)

PLACEHOLDER_SERIES_NAME: Final[str] = "value"
UNKNOWN_CATEGORY: Final[str] = "Unknown"

Records = Sequence[Mapping[str, object]]
OptionDocument = dict[str, Any]


@dataclass(frozen=True, slots=True)
class ChartSkeleton:
    """Type-specific parts of a synthesized ChartConfig."""

    series: tuple[SeriesConfig, ...]
    x_axis: AxisConfig | None = None
    y_axis: AxisConfig | None = None
    legend: LegendConfig | None = None
    extra_styles: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TranscodeContext:
    """Data available to a transcoder.

    Args:
        records: Located record rows.
        structure: Structure recovered from the same rows.
        features: Features recovered from the same rows.
    """

    records: Records
    structure: DataStructureInfo
    features: DataFeatures


ScoreFn = Callable[[DataStructureInfo, DataFeatures, Sequence[DataCorrelation]], float]
BuildFn = Callable[[DataStructureInfo, DataFeatures], ChartSkeleton]
TranscodeFn = Callable[[ChartConfig, OptionDocument, TranscodeContext], None]


@dataclass(frozen=True, slots=True)
class ChartTypeSpec:
    """Describe how the pipeline handles one chart type.

    Args:
        chart_type: Chart type handled by this spec.
        label: Human-friendly label.
        uses_axes: Whether configs of this type carry x/y axes.
        series_type: Renderer series type emitted for synthesized series.
        tooltip_trigger: Default tooltip trigger.
        tooltip_formatter: Default tooltip formatter ("" for the renderer default).
        score: Heuristic suitability score in [0, 1].
        build: Skeleton builder used by the synthesizer.
        transcode: Fills series/axis data into a rendered option document.
    """

    chart_type: ChartType
    label: str
    uses_axes: bool
    series_type: str
    tooltip_trigger: Literal["item", "axis"]
    tooltip_formatter: str
    score: ScoreFn
    build: BuildFn
    transcode: TranscodeFn


def clamp_score(score: float) -> float:
    """Clamp a heuristic score to [0, 1]."""

    return max(0.0, min(1.0, score))


def as_float(value: object) -> float | None:
    """Return a float for numeric values, otherwise None."""

    if is_numeric(value):
        return float(value)  # type: ignore[arg-type]
    return None


def encoded_field(config: ChartConfig, role: str) -> str | None:
    """Return the first series' explicit encode binding for a role."""

    if not config.series:
        return None
    encode = config.series[0].encode or {}
    name = encode.get(role)
    return name or None


def series_metric_field(series: SeriesConfig, index: int, structure: DataStructureInfo) -> str | None:
    """Resolve the metric field feeding a series.

    Resolution order: explicit `encode["y"]`, a series name that is a metric
    field, then the metric field at the same position.
    """

    encode = series.encode or {}
    if encode.get("y"):
        return encode["y"]
    if series.name in structure.metric_fields:
        return series.name
    if index < len(structure.metric_fields):
        return structure.metric_fields[index]
    return None


def warn_axis_data(axis_label: str, axis_type: str, values: Sequence[object]) -> None:
    """Log a warning when values do not fit the axis type."""

    result = validate_axis_data(axis_type, values)
    if not result.is_valid:
        logger.warning("Axis data mismatch on %s: %s", axis_label, result.message)


def category_labels(records: Records, field_name: str) -> list[str]:
    """Return per-row labels for a category axis."""

    return [display_label(record.get(field_name)) for record in records]


def distinct_labels(records: Records, field_name: str) -> list[str]:
    """Return distinct non-null labels in order of first appearance."""

    seen: dict[str, None] = {}
    for record in records:
        value = record.get(field_name)
        if value is None:
            continue
        seen.setdefault(display_label(value), None)
    return list(seen)


def option_series(option: OptionDocument, config: ChartConfig) -> list[tuple[SeriesConfig, dict[str, Any]]]:
    """Pair config series with their rendered counterparts."""

    rendered = option.get("series") or []
    return list(zip(config.series, rendered))
