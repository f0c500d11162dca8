"""Pie charts: share of one metric across a handful of categories."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from analysis.dto import DataCorrelation, DataFeatures, DataStructureInfo
from analysis.values import display_label

from ..schema import ChartConfig, ChartType, LegendConfig, SeriesConfig
from .base import (
    PLACEHOLDER_SERIES_NAME,
    UNKNOWN_CATEGORY,
    ChartSkeleton,
    ChartTypeSpec,
    OptionDocument,
    TranscodeContext,
    as_float,
    clamp_score,
    encoded_field,
    option_series,
    series_metric_field,
)

logger = logging.getLogger(__name__)


def score_pie(
    structure: DataStructureInfo, features: DataFeatures, correlations: Sequence[DataCorrelation] = ()
) -> float:
    """Score pie charts: a single metric split over 3-10 categories."""

    row_count = structure.row_count
    score = 0.5
    if len(structure.metric_fields) == 1:
        score += 0.3
    if 3 <= row_count <= 10:
        score += 0.2
    if features.is_categorical:
        score += 0.2
    if features.is_time_series:
        score -= 0.3
    if row_count > 15:
        score -= 0.1 * (min(row_count, 30) - 15) / 15
    return clamp_score(score)


def build_pie(structure: DataStructureInfo, features: DataFeatures) -> ChartSkeleton:
    """Build a pie chart skeleton (no axes)."""

    value_field = structure.metric_fields[0] if structure.metric_fields else PLACEHOLDER_SERIES_NAME
    series = SeriesConfig(
        name=value_field,
        type="pie",
        label={"show": True, "formatter": "{b}: {c} ({d}%)"},
        item_style={"borderRadius": 8, "borderWidth": 2},
    )
    return ChartSkeleton(series=(series,), legend=LegendConfig(orient="vertical", position="right"))


def transcode_pie(config: ChartConfig, option: OptionDocument, context: TranscodeContext) -> None:
    """Fill `{name, value}` slices and the matching legend entries."""

    structure = context.structure
    category_field = encoded_field(config, "x")
    if category_field is None and structure.dimension_fields:
        category_field = structure.dimension_fields[0]

    names: list[str] = []
    for index, (series, rendered) in enumerate(option_series(option, config)):
        value_field = series_metric_field(series, index, structure)
        if not rendered.get("name") and value_field:
            rendered["name"] = value_field

        slices: list[dict[str, Any]] = []
        for record in context.records:
            raw_name = record.get(category_field) if category_field else None
            name = display_label(raw_name) if raw_name is not None else UNKNOWN_CATEGORY
            value = as_float(record.get(value_field)) if value_field else None
            if value is None:
                logger.warning("Pie slice %r has no numeric value; using 0.", name)
                value = 0.0
            slices.append({"name": name, "value": value})
        rendered["data"] = slices
        if index == 0:
            names = [item["name"] for item in slices]

    legend: dict[str, Any] = option.setdefault("legend", {"show": True})
    legend["data"] = names


PIE = ChartTypeSpec(
    chart_type=ChartType.PIE,
    label="Pie chart",
    uses_axes=False,
    series_type="pie",
    tooltip_trigger="item",
    tooltip_formatter="{a} <br/>{b} : {c} ({d}%)",
    score=score_pie,
    build=build_pie,
    transcode=transcode_pie,
)
