"""Radar charts: a few metrics compared across a few rows."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, Final

from analysis.dto import DataCorrelation, DataFeatures, DataStructureInfo
from analysis.values import display_label

from ..schema import ChartConfig, ChartType, SeriesConfig
from .base import (
    UNKNOWN_CATEGORY,
    ChartSkeleton,
    ChartTypeSpec,
    OptionDocument,
    Records,
    TranscodeContext,
    as_float,
    clamp_score,
    option_series,
)

RADAR_SERIES_NAME: Final[str] = "Data analysis"
RADAR_HEADROOM: Final[float] = 1.2
# Tunable: used when a metric never exceeds zero.
RADAR_FALLBACK_INDICATOR_MAX: Final[int] = 100
RADAR_ANONYMOUS_ITEMS: Final[int] = 5


def score_radar(
    structure: DataStructureInfo, features: DataFeatures, correlations: Sequence[DataCorrelation] = ()
) -> float:
    """Score radar charts: 3-7 metrics over a few rows."""

    score = 0.3
    if 3 <= len(structure.metric_fields) <= 7:
        score += 0.4
    if structure.row_count <= 7:
        score += 0.2
    if features.is_categorical:
        score += 0.1
    return clamp_score(score)


def build_radar(structure: DataStructureInfo, features: DataFeatures) -> ChartSkeleton:
    """Build a radar skeleton; indicators are resolved at transcode time."""

    return ChartSkeleton(series=(SeriesConfig(name=RADAR_SERIES_NAME, type="radar"),))


def indicator_max(records: Records, field_name: str) -> int:
    """Return ceil(observed max × 1.2), or the fallback when the max is not positive."""

    observed = 0.0
    for record in records:
        value = as_float(record.get(field_name))
        if value is not None and value > observed:
            observed = value
    if observed <= 0:
        return RADAR_FALLBACK_INDICATOR_MAX
    return math.ceil(observed * RADAR_HEADROOM)


def transcode_radar(config: ChartConfig, option: OptionDocument, context: TranscodeContext) -> None:
    """Fill radar indicators and one value vector per row."""

    structure = context.structure
    metric_fields = structure.metric_fields
    option["radar"] = {
        "indicator": [{"name": name, "max": indicator_max(context.records, name)} for name in metric_fields]
    }

    items: list[dict[str, Any]] = []
    if structure.dimension_fields:
        name_field = structure.dimension_fields[0]
        rows = list(context.records)
        names = [
            UNKNOWN_CATEGORY if record.get(name_field) is None else display_label(record.get(name_field))
            for record in rows
        ]
    else:
        rows = list(context.records[:RADAR_ANONYMOUS_ITEMS])
        names = [f"Item {index + 1}" for index in range(len(rows))]

    for name, record in zip(names, rows):
        values = [as_float(record.get(field_name)) for field_name in metric_fields]
        items.append({"name": name, "value": [0.0 if value is None else value for value in values]})

    for _, rendered in option_series(option, config):
        rendered["data"] = [dict(item, value=list(item["value"])) for item in items]

    if "legend" in option:
        option["legend"]["data"] = names


RADAR = ChartTypeSpec(
    chart_type=ChartType.RADAR,
    label="Radar chart",
    uses_axes=False,
    series_type="radar",
    tooltip_trigger="axis",
    tooltip_formatter="",
    score=score_radar,
    build=build_radar,
    transcode=transcode_radar,
)
