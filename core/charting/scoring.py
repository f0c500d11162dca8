"""Heuristic chart-type scoring.

Scores are pure functions of structure, features and correlations. Every
registered chart type contributes a score in [0, 1]; the recommendation is the
arg max with bar preferred on ties.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from analysis.dto import DataCorrelation, DataFeatures, DataStructureInfo

from .schema import ChartType
from .type_registry import DEFAULT_REGISTRY, ChartTypeRegistry

logger = logging.getLogger(__name__)

DEFAULT_CHART_TYPE = ChartType.BAR


def score_chart_types(
    structure: DataStructureInfo,
    features: DataFeatures,
    correlations: Sequence[DataCorrelation] = (),
    *,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> dict[ChartType, float]:
    """Score every registered chart type.

    Args:
        structure: Structure of the payload.
        features: Features of the payload.
        correlations: Metric correlations (feeds the scatter bonus).
        registry: Chart-type registry to score.

    Returns:
        Mapping of chart type → score in registry order.
    """

    return {spec.chart_type: spec.score(structure, features, correlations) for spec in registry.list()}


def recommend_chart_type(
    structure: DataStructureInfo,
    features: DataFeatures,
    correlations: Sequence[DataCorrelation] = (),
    *,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> ChartType:
    """Return the best-scoring chart type.

    Any tie at the top score yields bar, as does an empty structure.
    """

    if structure.is_empty:
        return DEFAULT_CHART_TYPE

    scores = score_chart_types(structure, features, correlations, registry=registry)
    if not scores:
        return DEFAULT_CHART_TYPE

    best = max(scores.values())
    tied = [chart_type for chart_type, score in scores.items() if score == best]
    if len(tied) > 1:
        logger.debug("Top score %.2f shared by %s; defaulting to bar.", best, [item.value for item in tied])
        return DEFAULT_CHART_TYPE
    return tied[0]


def top_chart_types(
    structure: DataStructureInfo,
    features: DataFeatures,
    correlations: Sequence[DataCorrelation] = (),
    *,
    max_count: int = 3,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> list[tuple[ChartType, float]]:
    """Return the top `max_count` (chart type, score) pairs, highest first.

    Ties keep registry order.
    """

    if max_count <= 0:
        return []
    scores = score_chart_types(structure, features, correlations, registry=registry)
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return ranked[:max_count]
