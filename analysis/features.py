"""Feature extraction for chart recommendation.

Features are computed from the located record set and the structure reported
by `analysis.shape`. Extraction never raises on data problems: malformed input
degrades to zero-valued results and a logged warning.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Final

from .aggregations import (
    compute_metric_stats,
    describe_correlation_strength,
    extract_numeric_values,
    linear_regression_slope,
    pearson_correlation,
)
from .dto import DataCorrelation, DataFeatures, DataPattern, DataStructureInfo, MetricStats
from .shape import analyze_structure
from .values import find_records, parse_datetime_value

logger = logging.getLogger(__name__)

Records = Sequence[Mapping[str, object]]

TIME_SERIES_SAMPLE_ROWS: Final[int] = 5
TIME_SERIES_MIN_ROWS: Final[int] = 2
TREND_MIN_VALUES: Final[int] = 5
TREND_SLOPE_FACTOR: Final[float] = 0.05
STRONG_CORRELATION_THRESHOLD: Final[float] = 0.7


def extract_features(data: object, structure: DataStructureInfo | None = None) -> DataFeatures:
    """Extract statistical and temporal features from a payload.

    Args:
        data: Raw payload (see `analysis.shape.analyze_structure`).
        structure: Structure previously computed for the same payload; analyzed
            on demand when omitted.

    Returns:
        DataFeatures; zero-valued when the payload cannot be analyzed.
    """

    try:
        if structure is None:
            structure = analyze_structure(data)
        return features_from_records(find_records(data), structure)
    except (TypeError, ValueError, ArithmeticError, RecursionError):
        logger.warning("Feature extraction failed; returning empty features.", exc_info=True)
        return DataFeatures()


def detect_correlations(data: object, structure: DataStructureInfo | None = None) -> list[DataCorrelation]:
    """Compute pairwise Pearson correlations between metric fields.

    Returns:
        Correlations sorted by descending |coefficient| (stable for ties).
    """

    try:
        if structure is None:
            structure = analyze_structure(data)
        return correlations_from_records(find_records(data), structure)
    except (TypeError, ValueError, ArithmeticError, RecursionError):
        logger.warning("Correlation detection failed; returning no correlations.", exc_info=True)
        return []


def identify_patterns(
    data: object,
    structure: DataStructureInfo | None = None,
    *,
    features: DataFeatures | None = None,
    correlations: Sequence[DataCorrelation] | None = None,
) -> list[DataPattern]:
    """Derive named patterns from the features of a payload.

    Args:
        data: Raw payload.
        structure: Optional precomputed structure.
        features: Optional precomputed features.
        correlations: Optional precomputed correlations.

    Returns:
        Patterns in a fixed order: TimeTrend, CategoryDistribution, Outliers,
        StrongCorrelation (each present only when it applies).
    """

    try:
        if structure is None:
            structure = analyze_structure(data)
        if features is None or correlations is None:
            records = find_records(data)
            if features is None:
                features = features_from_records(records, structure)
            if correlations is None:
                correlations = correlations_from_records(records, structure)
        return patterns_from_features(structure, features, correlations)
    except (TypeError, ValueError, ArithmeticError, RecursionError):
        logger.warning("Pattern identification failed; returning no patterns.", exc_info=True)
        return []


def features_from_records(records: Records, structure: DataStructureInfo) -> DataFeatures:
    """Compute DataFeatures from located records."""

    if not records:
        return DataFeatures()

    metric_statistics: dict[str, MetricStats] = {}
    metric_values: dict[str, list[float]] = {}
    for metric_field in structure.metric_fields:
        values = extract_numeric_values(records, metric_field)
        metric_values[metric_field] = values
        if values:
            metric_statistics[metric_field] = compute_metric_stats(values)

    is_time_series = detect_time_series(records, structure.dimension_fields)
    has_trend = is_time_series and len(records) >= TREND_MIN_VALUES and any(
        has_linear_trend(values) for values in metric_values.values()
    )
    is_categorical = any(structure.field_types.get(name) == "string" for name in structure.dimension_fields)

    return DataFeatures(
        is_time_series=is_time_series,
        has_trend=has_trend,
        has_seasonality=False,
        is_categorical=is_categorical,
        is_continuous=bool(structure.metric_fields),
        has_outliers=any(stats.has_outliers for stats in metric_statistics.values()),
        metric_statistics=metric_statistics,
    )


def detect_time_series(records: Records, dimension_fields: Sequence[str]) -> bool:
    """Return True when a dimension field parses as date/time across leading rows.

    Every one of the first five rows must carry a parseable value for the field;
    a missing or null value disqualifies it. Fewer than two rows never count as a
    time series.
    """

    if len(records) < TIME_SERIES_MIN_ROWS:
        return False

    window = records[:TIME_SERIES_SAMPLE_ROWS]
    for field_name in dimension_fields:
        if all(parse_datetime_value(record.get(field_name)) is not None for record in window):
            return True
    return False


def has_linear_trend(values: Sequence[float]) -> bool:
    """Return True when |slope| exceeds 0.05 × (max − min) / n."""

    n = len(values)
    if n < TREND_MIN_VALUES:
        return False
    slope = linear_regression_slope(values)
    return abs(slope) > TREND_SLOPE_FACTOR * (max(values) - min(values)) / n


def correlations_from_records(records: Records, structure: DataStructureInfo) -> list[DataCorrelation]:
    """Compute sorted pairwise correlations from located records."""

    metric_fields = structure.metric_fields
    if len(metric_fields) < 2 or not records:
        return []

    vectors = {name: extract_numeric_values(records, name) for name in metric_fields}
    correlations: list[DataCorrelation] = []
    for i, field1 in enumerate(metric_fields):
        for field2 in metric_fields[i + 1 :]:
            values1 = vectors[field1]
            values2 = vectors[field2]
            if not values1 or len(values1) != len(values2):
                continue
            coefficient = pearson_correlation(values1, values2)
            correlations.append(
                DataCorrelation(
                    field1=field1,
                    field2=field2,
                    coefficient=coefficient,
                    strength=describe_correlation_strength(coefficient),
                )
            )

    return sorted(correlations, key=lambda c: abs(c.coefficient), reverse=True)


def patterns_from_features(
    structure: DataStructureInfo,
    features: DataFeatures,
    correlations: Sequence[DataCorrelation],
) -> list[DataPattern]:
    """Derive patterns declaratively from structure, features and correlations."""

    patterns: list[DataPattern] = []

    if features.is_time_series and features.has_trend:
        patterns.append(
            DataPattern(
                type="TimeTrend",
                description="The data shows a clear trend over time.",
                confidence=0.8,
                related_fields=structure.dimension_fields + structure.metric_fields,
            )
        )

    if features.is_categorical and structure.dimension_fields:
        patterns.append(
            DataPattern(
                type="CategoryDistribution",
                description="The data is distributed across categories.",
                confidence=0.75,
                related_fields=structure.dimension_fields,
            )
        )

    outlier_fields = tuple(name for name, stats in features.metric_statistics.items() if stats.has_outliers)
    if outlier_fields:
        patterns.append(
            DataPattern(
                type="Outliers",
                description="Some metric values lie far outside the typical range.",
                confidence=0.7,
                related_fields=outlier_fields,
            )
        )

    strong_fields: list[str] = []
    for correlation in correlations:
        if abs(correlation.coefficient) <= STRONG_CORRELATION_THRESHOLD:
            continue
        for name in (correlation.field1, correlation.field2):
            if name not in strong_fields:
                strong_fields.append(name)
    if strong_fields:
        patterns.append(
            DataPattern(
                type="StrongCorrelation",
                description="Some metric fields are strongly correlated.",
                confidence=0.85,
                related_fields=tuple(strong_fields),
            )
        )

    return patterns
