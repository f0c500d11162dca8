"""Statistical helpers for the data analysis layer.

This module provides deterministic numeric routines (summary statistics, least
squares slope, Pearson correlation) used by feature extraction without
introducing Django dependencies.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence

from .dto import CorrelationStrength, MetricStats
from .values import is_numeric


def extract_numeric_values(records: Iterable[Mapping[str, object]], field_name: str) -> list[float]:
    """Collect the numeric values of a field across records.

    Args:
        records: Mapping rows.
        field_name: Field to read.

    Returns:
        Values as floats in row order. Missing, null and non-numeric values are skipped.
    """

    values: list[float] = []
    for record in records:
        value = record.get(field_name)
        if is_numeric(value):
            values.append(float(value))  # type: ignore[arg-type]
    return values


def compute_metric_stats(values: Sequence[float]) -> MetricStats:
    """Compute min/max/mean/median/population standard deviation.

    Args:
        values: Numeric values.

    Returns:
        MetricStats; all zeros when `values` is empty.
    """

    if not values:
        return MetricStats()

    count = len(values)
    average = sum(values) / count
    ordered = sorted(values)
    mid = count // 2
    if count % 2 == 0:
        median = (ordered[mid - 1] + ordered[mid]) / 2
    else:
        median = ordered[mid]
    variance = sum((value - average) ** 2 for value in values) / count
    return MetricStats(
        min=ordered[0],
        max=ordered[-1],
        average=average,
        median=median,
        std_dev=math.sqrt(variance),
    )


def linear_regression_slope(values: Sequence[float]) -> float:
    """Return the ordinary least squares slope of index → value.

    Args:
        values: Values ordered by row index.

    Returns:
        The fitted slope, or 0.0 when fewer than two values exist.
    """

    n = len(values)
    if n < 2:
        return 0.0

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for idx, value in enumerate(values):
        sum_x += idx
        sum_y += value
        sum_xy += idx * value
        sum_x2 += idx * idx

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return 0.0
    return (n * sum_xy - sum_x * sum_y) / denominator


def pearson_correlation(values1: Sequence[float], values2: Sequence[float]) -> float:
    """Return the Pearson correlation coefficient of two equal-length vectors.

    Returns 0.0 for empty or mismatched inputs, and when either vector is constant.
    """

    if len(values1) != len(values2) or not values1:
        return 0.0

    mean1 = sum(values1) / len(values1)
    mean2 = sum(values2) / len(values2)

    covariance = 0.0
    spread1 = 0.0
    spread2 = 0.0
    for a, b in zip(values1, values2):
        diff1 = a - mean1
        diff2 = b - mean2
        covariance += diff1 * diff2
        spread1 += diff1 * diff1
        spread2 += diff2 * diff2

    if spread1 == 0 or spread2 == 0:
        return 0.0

    coefficient = covariance / math.sqrt(spread1 * spread2)
    return max(-1.0, min(1.0, coefficient))


def describe_correlation_strength(coefficient: float) -> CorrelationStrength:
    """Bucket |coefficient| using the 0.2/0.4/0.6/0.8 thresholds."""

    magnitude = abs(coefficient)
    if magnitude >= 0.8:
        return "very-strong"
    if magnitude >= 0.6:
        return "strong"
    if magnitude >= 0.4:
        return "moderate"
    if magnitude >= 0.2:
        return "weak"
    return "very-weak"
