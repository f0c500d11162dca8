"""DTO types returned by the data analysis layer.

DTOs are plain data containers used to transport analysis results to the chart
layer. They intentionally avoid any Django dependencies and are created fresh
for every analysis call.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Final, Literal

from .values import SemanticType

CorrelationStrength = Literal["very-weak", "weak", "moderate", "strong", "very-strong"]

OUTLIER_SIGMA: Final[float] = 3.0


@dataclass(frozen=True, slots=True)
class MetricStats:
    """Summary statistics for one metric field.

    Attributes:
        min: Smallest observed value.
        max: Largest observed value.
        average: Arithmetic mean.
        median: Sorted midpoint (average of the two middle values for even counts).
        std_dev: Population standard deviation.
    """

    min: float = 0.0
    max: float = 0.0
    average: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0

    @property
    def has_outliers(self) -> bool:
        """Return True when min or max falls outside mean ± 3σ."""

        lower = self.average - OUTLIER_SIGMA * self.std_dev
        upper = self.average + OUTLIER_SIGMA * self.std_dev
        return self.min < lower or self.max > upper


@dataclass(frozen=True, slots=True)
class DataStructureInfo:
    """Structural roles of the fields in a record set.

    Attributes:
        row_count: Number of rows in the located record set.
        dimension_fields: Grouping/label fields in first-record key order.
        metric_fields: Numeric fields in first-record key order.
        field_types: Semantic type per field (keys = dimension ∪ metric fields).
        field_samples: First non-null value seen per field within the sample window.
    """

    row_count: int = 0
    dimension_fields: tuple[str, ...] = ()
    metric_fields: tuple[str, ...] = ()
    field_types: dict[str, SemanticType] = field(default_factory=dict)
    field_samples: dict[str, object | None] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Return True when no fields were discovered."""

        return not self.field_types


@dataclass(frozen=True, slots=True)
class DataFeatures:
    """Statistical and temporal features of a record set.

    Attributes:
        is_time_series: A dimension field holds date/time values in leading rows.
        has_trend: A metric shows a linear trend (time series only).
        has_seasonality: Reserved; always False.
        is_categorical: At least one dimension field is string-typed.
        is_continuous: At least one metric field exists.
        has_outliers: At least one metric has values beyond mean ± 3σ.
        metric_statistics: Per-metric summary statistics.
    """

    is_time_series: bool = False
    has_trend: bool = False
    has_seasonality: bool = False
    is_categorical: bool = False
    is_continuous: bool = False
    has_outliers: bool = False
    metric_statistics: dict[str, MetricStats] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DataCorrelation:
    """Pearson correlation between two metric fields."""

    field1: str
    field2: str
    coefficient: float
    strength: CorrelationStrength


@dataclass(frozen=True, slots=True)
class DataPattern:
    """A named pattern derived from data features.

    Attributes:
        type: Stable tag ("TimeTrend", "CategoryDistribution", "Outliers", "StrongCorrelation").
        description: Human-readable description.
        confidence: Heuristic confidence in [0, 1].
        related_fields: Fields the pattern refers to.
    """

    type: str
    description: str
    confidence: float
    related_fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DataProfile:
    """Everything the chart layer needs to know about one payload."""

    structure: DataStructureInfo
    features: DataFeatures
    correlations: tuple[DataCorrelation, ...] = ()
    patterns: tuple[DataPattern, ...] = ()
