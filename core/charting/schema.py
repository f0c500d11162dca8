"""Schema types for abstract chart configuration.

A `ChartConfig` is the renderer-agnostic description of a chart produced by the
synthesizer. The render layer turns it (plus raw data) into the option document
consumed by the browser charting library. All types are immutable; optimization
passes return new instances via `dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal


class ChartType(StrEnum):
    """Closed set of chart types understood by the pipeline."""

    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"
    RADAR = "radar"
    HEATMAP = "heatmap"
    GAUGE = "gauge"
    FUNNEL = "funnel"
    SANKEY = "sankey"
    TREE = "tree"
    GRAPH = "graph"


AxisType = Literal["category", "value", "time", "log"]

DataSourceType = Literal["api", "static", "current"]

DEFAULT_TOOLBOX_FEATURES: tuple[str, ...] = ("saveAsImage", "dataView", "restore", "dataZoom", "magicType")


@dataclass(frozen=True, slots=True)
class AxisConfig:
    """One cartesian axis.

    Args:
        type: Axis scale type.
        name: Axis title; for synthesized configs this is the bound field name.
        show: Whether the axis is visible.
        data: Category labels (category axes only; usually filled at render time).
        axis_line: Optional renderer `axisLine` block.
        axis_label: Optional renderer `axisLabel` block.
        extra_options: Renderer passthrough merged last (e.g. `min`/`max`).
    """

    type: AxisType = "category"
    name: str = ""
    show: bool = True
    data: tuple[str, ...] | None = None
    axis_line: dict[str, Any] | None = None
    axis_label: dict[str, Any] | None = None
    extra_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SeriesConfig:
    """One data series skeleton.

    Args:
        name: Series display name; for synthesized configs the bound metric field.
        type: Renderer series type (`bar`, `line`, `pie`, ...).
        label: Renderer `label` block.
        item_style: Renderer `itemStyle` block.
        emphasis: Renderer `emphasis` block.
        encode: Explicit field → axis role override (`{"x": "month", "y": "sales"}`).
        stack: Optional stack group name.
        extra_options: Renderer passthrough merged last (e.g. `smooth`, `barWidth`).
    """

    name: str = ""
    type: str = "line"
    label: dict[str, Any] = field(default_factory=dict)
    item_style: dict[str, Any] = field(default_factory=dict)
    emphasis: dict[str, Any] = field(default_factory=dict)
    encode: dict[str, str] | None = None
    stack: str | None = None
    extra_options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LegendConfig:
    """Legend placement."""

    show: bool = True
    orient: Literal["horizontal", "vertical"] = "horizontal"
    position: str | None = None
    data: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class ToolboxConfig:
    """Toolbox visibility and enabled features."""

    show: bool = True
    orient: Literal["horizontal", "vertical"] = "horizontal"
    features: dict[str, bool] = field(default_factory=lambda: {name: True for name in DEFAULT_TOOLBOX_FEATURES})


@dataclass(frozen=True, slots=True)
class InteractionConfig:
    """Tooltip, zoom and cross-chart interaction settings."""

    draggable: bool = False
    tooltip: dict[str, Any] | None = None
    data_zoom: dict[str, Any] | None = None
    linked_charts: tuple[str, ...] = ()
    events: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ChartDataSource:
    """Opaque description of where chart data comes from.

    The pipeline never resolves a data source itself; a `DataProvider` (see
    `core.charting.ports`) does.

    Args:
        type: `static` (inline payload), `api` (remote fetch) or `current`
            (the caller's context object).
        api_url: Remote URL for `api` sources.
        method: HTTP method for `api` sources.
        parameters: Request parameters for `api` sources.
        static_data: Inline payload for `static`/`current` sources.
    """

    type: DataSourceType = "static"
    api_url: str | None = None
    method: str = "GET"
    parameters: dict[str, Any] = field(default_factory=dict)
    static_data: Any = None


@dataclass(frozen=True, slots=True)
class ChartConfig:
    """Abstract chart definition produced by the synthesizer.

    Args:
        type: Chart type.
        title: Chart title.
        subtitle: Optional subtitle.
        id: Durable id assigned by a ConfigStore; never required by the pipeline.
        sub_type: Optional chart sub-type hint.
        theme: Renderer theme name.
        auto_refresh: Whether the host should refresh the chart periodically.
        refresh_interval: Refresh interval in seconds.
        data_source: Where the data comes from (opaque to the pipeline).
        x_axis: X axis; None for axis-less types (Pie, Radar).
        y_axis: Y axis; None for axis-less types (Pie, Radar).
        series: Series skeletons (at least one after synthesis).
        legend: Optional legend block.
        toolbox: Optional toolbox block.
        interaction: Optional tooltip/zoom block.
        extra_styles: Top-level renderer passthrough (`visualMap`, `color`, ...).
    """

    type: ChartType = ChartType.BAR
    title: str = ""
    subtitle: str = ""
    id: str | None = None
    sub_type: str | None = None
    theme: str = "default"
    auto_refresh: bool = False
    refresh_interval: int = 60
    data_source: ChartDataSource | None = None
    x_axis: AxisConfig | None = None
    y_axis: AxisConfig | None = None
    series: tuple[SeriesConfig, ...] = ()
    legend: LegendConfig | None = None
    toolbox: ToolboxConfig | None = None
    interaction: InteractionConfig | None = None
    extra_styles: dict[str, Any] = field(default_factory=dict)


def coerce_chart_type(value: object) -> ChartType | None:
    """Return the ChartType for a value (case-insensitive), or None when unknown."""

    if isinstance(value, ChartType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ChartType(value.strip().lower())
    except ValueError:
        return None
