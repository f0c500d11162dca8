"""Render ChartConfig objects into chart-library option documents.

`to_option_document` emits the shape of a chart without data. The complete
variant re-analyzes the payload and lets the chart type's transcoder populate
series and axis data.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from analysis.features import features_from_records
from analysis.shape import analyze_record_set
from analysis.values import coerce_json_value, locate_record_set

from .kinds import TranscodeContext
from .kinds.base import OptionDocument
from .schema import AxisConfig, ChartConfig, ChartType, SeriesConfig, ToolboxConfig
from .type_registry import DEFAULT_REGISTRY, ChartTypeRegistry

logger = logging.getLogger(__name__)


def to_option_document(config: ChartConfig, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY) -> OptionDocument:
    """Render the data-free option document for a config.

    Args:
        config: ChartConfig to render.
        registry: Chart-type registry used for dispatch.

    Returns:
        A fresh nested dict. `xAxis`/`yAxis` appear only for chart types that use
        axes; `radar` appears only for radar charts.
    """

    spec = registry.resolve(config.type)
    option: OptionDocument = {
        "title": {"text": config.title, "subtext": config.subtitle, "left": "center"},
    }

    if config.legend is not None:
        legend = config.legend
        option["legend"] = {
            "show": legend.show,
            "data": list(legend.data or ()),
            "orient": legend.orient,
            "left": legend.position or "center",
        }

    if config.toolbox is not None:
        option["toolbox"] = _render_toolbox(config.toolbox)

    interaction = config.interaction
    if interaction is not None and interaction.tooltip is not None:
        option["tooltip"] = dict(interaction.tooltip)
    else:
        option["tooltip"] = {"trigger": spec.tooltip_trigger, "formatter": spec.tooltip_formatter}

    if spec.uses_axes:
        option["xAxis"] = _render_axis(config.x_axis or AxisConfig(type="category"))
        option["yAxis"] = _render_axis(config.y_axis or AxisConfig(type="value"))
    elif spec.chart_type == ChartType.RADAR:
        option["radar"] = {"indicator": []}

    option["series"] = [_render_series(series, spec.series_type) for series in config.series]

    if interaction is not None and interaction.data_zoom is not None:
        option["dataZoom"] = [dict(interaction.data_zoom)]

    for key, value in config.extra_styles.items():
        option[key] = _copy_value(value)

    return option


def to_complete_option_document(
    config: ChartConfig, data: object, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY
) -> OptionDocument:
    """Render the option document and populate it with data.

    Args:
        config: ChartConfig to render.
        data: Raw payload (records, wrapper object, single record or JSON text).
        registry: Chart-type registry used for dispatch.

    Returns:
        Option document with series/axis data filled by the chart type's transcoder.
        Data problems are logged; a best-effort document is always returned.
    """

    option = to_option_document(config, registry=registry)
    spec = registry.resolve(config.type)
    spec.transcode(config, option, build_transcode_context(data))
    return option


def to_option_json(
    config: ChartConfig,
    data: object | None = None,
    *,
    indent: int | None = None,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> str:
    """Serialize the (complete, when data is given) option document to JSON."""

    if data is None:
        option = to_option_document(config, registry=registry)
    else:
        option = to_complete_option_document(config, data, registry=registry)
    return json.dumps(option, indent=indent, ensure_ascii=False, default=str)


def build_transcode_context(data: object) -> TranscodeContext:
    """Locate records and recover structure/features for transcoding."""

    record_set = locate_record_set(coerce_json_value(data))
    if record_set.source == "empty":
        logger.warning("No records found in chart data; rendering without data.")
    structure = analyze_record_set(record_set)
    features = features_from_records(record_set.records, structure)
    return TranscodeContext(records=record_set.records, structure=structure, features=features)


def _render_toolbox(toolbox: ToolboxConfig) -> dict[str, Any]:
    feature: dict[str, Any] = {}
    for name, enabled in toolbox.features.items():
        if not enabled:
            continue
        if name == "magicType":
            feature[name] = {"show": True, "type": ["line", "bar", "stack"]}
        else:
            feature[name] = {"show": True}
    return {"show": toolbox.show, "orient": toolbox.orient, "feature": feature}


def _render_axis(axis: AxisConfig) -> dict[str, Any]:
    rendered: dict[str, Any] = {"type": axis.type, "name": axis.name, "show": axis.show}
    if axis.type == "category":
        rendered["data"] = list(axis.data or ())
    if axis.axis_label is not None:
        rendered["axisLabel"] = dict(axis.axis_label)
    if axis.axis_line is not None:
        rendered["axisLine"] = dict(axis.axis_line)
    rendered.update(_copy_value(axis.extra_options))
    return rendered


def _render_series(series: SeriesConfig, default_type: str) -> dict[str, Any]:
    rendered: dict[str, Any] = {"name": series.name, "type": series.type or default_type}
    if series.label:
        rendered["label"] = _copy_value(series.label)
    if series.item_style:
        rendered["itemStyle"] = _copy_value(series.item_style)
    if series.emphasis:
        rendered["emphasis"] = _copy_value(series.emphasis)
    if series.encode:
        rendered["encode"] = dict(series.encode)
    if series.stack:
        rendered["stack"] = series.stack
    rendered.update(_copy_value(series.extra_options))
    rendered.setdefault("data", [])
    return rendered


def _copy_value(value: Any) -> Any:
    """Deep-copy JSON-like containers so documents never share state with configs."""

    if isinstance(value, dict):
        return {key: _copy_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_copy_value(item) for item in value]
    return value
