"""Snapshot encoding/decoding helpers for ChartConfig payloads.

Snapshots are the JSON-safe form of a ChartConfig. They are returned by the API,
accepted back by the render endpoint, and are what ConfigStore implementations
persist.
"""

from __future__ import annotations

from typing import Any, Final, cast, get_args

from .schema import (
    AxisConfig,
    AxisType,
    ChartConfig,
    ChartDataSource,
    DataSourceType,
    InteractionConfig,
    LegendConfig,
    SeriesConfig,
    ToolboxConfig,
    coerce_chart_type,
)

SNAPSHOT_VERSION: Final[str] = "chart_config_v1"


def encode_chart_config(config: ChartConfig) -> dict[str, Any]:
    """Encode a ChartConfig into a JSON-serializable dictionary.

    Args:
        config: ChartConfig to encode.

    Returns:
        Dict payload safe for JSON responses and storage.
    """

    payload: dict[str, Any] = {
        "version": SNAPSHOT_VERSION,
        "id": config.id,
        "type": config.type.value,
        "title": config.title,
        "subtitle": config.subtitle,
        "sub_type": config.sub_type,
        "theme": config.theme,
        "auto_refresh": config.auto_refresh,
        "refresh_interval": config.refresh_interval,
        "data_source": _encode_data_source(config.data_source),
        "x_axis": _encode_axis(config.x_axis),
        "y_axis": _encode_axis(config.y_axis),
        "series": [_encode_series(series) for series in config.series],
        "legend": None,
        "toolbox": None,
        "interaction": None,
        "extra_styles": dict(config.extra_styles),
    }
    if config.legend is not None:
        payload["legend"] = {
            "show": config.legend.show,
            "orient": config.legend.orient,
            "position": config.legend.position,
            "data": None if config.legend.data is None else list(config.legend.data),
        }
    if config.toolbox is not None:
        payload["toolbox"] = {
            "show": config.toolbox.show,
            "orient": config.toolbox.orient,
            "features": dict(config.toolbox.features),
        }
    if config.interaction is not None:
        payload["interaction"] = {
            "draggable": config.interaction.draggable,
            "tooltip": config.interaction.tooltip,
            "data_zoom": config.interaction.data_zoom,
            "linked_charts": list(config.interaction.linked_charts),
            "events": dict(config.interaction.events),
        }
    return payload


def decode_chart_config(payload: object) -> ChartConfig:
    """Decode a ChartConfig from a payload produced by `encode_chart_config`.

    Args:
        payload: Snapshot dictionary.

    Returns:
        ChartConfig instance.

    Raises:
        ValueError: When the payload is not an object, names an unknown chart
            type, or carries malformed nested blocks.
    """

    if not isinstance(payload, dict):
        raise ValueError("Chart config snapshot must be an object.")

    chart_type = coerce_chart_type(payload.get("type"))
    if chart_type is None:
        raise ValueError(f"Unknown chart type: {payload.get('type')!r}.")

    series_raw = payload.get("series") or []
    if not isinstance(series_raw, list):
        raise ValueError("Chart config snapshot 'series' must be a list.")

    legend_raw = _optional_dict(payload, "legend")
    toolbox_raw = _optional_dict(payload, "toolbox")
    interaction_raw = _optional_dict(payload, "interaction")

    return ChartConfig(
        type=chart_type,
        id=_optional_str(payload.get("id")),
        title=str(payload.get("title") or ""),
        subtitle=str(payload.get("subtitle") or ""),
        sub_type=_optional_str(payload.get("sub_type")),
        theme=str(payload.get("theme") or "default"),
        auto_refresh=_parse_bool(payload.get("auto_refresh")),
        refresh_interval=_parse_int(payload.get("refresh_interval"), default=60),
        data_source=_decode_data_source(_optional_dict(payload, "data_source")),
        x_axis=_decode_axis(_optional_dict(payload, "x_axis")),
        y_axis=_decode_axis(_optional_dict(payload, "y_axis")),
        series=tuple(_decode_series(item, idx) for idx, item in enumerate(series_raw)),
        legend=None
        if legend_raw is None
        else LegendConfig(
            show=_parse_bool(legend_raw.get("show", True)),
            orient="vertical" if legend_raw.get("orient") == "vertical" else "horizontal",
            position=_optional_str(legend_raw.get("position")),
            data=_optional_str_tuple(legend_raw.get("data")),
        ),
        toolbox=None
        if toolbox_raw is None
        else ToolboxConfig(
            show=_parse_bool(toolbox_raw.get("show", True)),
            orient="vertical" if toolbox_raw.get("orient") == "vertical" else "horizontal",
            features={str(k): _parse_bool(v) for k, v in _dict_value(toolbox_raw, "features").items()}
            or ToolboxConfig().features,
        ),
        interaction=None
        if interaction_raw is None
        else InteractionConfig(
            draggable=_parse_bool(interaction_raw.get("draggable")),
            tooltip=_optional_dict(interaction_raw, "tooltip"),
            data_zoom=_optional_dict(interaction_raw, "data_zoom"),
            linked_charts=_optional_str_tuple(interaction_raw.get("linked_charts")) or (),
            events={str(k): str(v) for k, v in _dict_value(interaction_raw, "events").items()},
        ),
        extra_styles=_dict_value(payload, "extra_styles"),
    )


def _encode_axis(axis: AxisConfig | None) -> dict[str, Any] | None:
    if axis is None:
        return None
    return {
        "type": axis.type,
        "name": axis.name,
        "show": axis.show,
        "data": None if axis.data is None else list(axis.data),
        "axis_line": axis.axis_line,
        "axis_label": axis.axis_label,
        "extra_options": dict(axis.extra_options),
    }


def _decode_axis(raw: dict[str, Any] | None) -> AxisConfig | None:
    if raw is None:
        return None
    axis_type = str(raw.get("type") or "category")
    if axis_type not in get_args(AxisType):
        raise ValueError(f"Unknown axis type: {axis_type!r}.")
    return AxisConfig(
        type=cast(AxisType, axis_type),
        name=str(raw.get("name") or ""),
        show=_parse_bool(raw.get("show", True)),
        data=_optional_str_tuple(raw.get("data")),
        axis_line=_optional_dict(raw, "axis_line"),
        axis_label=_optional_dict(raw, "axis_label"),
        extra_options=_dict_value(raw, "extra_options"),
    )


def _encode_series(series: SeriesConfig) -> dict[str, Any]:
    return {
        "name": series.name,
        "type": series.type,
        "label": dict(series.label),
        "item_style": dict(series.item_style),
        "emphasis": dict(series.emphasis),
        "encode": None if series.encode is None else dict(series.encode),
        "stack": series.stack,
        "extra_options": dict(series.extra_options),
    }


def _decode_series(raw: object, idx: int) -> SeriesConfig:
    if not isinstance(raw, dict):
        raise ValueError(f"Chart config snapshot series[{idx}] must be an object.")
    encode_raw = _optional_dict(raw, "encode")
    return SeriesConfig(
        name=str(raw.get("name") or ""),
        type=str(raw.get("type") or "line"),
        label=_dict_value(raw, "label"),
        item_style=_dict_value(raw, "item_style"),
        emphasis=_dict_value(raw, "emphasis"),
        encode=None if encode_raw is None else {str(k): str(v) for k, v in encode_raw.items()},
        stack=_optional_str(raw.get("stack")),
        extra_options=_dict_value(raw, "extra_options"),
    )


def _encode_data_source(source: ChartDataSource | None) -> dict[str, Any] | None:
    if source is None:
        return None
    return {
        "type": source.type,
        "api_url": source.api_url,
        "method": source.method,
        "parameters": dict(source.parameters),
        "static_data": source.static_data,
    }


def _decode_data_source(raw: dict[str, Any] | None) -> ChartDataSource | None:
    if raw is None:
        return None
    source_type = str(raw.get("type") or "static")
    if source_type not in get_args(DataSourceType):
        raise ValueError(f"Unknown data source type: {source_type!r}.")
    return ChartDataSource(
        type=cast(DataSourceType, source_type),
        api_url=_optional_str(raw.get("api_url")),
        method=str(raw.get("method") or "GET").upper(),
        parameters=_dict_value(raw, "parameters"),
        static_data=raw.get("static_data"),
    )


def _optional_dict(payload: dict[str, Any], key: str) -> dict[str, Any] | None:
    """Return a nested dict, None when absent, or raise for other types."""

    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"Chart config snapshot {key!r} must be an object.")
    return dict(value)


def _dict_value(payload: dict[str, Any], key: str) -> dict[str, Any]:
    return _optional_dict(payload, key) or {}


def _optional_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _optional_str_tuple(value: object) -> tuple[str, ...] | None:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValueError("Expected a list of strings.")
    return tuple(str(item) for item in value)


def _parse_int(value: object, *, default: int) -> int:
    """Best-effort int parsing for snapshot payloads."""

    if value is None or value == "":
        return default
    try:
        return int(str(value))
    except ValueError:
        return default


def _parse_bool(value: object) -> bool:
    """Best-effort bool parsing for snapshot payloads."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    normalized = str(value).strip().casefold()
    return normalized in {"1", "true", "yes", "on"}
