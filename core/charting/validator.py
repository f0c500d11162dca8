"""Validation for ChartConfig definitions and axis data.

Configs that reach the API from callers are treated as user-editable input, so
structural validation is strict and fails fast. Axis-data validation, by
contrast, only reports: rendering continues with whatever data fits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import get_args

from .axis_data import AxisDataValidation, validate_axis_data
from .errors import ChartConfigurationError
from .schema import AxisConfig, AxisType, ChartConfig, ChartType, DataSourceType
from .type_registry import DEFAULT_REGISTRY, ChartTypeRegistry

__all__ = [
    "AxisDataValidation",
    "ValidationResult",
    "ensure_valid_chart_config",
    "validate_axis_data",
    "validate_chart_config",
]

_AXIS_TYPES: frozenset[str] = frozenset(get_args(AxisType))
_DATA_SOURCE_TYPES: frozenset[str] = frozenset(get_args(DataSourceType))


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart config."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart_config(config: ChartConfig, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    """Validate a single ChartConfig.

    Args:
        config: ChartConfig to validate.
        registry: Chart-type registry used to look up axis requirements.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []
    label = f"ChartConfig[{config.id or config.title or '?'}]"

    if not isinstance(config.type, ChartType):
        errors.append(f"{label}.type is not a supported value: {config.type!r}.")
        return ValidationResult(is_valid=False, errors=tuple(errors))

    spec = registry.get(config.type)
    if spec is None:
        spec = registry.fallback
        warnings.append(f"{label}.type={config.type.value!r} has no dedicated rendering; the bar layout is used.")

    if not config.series:
        errors.append(f"{label}.series must contain at least one entry.")
    for idx, series in enumerate(config.series):
        if not series.type.strip():
            errors.append(f"{label}.series[{idx}].type must be a non-empty string.")
        if series.encode is not None and not all(isinstance(v, str) and v for v in series.encode.values()):
            errors.append(f"{label}.series[{idx}].encode values must be non-empty field names.")

    if spec.uses_axes:
        if config.x_axis is None:
            errors.append(f"{label} requires an xAxis for chart type {config.type.value!r}.")
        if config.y_axis is None:
            errors.append(f"{label} requires a yAxis for chart type {config.type.value!r}.")
    elif config.x_axis is not None or config.y_axis is not None:
        errors.append(f"{label} chart type {config.type.value!r} does not use axes.")

    for axis_name, axis in (("xAxis", config.x_axis), ("yAxis", config.y_axis)):
        if axis is not None:
            _validate_axis(axis, label=f"{label}.{axis_name}", errors=errors, warnings=warnings)

    if config.auto_refresh and config.refresh_interval <= 0:
        errors.append(f"{label}.refresh_interval must be positive when auto_refresh is enabled.")

    source = config.data_source
    if source is not None:
        if source.type not in _DATA_SOURCE_TYPES:
            errors.append(f"{label}.data_source.type is not a supported value: {source.type!r}.")
        if source.type == "api" and not (source.api_url or "").strip():
            errors.append(f"{label}.data_source.api_url is required for api data sources.")

    if config.legend is not None and config.legend.orient not in ("horizontal", "vertical"):
        errors.append(f"{label}.legend.orient is not a supported value: {config.legend.orient!r}.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def ensure_valid_chart_config(
    config: ChartConfig, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY
) -> ValidationResult:
    """Validate a config and raise when it has errors.

    Returns:
        The ValidationResult (warnings only).

    Raises:
        ChartConfigurationError: When validation reports errors.
    """

    result = validate_chart_config(config, registry=registry)
    if not result.is_valid:
        raise ChartConfigurationError("; ".join(result.errors))
    return result


def _validate_axis(axis: AxisConfig, *, label: str, errors: list[str], warnings: list[str]) -> None:
    if axis.type not in _AXIS_TYPES:
        errors.append(f"{label}.type is not a supported value: {axis.type!r}.")
        return
    if axis.data is not None and axis.type != "category":
        warnings.append(f"{label}.data is ignored for {axis.type} axes.")
    if axis.data is not None:
        result = validate_axis_data(axis.type, axis.data)
        if not result.is_valid:
            warnings.append(f"{label}: {result.message}")
