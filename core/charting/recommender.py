"""High-level entry points: payload in, recommendation or option document out.

These helpers wire the analysis layer, scorer, synthesizer and renderer into
the linear pipeline used by the API views and the management command. Data
problems never raise here: they degrade to a bar chart and are logged.
Configuration errors (`ChartConfigurationError`) still propagate.
"""

from __future__ import annotations

import logging
from typing import Final

from analysis.dto import DataProfile
from analysis.engine import empty_profile, profile_data

from .errors import ChartConfigurationError
from .kinds.base import OptionDocument
from .render import to_complete_option_document
from .schema import ChartConfig, ChartDataSource, ChartType
from .scoring import DEFAULT_CHART_TYPE, recommend_chart_type, top_chart_types
from .synthesis import optimize_chart_config, synthesize_chart_config
from .type_registry import DEFAULT_REGISTRY, ChartTypeRegistry

logger = logging.getLogger(__name__)

_RECOVERABLE_ERRORS: Final = (TypeError, ValueError, KeyError, IndexError, ArithmeticError, RecursionError)


def recommend_chart(data: object, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY) -> ChartType:
    """Return the recommended chart type for a payload (bar on failure)."""

    try:
        profile = profile_data(data)
        return recommend_chart_type(profile.structure, profile.features, profile.correlations, registry=registry)
    except ChartConfigurationError:
        raise
    except _RECOVERABLE_ERRORS:
        logger.warning("Chart recommendation failed; defaulting to %s.", DEFAULT_CHART_TYPE.value, exc_info=True)
        return DEFAULT_CHART_TYPE


def recommend_chart_types(
    data: object, max_count: int = 3, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY
) -> list[tuple[ChartType, float]]:
    """Return the top `max_count` (chart type, score) pairs for a payload."""

    try:
        profile = profile_data(data)
        return top_chart_types(
            profile.structure, profile.features, profile.correlations, max_count=max_count, registry=registry
        )
    except ChartConfigurationError:
        raise
    except _RECOVERABLE_ERRORS:
        logger.warning("Chart ranking failed; defaulting to %s.", DEFAULT_CHART_TYPE.value, exc_info=True)
        return [(DEFAULT_CHART_TYPE, 1.0)] if max_count > 0 else []


def generate_chart_config(
    data: object,
    preferred_type: ChartType | str | None = None,
    *,
    title: str | None = None,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> ChartConfig:
    """Synthesize and optimize a ChartConfig for a payload.

    Args:
        data: Raw payload.
        preferred_type: Chart type to build; the recommended type when omitted.
        title: Chart title; a generic title when omitted.
        registry: Chart-type registry used for dispatch.

    Returns:
        An optimized ChartConfig whose static data source points at `data`.
    """

    source = ChartDataSource(type="static", static_data=data)
    try:
        profile = profile_data(data)
        chart_type = preferred_type or recommend_chart_type(
            profile.structure, profile.features, profile.correlations, registry=registry
        )
        return _synthesize(profile, chart_type, title=title, data_source=source, registry=registry)
    except ChartConfigurationError:
        raise
    except _RECOVERABLE_ERRORS:
        logger.warning("Chart config generation failed; building an empty bar chart.", exc_info=True)
        return _synthesize(empty_profile(), DEFAULT_CHART_TYPE, title=title, data_source=source, registry=registry)


def optimize_chart_config_for_data(
    config: ChartConfig, data: object, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY
) -> ChartConfig:
    """Re-run the optimization pass on an existing config against a payload."""

    try:
        profile = profile_data(data)
        return optimize_chart_config(config, profile.structure, profile.features, registry=registry)
    except ChartConfigurationError:
        raise
    except _RECOVERABLE_ERRORS:
        logger.warning("Chart config optimization failed; returning the config unchanged.", exc_info=True)
        return config


def build_chart_option(
    data: object,
    preferred_type: ChartType | str | None = None,
    *,
    title: str | None = None,
    registry: ChartTypeRegistry = DEFAULT_REGISTRY,
) -> OptionDocument:
    """Run the full pipeline and return a complete option document."""

    config = generate_chart_config(data, preferred_type, title=title, registry=registry)
    return to_complete_option_document(config, data, registry=registry)


def recommend_chart_options(
    data: object, max_count: int = 3, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY
) -> dict[ChartType, OptionDocument]:
    """Return complete option documents for the top `max_count` chart types.

    On a data failure the result holds a single empty bar document.
    """

    source = ChartDataSource(type="static", static_data=data)
    try:
        profile = profile_data(data)
        ranked = top_chart_types(
            profile.structure, profile.features, profile.correlations, max_count=max_count, registry=registry
        )
        options: dict[ChartType, OptionDocument] = {}
        for chart_type, _score in ranked:
            config = _synthesize(profile, chart_type, title=None, data_source=source, registry=registry)
            options[chart_type] = to_complete_option_document(config, data, registry=registry)
        return options
    except ChartConfigurationError:
        raise
    except _RECOVERABLE_ERRORS:
        logger.warning("Chart option rendering failed; defaulting to %s.", DEFAULT_CHART_TYPE.value, exc_info=True)
        if max_count <= 0:
            return {}
        config = _synthesize(empty_profile(), DEFAULT_CHART_TYPE, title=None, data_source=source, registry=registry)
        return {DEFAULT_CHART_TYPE: to_complete_option_document(config, [], registry=registry)}


def _synthesize(
    profile: DataProfile,
    chart_type: ChartType | str,
    *,
    title: str | None,
    data_source: ChartDataSource,
    registry: ChartTypeRegistry,
) -> ChartConfig:
    config = synthesize_chart_config(
        profile.structure,
        profile.features,
        chart_type,
        title=title,
        data_source=data_source,
        registry=registry,
    )
    return optimize_chart_config(config, profile.structure, profile.features, registry=registry)
