"""Collaborator interfaces around the chart pipeline.

The pipeline itself is pure: it never fetches data, persists configs, exports
files or inspects host-application declarations. Those jobs belong to the
collaborators described here. `ChartService` wires them together and raises
`ChartConfigurationError` when a required collaborator is missing.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Protocol

from .errors import ChartConfigurationError, ExportNotSupportedError
from .kinds.base import OptionDocument
from .recommender import generate_chart_config, recommend_chart, recommend_chart_types
from .render import to_complete_option_document, to_option_document
from .schema import (
    ChartConfig,
    ChartDataSource,
    ChartType,
    InteractionConfig,
    SeriesConfig,
    ToolboxConfig,
    coerce_chart_type,
)
from .type_registry import DEFAULT_REGISTRY, ChartTypeRegistry

logger = logging.getLogger(__name__)


class DataProvider(Protocol):
    """Resolves a data source descriptor into the raw payload the pipeline consumes."""

    def resolve(self, source: ChartDataSource) -> object:
        """Return the payload described by `source`."""


class ConfigStore(Protocol):
    """Persists ChartConfig objects under externally generated ids."""

    def save(self, config: ChartConfig) -> str:
        """Persist a config and return its id."""

    def get(self, config_id: str) -> ChartConfig | None:
        """Return a stored config, or None when missing."""


class ExportAdapter(Protocol):
    """Turns a finished ChartConfig into an image or spreadsheet."""

    def export_image(self, config: ChartConfig) -> bytes:
        """Return an image rendering of the chart."""

    def export_spreadsheet(self, config: ChartConfig) -> bytes:
        """Return the chart data as a spreadsheet."""


class StaticDataProvider:
    """DataProvider for inline (`static`) and caller-context (`current`) sources."""

    def __init__(self, current: object | None = None) -> None:
        self._current = current

    def resolve(self, source: ChartDataSource) -> object:
        if source.type == "static":
            return source.static_data
        if source.type == "current":
            return self._current if self._current is not None else source.static_data
        raise ChartConfigurationError(
            f"Data source type {source.type!r} requires a remote DataProvider (url={source.api_url!r})."
        )


class UnsupportedExportAdapter:
    """ExportAdapter that declines every export."""

    def export_image(self, config: ChartConfig) -> bytes:
        raise ExportNotSupportedError("Exporting charts as images is not supported.")

    def export_spreadsheet(self, config: ChartConfig) -> bytes:
        raise ExportNotSupportedError("Exporting chart data as spreadsheets is not supported.")


class InMemoryConfigStore:
    """Process-local ConfigStore; ids are random UUID hex strings."""

    def __init__(self) -> None:
        self._configs: dict[str, ChartConfig] = {}

    def save(self, config: ChartConfig) -> str:
        config_id = config.id or uuid.uuid4().hex
        self._configs[config_id] = replace(config, id=config_id)
        return config_id

    def get(self, config_id: str) -> ChartConfig | None:
        return self._configs.get(config_id)


@dataclass(frozen=True, slots=True)
class ChartMetadata:
    """Plain chart metadata declared by a host application.

    This is the only input a metadata binder may produce; the pipeline never
    inspects host declarations itself.

    Args:
        name: Name of the declaring handler; used as the title fallback.
        title: Chart title.
        description: Subtitle text.
        chart_type: Explicit chart type; recommended from data when None.
        sub_type: Optional chart sub-type hint.
        auto_refresh: Whether the chart refreshes periodically.
        refresh_interval: Refresh interval in seconds.
        theme: Renderer theme.
        show_toolbox: Whether a toolbox is attached.
        enable_export: Whether the toolbox offers image export.
        enable_interaction: Whether a tooltip is attached.
        dimension_fields: Explicit dimension field bindings.
        metric_fields: Explicit metric field bindings.
    """

    name: str
    title: str = ""
    description: str = ""
    chart_type: ChartType | None = None
    sub_type: str | None = None
    auto_refresh: bool = False
    refresh_interval: int = 60
    theme: str = "default"
    show_toolbox: bool = True
    enable_export: bool = True
    enable_interaction: bool = True
    dimension_fields: tuple[str, ...] = ()
    metric_fields: tuple[str, ...] = ()


def chart_config_from_metadata(
    metadata: ChartMetadata, *, registry: ChartTypeRegistry = DEFAULT_REGISTRY
) -> ChartConfig:
    """Translate declared metadata into a plain ChartConfig.

    Explicit field bindings become series with `encode` overrides; everything
    else is left for synthesis.
    """

    chart_type = coerce_chart_type(metadata.chart_type) or ChartType.BAR
    spec = registry.resolve(chart_type)

    series: tuple[SeriesConfig, ...] = ()
    if metadata.metric_fields:
        x_field = metadata.dimension_fields[0] if metadata.dimension_fields else None
        series = tuple(
            SeriesConfig(
                name=metric_field,
                type=spec.series_type,
                encode={"x": x_field, "y": metric_field} if x_field else {"y": metric_field},
            )
            for metric_field in metadata.metric_fields
        )

    toolbox = None
    if metadata.show_toolbox:
        toolbox = ToolboxConfig(
            features={
                "saveAsImage": metadata.enable_export,
                "dataView": True,
                "restore": True,
                "dataZoom": True,
                "magicType": True,
            }
        )

    interaction = InteractionConfig(tooltip={"show": True}) if metadata.enable_interaction else None

    return ChartConfig(
        type=chart_type,
        title=metadata.title or metadata.name,
        subtitle=metadata.description,
        sub_type=metadata.sub_type,
        theme=metadata.theme,
        auto_refresh=metadata.auto_refresh,
        refresh_interval=metadata.refresh_interval,
        series=series,
        toolbox=toolbox,
        interaction=interaction,
    )


class ChartService:
    """Chart operations bound to concrete collaborators."""

    def __init__(
        self,
        provider: DataProvider | None = None,
        *,
        store: ConfigStore | None = None,
        exporter: ExportAdapter | None = None,
        registry: ChartTypeRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._provider = provider
        self._store = store
        self._exporter = exporter or UnsupportedExportAdapter()
        self._registry = registry

    def get_chart_data(self, source: ChartDataSource) -> object:
        """Resolve a data source through the configured provider."""

        if self._provider is None:
            raise ChartConfigurationError("ChartService has no DataProvider configured.")
        return self._provider.resolve(source)

    def recommend_chart_type(self, data: object) -> ChartType:
        return recommend_chart(data, registry=self._registry)

    def recommended_chart_types(self, data: object, max_count: int = 3) -> dict[ChartType, float]:
        return dict(recommend_chart_types(data, max_count, registry=self._registry))

    def analyze_and_generate(self, data: object, *, title: str | None = None) -> ChartConfig:
        """Recommend, synthesize and optimize a config for a payload."""

        return generate_chart_config(data, title=title, registry=self._registry)

    def config_from_metadata(self, metadata: ChartMetadata, data: object | None = None) -> ChartConfig:
        """Build a config from declared metadata, synthesizing layout from data when given."""

        declared = chart_config_from_metadata(metadata, registry=self._registry)
        if data is None:
            return declared

        generated = generate_chart_config(
            data, metadata.chart_type, title=declared.title, registry=self._registry
        )
        return replace(
            generated,
            subtitle=declared.subtitle,
            sub_type=declared.sub_type,
            theme=declared.theme,
            auto_refresh=declared.auto_refresh,
            refresh_interval=declared.refresh_interval,
            series=declared.series or generated.series,
            toolbox=declared.toolbox,
        )

    def render_option(self, config: ChartConfig, data: object | None = None) -> OptionDocument:
        """Render a complete option document, resolving data from the config when needed."""

        if data is None and config.data_source is not None:
            data = self.get_chart_data(config.data_source)
        if data is None:
            return to_option_document(config, registry=self._registry)
        return to_complete_option_document(config, data, registry=self._registry)

    def save_config(self, config: ChartConfig) -> str:
        if self._store is None:
            raise ChartConfigurationError("ChartService has no ConfigStore configured.")
        config_id = self._store.save(config)
        logger.info("Saved chart config %s.", config_id)
        return config_id

    def get_config(self, config_id: str) -> ChartConfig | None:
        if self._store is None:
            raise ChartConfigurationError("ChartService has no ConfigStore configured.")
        return self._store.get(config_id)

    def export_image(self, config: ChartConfig) -> bytes:
        return self._exporter.export_image(config)

    def export_spreadsheet(self, config: ChartConfig) -> bytes:
        return self._exporter.export_spreadsheet(config)
