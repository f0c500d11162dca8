"""Chart-type registry: the single dispatch table for score, build and transcode.

Scoring, synthesis and rendering all look chart types up here, so a chart type
is either fully supported (all three behaviors) or routed to the bar fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Final

from .errors import ChartConfigurationError
from .kinds import BAR, HEATMAP, LINE, PIE, RADAR, SCATTER, ChartTypeSpec
from .schema import ChartType, coerce_chart_type

logger = logging.getLogger(__name__)


class ChartTypeRegistry:
    """Lookup helpers for chart-type specs."""

    def __init__(self, specs: Iterable[ChartTypeSpec], *, fallback: ChartType = ChartType.BAR) -> None:
        """Initialize a registry from specs; registration order is the scoring order."""

        self._specs: dict[ChartType, ChartTypeSpec] = {}
        for spec in specs:
            if not isinstance(spec.chart_type, ChartType):
                raise ChartConfigurationError(
                    f"ChartTypeSpec[{spec.label!r}] has invalid chart_type={spec.chart_type!r}; expected ChartType."
                )
            if spec.chart_type in self._specs:
                raise ChartConfigurationError(f"Duplicate ChartTypeSpec for chart type: {spec.chart_type.value!r}")
            self._specs[spec.chart_type] = spec
        if fallback not in self._specs:
            raise ChartConfigurationError(f"Fallback chart type {fallback.value!r} is not registered.")
        self._fallback = fallback

    @property
    def fallback(self) -> ChartTypeSpec:
        """Return the spec used for unsupported chart types."""

        return self._specs[self._fallback]

    def get(self, chart_type: ChartType) -> ChartTypeSpec | None:
        """Return the spec for a chart type, or None when it is not registered."""

        return self._specs.get(chart_type)

    def list(self) -> tuple[ChartTypeSpec, ...]:
        """Return all specs in registration order."""

        return tuple(self._specs.values())

    def chart_types(self) -> tuple[ChartType, ...]:
        """Return registered chart types in registration order."""

        return tuple(self._specs.keys())

    def resolve(self, chart_type: ChartType | str | None) -> ChartTypeSpec:
        """Return the spec for a chart type, falling back to bar for unsupported types.

        Args:
            chart_type: ChartType member or its string value.

        Returns:
            The registered spec, or the fallback spec (logged) for types that
            are unknown or have no registered behavior.
        """

        resolved = coerce_chart_type(chart_type)
        spec = self._specs.get(resolved) if resolved is not None else None
        if spec is None:
            logger.warning("Unsupported chart type %r; using the %s path.", chart_type, self._fallback.value)
            return self.fallback
        return spec


DEFAULT_REGISTRY: Final[ChartTypeRegistry] = ChartTypeRegistry([PIE, LINE, BAR, SCATTER, RADAR, HEATMAP])
