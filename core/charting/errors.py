"""Exceptions raised by the chart layer.

Data problems are recovered locally and logged; only programmer errors (invalid
construction, missing collaborators, unusable configs) surface as exceptions.
"""

from __future__ import annotations


class ChartConfigurationError(ValueError):
    """Raised when the chart layer is wired or configured incorrectly."""


class ExportNotSupportedError(ChartConfigurationError):
    """Raised by export adapters that do not implement a requested format."""
