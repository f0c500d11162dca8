"""Chart recommendation, configuration synthesis and option rendering.

Charts are driven by `ChartConfig` objects rather than bespoke view logic. This
package contains the schema, the chart-type registry, scoring, synthesis,
rendering and validation utilities used by the API views. It must not import
Django.
"""
