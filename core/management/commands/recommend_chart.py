"""Recommend a chart for a JSON/YAML data file and print the option document."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.charting.recommender import build_chart_option, recommend_chart_types
from core.charting.schema import coerce_chart_type


class Command(BaseCommand):
    """Print a complete option document (or a score table) for a data file."""

    help = "Recommend a chart type for a JSON or YAML data file and print the chart option document."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("path", help="Path to a JSON or YAML file holding the chart data.")
        parser.add_argument(
            "--type",
            dest="chart_type",
            default=None,
            help="Chart type to build instead of the recommended one (e.g. bar, line, pie).",
        )
        parser.add_argument(
            "--top",
            type=int,
            default=None,
            help="Print the top-N chart type scores instead of an option document.",
        )
        parser.add_argument(
            "--indent",
            type=int,
            default=2,
            help="JSON indentation for the output.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        path = Path(options["path"])
        top: int | None = options["top"]
        indent: int = options["indent"]

        if not path.is_file():
            raise CommandError(f"Data file not found: {path}")

        try:
            # YAML is a superset of JSON, so one loader covers both formats.
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise CommandError(f"Could not read {path}: {exc}") from exc

        max_rows = int(getattr(settings, "CHART_STUDIO", {}).get("MAX_ROWS", 10_000))
        if isinstance(data, list) and len(data) > max_rows:
            raise CommandError(f"{path} has {len(data)} rows; the limit is {max_rows}.")

        chart_type = None
        if options["chart_type"]:
            chart_type = coerce_chart_type(options["chart_type"])
            if chart_type is None:
                raise CommandError(f"Unknown chart type: {options['chart_type']!r}.")

        if top is not None:
            if top <= 0:
                raise CommandError("--top must be a positive integer.")
            ranked = recommend_chart_types(data, top)
            payload: object = [{"type": kind.value, "score": round(score, 4)} for kind, score in ranked]
        else:
            payload = build_chart_option(data, chart_type, title=path.stem)

        self.stdout.write(json.dumps(payload, indent=indent, ensure_ascii=False, default=str))
        return None
