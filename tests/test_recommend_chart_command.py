"""Integration tests for the `recommend_chart` management command."""

from __future__ import annotations

import json
from io import StringIO

import pytest
import yaml
from django.core.management import call_command
from django.core.management.base import CommandError

pytestmark = pytest.mark.integration


def _run(*args: str) -> object:
    out = StringIO()
    call_command("recommend_chart", *args, stdout=out)
    return json.loads(out.getvalue())


def test_command_prints_option_for_json_file(tmp_path, daily_trend) -> None:
    """A JSON data file yields a complete option document titled after the file."""

    path = tmp_path / "visits.json"
    path.write_text(json.dumps(daily_trend), encoding="utf-8")

    option = _run(str(path))

    assert option["title"]["text"] == "visits"
    assert option["xAxis"]["type"] == "time"
    assert option["series"][0]["type"] == "line"


def test_command_reads_yaml_files(tmp_path, monthly_sales) -> None:
    """YAML files are accepted as well."""

    path = tmp_path / "sales.yaml"
    path.write_text(yaml.safe_dump(monthly_sales), encoding="utf-8")

    option = _run(str(path), "--type", "bar")

    assert option["xAxis"]["data"] == ["Jan", "Feb", "Mar", "Apr", "May"]


def test_command_prints_score_table_with_top(tmp_path, monthly_sales) -> None:
    """`--top` switches the output to ranked scores."""

    path = tmp_path / "sales.json"
    path.write_text(json.dumps(monthly_sales), encoding="utf-8")

    scores = _run(str(path), "--top", "2")

    assert scores == [{"type": "pie", "score": 1.0}, {"type": "bar", "score": 0.9}]


def test_command_rejects_missing_file(tmp_path) -> None:
    """A path that does not exist is a command error."""

    with pytest.raises(CommandError, match="not found"):
        call_command("recommend_chart", str(tmp_path / "missing.json"), stdout=StringIO())


def test_command_rejects_unknown_type(tmp_path, monthly_sales) -> None:
    """Unknown chart types are command errors."""

    path = tmp_path / "sales.json"
    path.write_text(json.dumps(monthly_sales), encoding="utf-8")

    with pytest.raises(CommandError, match="Unknown chart type"):
        call_command("recommend_chart", str(path), "--type", "hologram", stdout=StringIO())


def test_command_rejects_non_positive_top(tmp_path, monthly_sales) -> None:
    """`--top` must be positive."""

    path = tmp_path / "sales.json"
    path.write_text(json.dumps(monthly_sales), encoding="utf-8")

    with pytest.raises(CommandError, match="positive"):
        call_command("recommend_chart", str(path), "--top", "0", stdout=StringIO())
