"""Tests for ChartConfig snapshot encoding and decoding."""

from __future__ import annotations

import json

import pytest

from core.charting.recommender import generate_chart_config
from core.charting.schema import ChartType
from core.charting.snapshot_codec import SNAPSHOT_VERSION, decode_chart_config, encode_chart_config

pytestmark = pytest.mark.unit


def test_snapshot_restores_generated_config(daily_trend) -> None:
    """Decoding an encoded config yields an equal config."""

    config = generate_chart_config(daily_trend, title="Daily visits")
    payload = encode_chart_config(config)

    assert payload["version"] == SNAPSHOT_VERSION
    assert payload["type"] == "line"
    assert decode_chart_config(json.loads(json.dumps(payload))) == config


def test_snapshot_preserves_pie_styles(monthly_sales) -> None:
    """Series label/itemStyle blocks and legend placement survive encoding."""

    config = generate_chart_config(monthly_sales, ChartType.PIE)
    restored = decode_chart_config(encode_chart_config(config))

    assert restored.series[0].item_style == {"borderRadius": 8, "borderWidth": 2}
    assert restored.legend is not None and restored.legend.position == "right"
    assert restored.x_axis is None


def test_decode_accepts_minimal_payload() -> None:
    """Missing optional blocks decode to defaults."""

    config = decode_chart_config({"type": "Bar", "series": [{"name": "v", "type": "bar"}]})

    assert config.type == ChartType.BAR
    assert config.refresh_interval == 60
    assert config.legend is None
    assert config.series[0].name == "v"


def test_decode_parses_loose_scalars() -> None:
    """Booleans and integers encoded as strings are tolerated."""

    config = decode_chart_config({"type": "line", "auto_refresh": "yes", "refresh_interval": "30"})

    assert config.auto_refresh is True
    assert config.refresh_interval == 30


@pytest.mark.parametrize(
    "payload",
    [
        "not an object",
        {"type": "hologram"},
        {"type": "bar", "series": {"name": "v"}},
        {"type": "bar", "series": ["v"]},
        {"type": "bar", "x_axis": {"type": "polar"}},
        {"type": "bar", "legend": "left"},
        {"type": "bar", "data_source": {"type": "ftp"}},
    ],
)
def test_decode_rejects_malformed_payloads(payload) -> None:
    """Malformed snapshots raise ValueError."""

    with pytest.raises(ValueError):
        decode_chart_config(payload)
