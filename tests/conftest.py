"""Pytest fixtures shared across unit and integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest


@pytest.fixture
def monthly_sales() -> list[dict[str, object]]:
    """Return five categorical rows with a single metric."""

    return [
        {"month": "Jan", "sales": 120},
        {"month": "Feb", "sales": 90},
        {"month": "Mar", "sales": 150},
        {"month": "Apr", "sales": 110},
        {"month": "May", "sales": 130},
    ]


@pytest.fixture
def daily_trend() -> list[dict[str, object]]:
    """Return six ISO-dated rows with a monotonically increasing metric."""

    return [{"date": f"2024-01-0{day}", "value": day * 10} for day in range(1, 7)]


@pytest.fixture
def paired_metrics() -> list[dict[str, object]]:
    """Return rows whose two metrics are perfectly correlated."""

    return [{"x": x, "y": x * 2} for x in range(1, 6)]


@pytest.fixture
def weekday_grid() -> list[dict[str, object]]:
    """Return a 2 × 3 day/slot grid with the (Tue, pm) cell missing."""

    return [
        {"day": "Mon", "slot": "am", "visits": 4},
        {"day": "Mon", "slot": "mid", "visits": 7},
        {"day": "Mon", "slot": "pm", "visits": 2},
        {"day": "Tue", "slot": "am", "visits": 5},
        {"day": "Tue", "slot": "mid", "visits": 9},
    ]


@pytest.fixture
def outlier_rows() -> list[dict[str, object]]:
    """Return twenty rows where one value lies far beyond mean + 3σ."""

    rows: list[dict[str, object]] = [{"name": f"r{idx}", "value": 10} for idx in range(19)]
    rows.append({"name": "r19", "value": 1000})
    return rows


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request/command machinery.
    - `integration`: tests touching Django views, settings, or management commands.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
