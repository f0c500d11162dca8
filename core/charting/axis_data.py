"""Compatibility checks between declared axis types and sample values."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from analysis.values import is_numeric, parse_datetime_value


@dataclass(frozen=True, slots=True)
class AxisDataValidation:
    """Result of checking values against an axis type."""

    is_valid: bool
    message: str | None = None


def validate_axis_data(axis_type: str, values: Iterable[object]) -> AxisDataValidation:
    """Check that non-null values fit an axis type.

    Args:
        axis_type: One of `category`, `value`, `time`, `log`.
        values: Sample values destined for the axis.

    Returns:
        AxisDataValidation. Category axes accept anything; value axes require
        numbers; time axes require dates or parseable date strings; log axes
        require strictly positive numbers.
    """

    if axis_type == "category":
        return AxisDataValidation(is_valid=True)

    samples = [value for value in values if value is not None]
    if axis_type == "value":
        bad = [value for value in samples if not is_numeric(value)]
        if bad:
            return AxisDataValidation(False, f"value axis requires numeric data; got {bad[0]!r}.")
    elif axis_type == "time":
        bad = [value for value in samples if parse_datetime_value(value) is None]
        if bad:
            return AxisDataValidation(False, f"time axis requires date/time data; got {bad[0]!r}.")
    elif axis_type == "log":
        bad = [value for value in samples if not is_numeric(value) or float(value) <= 0]  # type: ignore[arg-type]
        if bad:
            return AxisDataValidation(False, f"log axis requires positive numbers; got {bad[0]!r}.")
    else:
        return AxisDataValidation(False, f"Unknown axis type: {axis_type!r}.")
    return AxisDataValidation(is_valid=True)
