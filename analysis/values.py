"""Tagged value model for loosely-typed chart input.

Chart data arrives as arbitrary JSON-shaped values (lists of records, wrapper
objects, single records). This module classifies those values into a small set
of semantic types and locates the record set inside a payload.

Helpers here never raise on unexpected shapes and do not import Django.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Final, Literal

SemanticType = Literal["string", "integer", "float", "boolean", "datetime", "array", "object"]

NUMERIC_TYPES: Final[frozenset[str]] = frozenset({"integer", "float"})

RecordSource = Literal["array", "property", "single", "empty"]

_DATETIME_FORMATS: Final[tuple[str, ...]] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%b %d, %Y %H:%M",
    "%B %d, %Y %H:%M",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%Y-%m",
)


@dataclass(frozen=True, slots=True)
class RecordSet:
    """Records located inside a payload.

    Args:
        records: Mapping items treated as rows.
        row_count: Number of items in the located array (or 1 for a single record).
        source: How the record set was located.
        property_name: Wrapper property holding the records, when `source == "property"`.
    """

    records: tuple[Mapping[str, object], ...]
    row_count: int
    source: RecordSource
    property_name: str | None = None


EMPTY_RECORD_SET: Final[RecordSet] = RecordSet(records=(), row_count=0, source="empty")


def coerce_json_value(data: object) -> object | None:
    """Normalize caller input into a JSON-like value tree.

    Args:
        data: Raw input (JSON text, bytes, dataclass, mapping, sequence, scalar).

    Returns:
        A JSON-like value, or None when JSON text cannot be decoded.
    """

    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(data, str):
        try:
            return json.loads(data)
        except ValueError:
            return None
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    if isinstance(data, tuple):
        return list(data)
    return data


def parse_datetime_value(value: object) -> datetime | None:
    """Parse a date/time value (best-effort).

    Args:
        value: A datetime/date object or a string.

    Returns:
        A datetime when the value represents a date/time, otherwise None.
    """

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or not any(ch.isdigit() for ch in text):
        return None

    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def is_numeric(value: object) -> bool:
    """Return True for finite numbers (booleans excluded)."""

    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return False


def semantic_type_of(value: object) -> SemanticType | None:
    """Classify a single value into a semantic type.

    Args:
        value: Any JSON-like value.

    Returns:
        The semantic type, or None for null values.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, (float, Decimal)):
        return "float"
    if isinstance(value, (datetime, date)):
        return "datetime"
    if isinstance(value, str):
        return "datetime" if parse_datetime_value(value) is not None else "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return "array"
    return "string"


def is_numeric_type(semantic_type: str | None) -> bool:
    """Return True when a semantic type routes a field to the metric role."""

    return semantic_type in NUMERIC_TYPES


def locate_record_set(data: object) -> RecordSet:
    """Locate the record set inside a payload.

    - A list is the record set itself.
    - An object is searched for the longest non-empty list-valued property
      (first property wins on ties); without one, the object is a single record.
    - Anything else yields an empty record set.

    Args:
        data: A JSON-like value (see `coerce_json_value`).

    Returns:
        RecordSet with mapping rows and the located row count.
    """

    if isinstance(data, list):
        return RecordSet(records=_mapping_items(data), row_count=len(data), source="array")

    if isinstance(data, Mapping):
        best_name: str | None = None
        best_items: list[object] = []
        for name, value in data.items():
            if isinstance(value, list) and len(value) > len(best_items):
                best_name = str(name)
                best_items = value
        if best_name is not None:
            return RecordSet(
                records=_mapping_items(best_items),
                row_count=len(best_items),
                source="property",
                property_name=best_name,
            )
        return RecordSet(records=(data,), row_count=1, source="single")

    return EMPTY_RECORD_SET


def find_records(data: object) -> tuple[Mapping[str, object], ...]:
    """Return the mapping rows of a payload (see `locate_record_set`)."""

    return locate_record_set(coerce_json_value(data)).records


def display_label(value: object) -> str:
    """Render a dimension value as an axis/legend label."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _mapping_items(items: list[object]) -> tuple[Mapping[str, object], ...]:
    return tuple(item for item in items if isinstance(item, Mapping))
