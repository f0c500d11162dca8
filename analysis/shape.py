"""Structural analysis of semi-structured chart input.

The shape analyzer answers "which fields label rows and which fields hold
numbers" for an arbitrary payload. Analysis never fails: malformed input yields
an empty DataStructureInfo and a logged warning.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Final

from .dto import DataStructureInfo
from .values import (
    RecordSet,
    SemanticType,
    coerce_json_value,
    is_numeric_type,
    locate_record_set,
    semantic_type_of,
)

logger = logging.getLogger(__name__)

FIELD_SAMPLE_ROWS: Final[int] = 10


def analyze_structure(data: object) -> DataStructureInfo:
    """Infer field roles, types and samples for a payload.

    Args:
        data: A list of records, an object wrapping a list of records, a single
            record, or JSON text encoding one of those.

    Returns:
        DataStructureInfo describing the located record set. Empty when the
        payload is null, unparseable or not a container.
    """

    try:
        value = coerce_json_value(data)
        if value is None:
            logger.warning("Structure analysis skipped: input is null or not valid JSON.")
            return DataStructureInfo()
        record_set = locate_record_set(value)
        if record_set.source == "empty":
            logger.warning("Structure analysis skipped: unsupported root type %s.", type(value).__name__)
            return DataStructureInfo()
        if record_set.source == "property":
            logger.debug("Using array property %r as the record set.", record_set.property_name)
        return analyze_record_set(record_set)
    except (TypeError, ValueError, RecursionError):
        logger.warning("Structure analysis failed; returning an empty structure.", exc_info=True)
        return DataStructureInfo()


def analyze_record_set(record_set: RecordSet) -> DataStructureInfo:
    """Classify the fields of an already-located record set.

    Field order follows the keys of the first record. Each field is typed from
    its first-record value; a null there falls back to the first non-null value
    within the sample window, and to "string" when none exists.
    """

    if not record_set.records:
        return DataStructureInfo(row_count=record_set.row_count)

    window = record_set.records[:FIELD_SAMPLE_ROWS]
    samples = _collect_samples(window, field_names=[str(key) for key in record_set.records[0].keys()])

    first = record_set.records[0]
    field_types: dict[str, SemanticType] = {}
    dimension_fields: list[str] = []
    metric_fields: list[str] = []
    for key, value in first.items():
        name = str(key)
        if name in field_types:
            continue
        if value is None:
            value = samples.get(name)
        semantic_type = semantic_type_of(value) or "string"
        field_types[name] = semantic_type
        if is_numeric_type(semantic_type):
            metric_fields.append(name)
        else:
            dimension_fields.append(name)

    return DataStructureInfo(
        row_count=record_set.row_count,
        dimension_fields=tuple(dimension_fields),
        metric_fields=tuple(metric_fields),
        field_types=field_types,
        field_samples=samples,
    )


def _collect_samples(records: tuple[Mapping[str, object], ...], *, field_names: list[str]) -> dict[str, object | None]:
    """Return the first non-null value per field within `records`."""

    samples: dict[str, object | None] = {name: None for name in field_names}
    for record in records:
        for key, value in record.items():
            name = str(key)
            if name in samples and samples[name] is None and value is not None:
                samples[name] = value
    return samples
