"""Orchestration entry points for the analysis layer.

The analysis layer is a pure, non-Django module that accepts in-memory payloads
and returns DTOs. It must not import Django or perform any I/O.
"""

from __future__ import annotations

import logging

from .dto import DataFeatures, DataProfile, DataStructureInfo
from .features import correlations_from_records, features_from_records, patterns_from_features
from .shape import analyze_record_set
from .values import coerce_json_value, locate_record_set

logger = logging.getLogger(__name__)


def empty_profile() -> DataProfile:
    """Return the zero-valued profile used when a payload cannot be analyzed."""

    return DataProfile(structure=DataStructureInfo(), features=DataFeatures())


def profile_data(data: object) -> DataProfile:
    """Analyze a payload once and return structure, features, correlations and patterns.

    Args:
        data: A list of records, an object wrapping a list of records, a single
            record, or JSON text encoding one of those.

    Returns:
        DataProfile. Every part degrades to its empty value when the payload
        cannot be analyzed; nothing is raised for bad data.
    """

    try:
        value = coerce_json_value(data)
        if value is None:
            logger.warning("Profiling skipped: input is null or not valid JSON.")
            return empty_profile()
        record_set = locate_record_set(value)
        if record_set.source == "empty":
            logger.warning("Profiling skipped: unsupported root type %s.", type(value).__name__)
            return empty_profile()
        if record_set.source == "property":
            logger.debug("Using array property %r as the record set.", record_set.property_name)

        structure = analyze_record_set(record_set)
        features = features_from_records(record_set.records, structure)
        correlations = correlations_from_records(record_set.records, structure)
        patterns = patterns_from_features(structure, features, correlations)
    except (TypeError, ValueError, ArithmeticError, RecursionError):
        logger.warning("Profiling failed; returning an empty profile.", exc_info=True)
        return empty_profile()

    return DataProfile(
        structure=structure,
        features=features,
        correlations=tuple(correlations),
        patterns=tuple(patterns),
    )
