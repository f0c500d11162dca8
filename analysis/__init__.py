"""Pure analysis package for chart recommendation.

This package infers field roles and statistical features from loosely-typed
in-memory payloads and returns DTOs. It must not import Django or perform any
I/O.
"""

from .engine import profile_data
from .features import detect_correlations, extract_features, identify_patterns
from .shape import analyze_structure

__all__ = [
    "analyze_structure",
    "detect_correlations",
    "extract_features",
    "identify_patterns",
    "profile_data",
]
