"""Per-chart-type score, skeleton and transcode behavior."""

from .base import ChartSkeleton, ChartTypeSpec, TranscodeContext
from .cartesian import BAR, LINE
from .heatmap import HEATMAP
from .pie import PIE
from .radar import RADAR
from .scatter import SCATTER

__all__ = [
    "BAR",
    "HEATMAP",
    "LINE",
    "PIE",
    "RADAR",
    "SCATTER",
    "ChartSkeleton",
    "ChartTypeSpec",
    "TranscodeContext",
]
