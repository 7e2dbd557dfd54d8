"""
Counting algorithms for the tracking engine.

This module provides the line crossing detector that consumes tracker output
and produces crossing counts. The tracking layer remains independent -
detectors do not modify track state.
"""

from .categories import CATEGORY_PATTERNS, classify_label
from .geometry import segments_intersect, side_of_line
from .line import (
    CROSSING_COOLDOWN_MS,
    LineCrossingDetector,
    create_line_crossing_detector_from_config,
)
from .utils import compute_counting_line

__all__ = [
    "CATEGORY_PATTERNS",
    "classify_label",
    "segments_intersect",
    "side_of_line",
    "CROSSING_COOLDOWN_MS",
    "LineCrossingDetector",
    "create_line_crossing_detector_from_config",
    "compute_counting_line",
]
