"""
Typed models for the tracking and crossing engine.
"""

from .detection import BoundingBox, Category, Detection, detections_from_numpy
from .track import POSITION_HISTORY_SIZE, TrackedObject, TrackState, calculate_centroid
from .config import Config, CountingConfig, TrackingConfig

__all__ = [
    # Detection
    "BoundingBox",
    "Category",
    "Detection",
    "detections_from_numpy",
    # Tracking
    "POSITION_HISTORY_SIZE",
    "TrackedObject",
    "TrackState",
    "calculate_centroid",
    # Config
    "Config",
    "CountingConfig",
    "TrackingConfig",
]
