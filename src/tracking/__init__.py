"""
Tracking module.

The canonical tracker implementation is in tracking.centroid.
"""

from .centroid import CentroidTracker

__all__ = ["CentroidTracker"]
