"""
Track models for object tracking state.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Tuple

from .detection import BoundingBox, Detection


# Number of centroids kept per track; older entries drop off the front.
POSITION_HISTORY_SIZE = 30

Centroid = Tuple[float, float]


def calculate_centroid(bbox: BoundingBox) -> Centroid:
    """Midpoint of a bounding box."""
    return ((bbox.left + bbox.right) / 2.0, (bbox.top + bbox.bottom) / 2.0)


@dataclass(eq=False)
class TrackedObject:
    """
    A tracked object across frames.

    The tracker owns these and mutates them in place on every matched
    detection. `track_id` is the identity; every other field is a rolling
    window over the most recent observations.

    Attributes:
        track_id: Unique identifier, never reused within a tracking session.
        detection: Latest matched detection.
        centroid: Latest centroid (cx, cy).
        position_history: Centroid history, oldest first, newest last.
        timestamp: Unix timestamp of the latest update.
    """
    track_id: int
    detection: Detection
    centroid: Centroid
    position_history: Deque[Centroid] = field(
        default_factory=lambda: deque(maxlen=POSITION_HISTORY_SIZE)
    )
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def from_detection(
        cls,
        track_id: int,
        detection: Detection,
        timestamp: Optional[float] = None,
    ) -> "TrackedObject":
        """Create a new track whose history starts at the detection's centroid."""
        centroid = calculate_centroid(detection.bbox)
        return cls(
            track_id=track_id,
            detection=detection,
            centroid=centroid,
            position_history=deque([centroid], maxlen=POSITION_HISTORY_SIZE),
            timestamp=time.time() if timestamp is None else timestamp,
        )

    def update(self, detection: Detection, timestamp: Optional[float] = None) -> "TrackedObject":
        """Advance this track to a newly matched detection, keeping its id."""
        self.detection = detection
        self.centroid = calculate_centroid(detection.bbox)
        self.position_history.append(self.centroid)
        self.timestamp = time.time() if timestamp is None else timestamp
        return self

    def snapshot(self) -> "TrackState":
        return TrackState.from_tracked_object(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrackedObject):
            return NotImplemented
        return self.track_id == other.track_id

    def __hash__(self) -> int:
        return hash(self.track_id)


@dataclass(frozen=True)
class TrackState:
    """
    Immutable snapshot of a tracked object, handed to consumers each frame.

    Attributes:
        track_id: Unique identifier for this track.
        detection: Latest matched detection.
        centroid: Latest centroid (cx, cy).
        position_history: Centroid history, oldest first.
        timestamp: Unix timestamp of the latest update.
    """
    track_id: int
    detection: Detection
    centroid: Centroid
    position_history: Tuple[Centroid, ...]
    timestamp: float

    @classmethod
    def from_tracked_object(cls, obj: TrackedObject) -> "TrackState":
        """Create immutable snapshot from a TrackedObject."""
        return cls(
            track_id=obj.track_id,
            detection=obj.detection,
            centroid=obj.centroid,
            position_history=tuple(obj.position_history),
            timestamp=obj.timestamp,
        )

    @property
    def label(self) -> str:
        return self.detection.label
