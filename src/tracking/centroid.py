"""
Centroid tracking module for keeping object identities across frames.

This module implements a nearest-centroid tracker with greedy matching.
Each detection is reduced to the midpoint of its bounding box; existing
tracks claim the closest incoming centroid first, and anything left over
either ages out (tracks) or starts a new identity (detections).

Note: Counting is NOT done here. Use
`algorithms.counting.LineCrossingDetector` on the returned snapshots.
"""

import logging
import time
from typing import Callable, Dict, List, Sequence, Set, Tuple

import numpy as np

from models.detection import Detection
from models.track import Centroid, TrackedObject, TrackState, calculate_centroid


class CentroidTracker:
    """
    Tracks objects across frames using nearest-centroid matching.

    This tracker is responsible for:
    - Matching detections to existing tracks by Euclidean centroid distance
    - Maintaining a bounded position history for each track
    - Evicting tracks that stay unmatched for too long

    Ids are assigned from a counter starting at 0 and are never reused
    until `reset()` is called. Instances are not thread-safe; call
    `update()` from a single owner once per frame.
    """

    def __init__(
        self,
        max_disappeared: int = 30,
        max_distance: float = 100.0,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the centroid tracker.

        Args:
            max_disappeared: Consecutive unmatched frames a track survives;
                             it is evicted once the count exceeds this.
            max_distance: Largest centroid displacement accepted as a match.
            clock: Time source for track timestamps (seconds).
        """
        self._max_disappeared = max_disappeared
        self._max_distance = max_distance
        self._clock = clock

        self._tracked_objects: Dict[int, TrackedObject] = {}
        self._disappeared: Dict[int, int] = {}
        self._next_id = 0

        logging.info(
            f"Centroid tracker initialized (max_disappeared={max_disappeared}, "
            f"max_distance={max_distance})"
        )

    @property
    def max_disappeared(self) -> int:
        return self._max_disappeared

    @property
    def max_distance(self) -> float:
        return self._max_distance

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tracked_objects)

    def update(self, detections: Sequence[Detection]) -> List[TrackState]:
        """
        Update tracker with the detections of a new frame.

        Args:
            detections: Detections for this frame (possibly empty).

        Returns:
            Snapshots of every live track, in registration order.
        """
        if len(detections) == 0:
            for object_id in list(self._disappeared):
                self._mark_disappeared(object_id)
            return self.get_tracked_objects()

        input_centroids = [calculate_centroid(d.bbox) for d in detections]

        if not self._tracked_objects:
            for detection in detections:
                self._register(detection)
            return self.get_tracked_objects()

        object_ids = list(self._tracked_objects.keys())
        object_centroids = [self._tracked_objects[i].centroid for i in object_ids]

        distances = _compute_distance_matrix(object_centroids, input_centroids)
        used_rows, used_cols = self._match_objects(distances, object_ids, detections)

        for row, object_id in enumerate(object_ids):
            if row not in used_rows:
                self._mark_disappeared(object_id)

        for col, detection in enumerate(detections):
            if col not in used_cols:
                self._register(detection)

        return self.get_tracked_objects()

    def _match_objects(
        self,
        distances: np.ndarray,
        object_ids: List[int],
        detections: Sequence[Detection],
    ) -> Tuple[Set[int], Set[int]]:
        """Greedily claim (track, detection) pairs in ascending distance order."""
        used_rows: Set[int] = set()
        used_cols: Set[int] = set()

        n_cols = distances.shape[1]
        flat = distances.ravel()
        # Stable sort keeps equal distances in row-major order
        order = np.argsort(flat, kind="stable")

        for idx in order:
            row, col = divmod(int(idx), n_cols)
            if row in used_rows or col in used_cols or flat[idx] > self._max_distance:
                continue

            object_id = object_ids[row]
            self._tracked_objects[object_id].update(detections[col], self._clock())
            self._disappeared[object_id] = 0

            used_rows.add(row)
            used_cols.add(col)

        return used_rows, used_cols

    def _register(self, detection: Detection) -> None:
        """Start a new track for an unmatched detection."""
        object_id = self._next_id
        self._tracked_objects[object_id] = TrackedObject.from_detection(
            object_id, detection, self._clock()
        )
        self._disappeared[object_id] = 0
        self._next_id += 1
        logging.debug(f"Registered track {object_id} ({detection.label or 'unlabeled'})")

    def _mark_disappeared(self, object_id: int) -> None:
        """Age an unmatched track and evict it past the limit."""
        self._disappeared[object_id] += 1
        if self._disappeared[object_id] > self._max_disappeared:
            del self._tracked_objects[object_id]
            del self._disappeared[object_id]
            logging.debug(f"Evicted track {object_id}")

    def get_disappeared(self, object_id: int) -> int:
        """Consecutive unmatched frames for a live track."""
        return self._disappeared[object_id]

    def get_tracked_objects(self) -> List[TrackState]:
        """Get read-only snapshots of all live tracks."""
        return [obj.snapshot() for obj in self._tracked_objects.values()]

    def reset(self) -> None:
        """Drop all tracks and restart id assignment at 0."""
        self._tracked_objects.clear()
        self._disappeared.clear()
        self._next_id = 0


def _compute_distance_matrix(
    centroids1: Sequence[Centroid],
    centroids2: Sequence[Centroid],
) -> np.ndarray:
    """Pairwise Euclidean distances, rows from centroids1 and columns from centroids2."""
    a = np.asarray(centroids1, dtype=float).reshape(-1, 2)
    b = np.asarray(centroids2, dtype=float).reshape(-1, 2)
    diff = a[:, np.newaxis, :] - b[np.newaxis, :, :]
    return np.hypot(diff[..., 0], diff[..., 1])
