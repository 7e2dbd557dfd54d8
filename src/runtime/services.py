from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from algorithms.counting.categories import CATEGORY_PATTERNS
from algorithms.counting.line import LineCrossingDetector, create_line_crossing_detector_from_config
from models.config import Config
from models.detection import Detection
from models.track import TrackState
from tracking.centroid import CentroidTracker


@dataclass(frozen=True)
class FrameResult:
    """
    Outcome of one processed frame.

    Attributes:
        detections: Detections supplied for the frame.
        tracked_objects: Track snapshots, or None while counting is inactive.
        new_crossings: Ids that crossed this frame, or None while counting is inactive.
    """
    detections: Sequence[Detection]
    tracked_objects: Optional[List[TrackState]] = None
    new_crossings: Optional[List[int]] = None


class CountingService:
    """
    Orchestrates tracking and line crossing for one camera/line.

    Owns a CentroidTracker and a LineCrossingDetector and always runs them
    in that order. Both are created by `start_counting()` once the frame
    size is known; until then frames pass through untracked.
    """

    def __init__(self, config: Optional[Config] = None, clock: Callable[[], float] = time.time):
        self.config = config or Config()
        self._clock = clock
        self.tracker: Optional[CentroidTracker] = None
        self.crossing_detector: Optional[LineCrossingDetector] = None
        self._counting_active = False

    def start_counting(self, frame_width: int, frame_height: int) -> None:
        """Create a fresh tracker and detector for the given frame size and start counting."""
        tracking_cfg = self.config.tracking
        self.tracker = CentroidTracker(
            max_disappeared=tracking_cfg.max_disappeared,
            max_distance=tracking_cfg.max_distance,
            clock=self._clock,
        )
        self.crossing_detector = create_line_crossing_detector_from_config(
            self.config.counting.to_dict(),
            frame_width,
            frame_height,
            clock=self._clock,
        )
        self._counting_active = True

        start = self.crossing_detector.line_start
        end = self.crossing_detector.line_end
        logging.info(f"Counting started ({frame_width}x{frame_height}, line {start} -> {end})")

    def stop_counting(self) -> None:
        """Stop counting; tracker and detector state is kept."""
        self._counting_active = False
        logging.info("Counting stopped")

    def reset_counting(self) -> None:
        """Reset tracker ids and crossing counters."""
        if self.tracker is not None:
            self.tracker.reset()
        if self.crossing_detector is not None:
            self.crossing_detector.reset()
        logging.info("Counting reset")

    @property
    def is_counting_active(self) -> bool:
        return self._counting_active

    def process(self, detections: Sequence[Detection]) -> FrameResult:
        """Run one frame through tracker then crossing detector."""
        if not self._counting_active or self.tracker is None or self.crossing_detector is None:
            return FrameResult(detections=detections)

        tracked_objects = self.tracker.update(detections)
        new_crossings = self.crossing_detector.update(tracked_objects)

        for track_id in new_crossings:
            logging.info(f"Object {track_id} crossed the counting line")

        return FrameResult(
            detections=detections,
            tracked_objects=tracked_objects,
            new_crossings=new_crossings,
        )

    def get_crossing_stats(self) -> Dict[str, int]:
        """Current counters, or zeros before counting has started."""
        if self.crossing_detector is None:
            stats = {"total": 0}
            stats.update({c: 0 for c in CATEGORY_PATTERNS})
            return stats
        return self.crossing_detector.get_crossing_stats()
