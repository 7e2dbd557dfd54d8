"""
Line crossing detection (single line).

Counts tracked objects whose latest motion segment carries them from one
side of a counting line to the other. Each counted id is held under a
cooldown so jitter around the line does not produce repeat counts, and
every crossing is attributed to a category derived from its label.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .categories import CATEGORY_PATTERNS, classify_label
from .geometry import Point, segments_intersect, side_of_line


# Window after a counted crossing during which the same id is ignored
CROSSING_COOLDOWN_MS = 1000


class LineCrossingDetector:
    """
    Detects and counts crossings of a single counting line.

    The detector consumes the tracker's per-frame snapshots and never
    modifies them. It keeps, per track id, the side of the line the object
    last occupied and, for recently counted ids, the time of the crossing.

    A zero-length line (start == end) is accepted: no point ever has a
    defined side, so no crossing is ever reported.

    Instances are not thread-safe; call `update()` once per frame, after the
    tracker, from the same owner.
    """

    def __init__(
        self,
        start: Point,
        end: Point,
        cooldown_ms: int = CROSSING_COOLDOWN_MS,
        clock: Callable[[], float] = time.time,
    ):
        self._line_start: Point = (float(start[0]), float(start[1]))
        self._line_end: Point = (float(end[0]), float(end[1]))
        self._cooldown_s = cooldown_ms / 1000.0
        self._clock = clock

        self._total_crossings = 0
        self._category_crossings: Dict[str, int] = {c: 0 for c in CATEGORY_PATTERNS}
        self._recently_crossed: Dict[int, float] = {}
        self._last_side: Dict[int, bool] = {}

    @property
    def line_start(self) -> Point:
        return self._line_start

    @property
    def line_end(self) -> Point:
        return self._line_end

    @property
    def cooldown_ms(self) -> int:
        return int(round(self._cooldown_s * 1000))

    @property
    def total_crossings(self) -> int:
        return self._total_crossings

    @property
    def ripe_crossings(self) -> int:
        return self._category_crossings["ripe"]

    @property
    def unripe_crossings(self) -> int:
        return self._category_crossings["unripe"]

    def get_category_count(self, category: str) -> int:
        return self._category_crossings.get(category, 0)

    def get_crossing_stats(self) -> Dict[str, int]:
        """Counter snapshot: total plus one entry per category."""
        stats = {"total": self._total_crossings}
        stats.update(self._category_crossings)
        return stats

    def get_lines(self) -> List[Tuple[Point, Point]]:
        """Get the counting line for visualization."""
        return [(self._line_start, self._line_end)]

    def is_under_cooldown(self, track_id: int) -> bool:
        return track_id in self._recently_crossed

    def last_known_side(self, track_id: int) -> Optional[bool]:
        return self._last_side.get(track_id)

    def update(self, tracked_objects: Sequence[Any]) -> List[int]:
        """
        Process one frame of tracks and detect line crossings.

        Args:
            tracked_objects: Track snapshots with track_id, centroid,
                             position_history and detection attributes.

        Returns:
            Ids that crossed the line in this frame.
        """
        new_crossings: List[int] = []
        now = self._clock()

        # Cooldown entries expire by time only, not when the id leaves the frame.
        expired = [
            track_id for track_id, crossed_at in self._recently_crossed.items()
            if now - crossed_at > self._cooldown_s
        ]
        for track_id in expired:
            del self._recently_crossed[track_id]

        for obj in tracked_objects:
            track_id = obj.track_id

            if track_id in self._recently_crossed:
                continue

            history = obj.position_history
            if len(history) < 2:
                self._last_side[track_id] = self._side(obj.centroid)
                continue

            prev = history[-2]
            curr = history[-1]

            if segments_intersect(prev, curr, self._line_start, self._line_end):
                was_side = self._last_side.get(track_id, self._side(prev))
                is_side = self._side(curr)

                if was_side != is_side:
                    self._record_crossing(obj, now)
                    new_crossings.append(track_id)

            self._last_side[track_id] = self._side(curr)

        tracked_ids = {obj.track_id for obj in tracked_objects}
        for track_id in [i for i in self._last_side if i not in tracked_ids]:
            del self._last_side[track_id]

        return new_crossings

    def _side(self, point: Point) -> bool:
        return side_of_line(point, self._line_start, self._line_end)

    def _record_crossing(self, obj: Any, now: float) -> None:
        self._total_crossings += 1

        label = obj.detection.category.label
        category = classify_label(label)
        if category is not None:
            self._category_crossings[category] += 1

        self._recently_crossed[obj.track_id] = now
        logging.debug(
            f"Track {obj.track_id} crossed line (label={label!r}, category={category}, "
            f"total={self._total_crossings})"
        )

    def set_line(self, start: Point, end: Point) -> None:
        """Replace the counting line; counters are kept."""
        self._line_start = (float(start[0]), float(start[1]))
        self._line_end = (float(end[0]), float(end[1]))

    def reset(self) -> None:
        """Zero all counters and forget per-track state. The line is kept."""
        self._total_crossings = 0
        for category in self._category_crossings:
            self._category_crossings[category] = 0
        self._recently_crossed.clear()
        self._last_side.clear()


def create_line_crossing_detector_from_config(
    counting_cfg: Dict[str, Any],
    frame_width: int,
    frame_height: int,
    clock: Callable[[], float] = time.time,
) -> LineCrossingDetector:
    """
    Factory function to create a LineCrossingDetector from config dict.

    Args:
        counting_cfg: Counting config from YAML.
        frame_width: Frame width for ratio-to-pixel conversion.
        frame_height: Frame height for ratio-to-pixel conversion.
        clock: Time source (seconds) for cooldown bookkeeping.
    """
    from models.config import CountingConfig
    from .utils import compute_counting_line

    config = CountingConfig.from_dict(counting_cfg or {})
    start, end = compute_counting_line(config.line, frame_width, frame_height)

    return LineCrossingDetector(start, end, cooldown_ms=config.cooldown_ms, clock=clock)
