"""
Counting utilities.

Shared helpers for building counting lines from configuration.
"""

from __future__ import annotations

from typing import List, Tuple, Union


CountingLineConfig = Union[float, int, List[List[float]]]


def compute_counting_line(
    counting_config: CountingLineConfig,
    frame_width: int,
    frame_height: int
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Convert config-based line definition into frame coordinates.

    Args:
        counting_config: Either a number (X ratio for a vertical line spanning
                         the frame height) or [[x1,y1],[x2,y2]] ratios for an
                         arbitrary line.
        frame_width: Width of the frame in pixels.
        frame_height: Height of the frame in pixels.

    Returns:
        (start, end) points of the line.
    """
    if isinstance(counting_config, (int, float)):
        line_x = frame_width * float(counting_config)
        return (line_x, 0.0), (line_x, float(frame_height))

    p1 = (counting_config[0][0] * frame_width, counting_config[0][1] * frame_height)
    p2 = (counting_config[1][0] * frame_width, counting_config[1][1] * frame_height)
    return (float(p1[0]), float(p1[1])), (float(p2[0]), float(p2[1]))
