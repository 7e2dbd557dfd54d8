"""
Planar geometry helpers for line crossing detection.
"""

from __future__ import annotations

from typing import Tuple

Point = Tuple[float, float]


def _orientation(a: Point, b: Point, p: Point) -> float:
    """
    Signed area of the triangle (a, b, p).

    Zero means the three points are collinear; the sign tells which side of
    a->b the point p lies on.
    """
    return (p[0] - a[0]) * (b[1] - a[1]) - (b[0] - a[0]) * (p[1] - a[1])


def _on_segment(a: Point, p: Point, b: Point) -> bool:
    """Check whether p lies inside the bounding box of segment a->b (inclusive)."""
    return (
        min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
        and min(a[1], b[1]) <= p[1] <= max(a[1], b[1])
    )


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """
    Check if segment p1->p2 intersects segment p3->p4.

    Proper crossings (strictly opposite orientations on both segments) and
    touching/collinear contacts both count as intersecting.
    """
    d1 = _orientation(p3, p4, p1)
    d2 = _orientation(p3, p4, p2)
    d3 = _orientation(p1, p2, p3)
    d4 = _orientation(p1, p2, p4)

    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True

    if d1 == 0 and _on_segment(p3, p1, p4):
        return True
    if d2 == 0 and _on_segment(p3, p2, p4):
        return True
    if d3 == 0 and _on_segment(p1, p3, p2):
        return True
    if d4 == 0 and _on_segment(p1, p4, p2):
        return True

    return False


def side_of_line(p: Point, start: Point, end: Point) -> bool:
    """
    Which half-plane of start->end the point occupies.

    Points exactly on the line (and every point, for a zero-length line)
    report False.
    """
    return _orientation(start, end, p) > 0
