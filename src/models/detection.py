"""
Detection models for per-frame detector output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """
    A bounding box in the detector's 2D coordinate space.

    Attributes:
        left: Left edge x coordinate.
        top: Top edge y coordinate.
        right: Right edge x coordinate.
        bottom: Bottom edge y coordinate.
    """
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return as (left, top, right, bottom) tuple."""
        return (self.left, self.top, self.right, self.bottom)

    @classmethod
    def from_tuple(cls, t: Sequence[float]) -> "BoundingBox":
        """Create from (left, top, right, bottom) tuple."""
        return cls(left=float(t[0]), top=float(t[1]), right=float(t[2]), bottom=float(t[3]))


@dataclass(frozen=True)
class Category:
    """Classification label and confidence attached to a detection."""
    label: str
    confidence: float = 1.0


@dataclass(frozen=True)
class Detection:
    """
    A single detection produced by the upstream inference stage.

    Detections are read-only to the tracking engine.

    Attributes:
        bbox: Bounding box in frame coordinates.
        category: Label and confidence score.
    """
    bbox: BoundingBox
    category: Category

    @property
    def label(self) -> str:
        return self.category.label

    @property
    def confidence(self) -> float:
        return self.category.confidence

    @property
    def center(self) -> Tuple[float, float]:
        return self.bbox.center

    @classmethod
    def from_ltrb(
        cls,
        left: float,
        top: float,
        right: float,
        bottom: float,
        label: str = "",
        confidence: float = 1.0,
    ) -> "Detection":
        """Create Detection from left, top, right, bottom coordinates."""
        return cls(
            bbox=BoundingBox(left=left, top=top, right=right, bottom=bottom),
            category=Category(label=label, confidence=confidence),
        )

    @classmethod
    def from_dict(cls, d: dict) -> "Detection":
        """
        Adapter: Create from a {"bbox": [l, t, r, b], "label": ..., "confidence": ...} mapping.
        """
        return cls(
            bbox=BoundingBox.from_tuple(d["bbox"]),
            category=Category(
                label=str(d.get("label", "")),
                confidence=float(d.get("confidence", 1.0)),
            ),
        )

    @classmethod
    def from_numpy_row(cls, row: np.ndarray, label: str = "") -> "Detection":
        """
        Adapter: Convert from numpy array row [left, top, right, bottom, confidence?] to Detection.
        """
        return cls(
            bbox=BoundingBox.from_tuple(row[:4]),
            category=Category(
                label=label,
                confidence=float(row[4]) if len(row) > 4 else 1.0,
            ),
        )


def detections_from_numpy(arr: np.ndarray, labels: Sequence[str] = ()) -> List[Detection]:
    """
    Adapter: Convert numpy array of detections to list of Detection objects.

    Args:
        arr: Array of shape (N, 4+) where each row is [left, top, right, bottom, ...].
        labels: Optional per-row labels, matched by position.
    """
    if arr is None or len(arr) == 0:
        return []
    return [
        Detection.from_numpy_row(row, labels[i] if i < len(labels) else "")
        for i, row in enumerate(arr)
    ]
