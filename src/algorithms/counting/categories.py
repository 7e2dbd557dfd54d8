"""
Category attribution for counted crossings.
"""

from __future__ import annotations

from typing import Optional, Tuple

# Most specific pattern first: "ripe" is a substring of "unripe".
CATEGORY_PATTERNS: Tuple[str, ...] = ("unripe", "ripe")


def classify_label(label: Optional[str]) -> Optional[str]:
    """
    Map a detector label to a counting category.

    Matching is a case-insensitive substring test in CATEGORY_PATTERNS order.

    Returns:
        The matched category name, or None when no pattern matches.
    """
    if not label:
        return None
    lowered = label.lower()
    for pattern in CATEGORY_PATTERNS:
        if pattern in lowered:
            return pattern
    return None
