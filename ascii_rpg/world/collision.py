"""
Axis-aligned box helpers shared by movement and encounter detection.
"""

from __future__ import annotations

from typing import Iterable

Box = tuple[float, float, float, float]


def centered_box(x: float, y: float, size: float) -> Box:
    """Square box of side size centred on (x, y) as (left, top, right, bottom)."""
    half = size / 2
    return (x - half, y - half, x + half, y + half)


def boxes_overlap(a: Box, b: Box) -> bool:
    """True if the boxes share area; touching edges do not count."""
    return a[0] < b[2] and a[2] > b[0] and a[1] < b[3] and a[3] > b[1]


def overlaps_any(box: Box, centres: Iterable[tuple[float, float]], size: float) -> bool:
    """True if box overlaps any tile of the given size centred at one of centres."""
    return any(boxes_overlap(box, centered_box(x, y, size)) for x, y in centres)
