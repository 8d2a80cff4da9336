"""
Wheel Geometry Helpers

Angles are in degrees. Segment 0 starts at -90° (the top of the wheel)
and segments proceed clockwise in list order:

    segment i owns [i*w - 90, (i+1)*w - 90)  (mod 360),  w = 360 / N

The indicator sits at a fixed bearing. Rotating the wheel clockwise by R
is the same as moving the indicator counter-clockwise by R in wheel-local
coordinates, so the wheel-local angle under the indicator is 360 - R.
"""

import math
from typing import Tuple

FULL_TURN = 360.0
SEGMENT_ORIGIN = -90.0


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 360).

    Float modulo of a tiny negative number can return exactly 360.0,
    which is folded back to 0.0.
    """
    wrapped = ((angle % FULL_TURN) + FULL_TURN) % FULL_TURN
    if wrapped >= FULL_TURN:
        return 0.0
    return wrapped


def slice_width(count: int) -> float:
    """Angular width of one segment for a wheel of ``count`` segments."""
    if count <= 0:
        raise ValueError(f"Segment count must be positive, got {count}")
    return FULL_TURN / count


def slice_bounds(index: int, count: int) -> Tuple[float, float]:
    """Normalized (start, end) of segment ``index``; start > end on wraparound."""
    width = slice_width(count)
    start = normalize_angle(index * width + SEGMENT_ORIGIN)
    # The last segment ends exactly where segment 0 starts
    end = normalize_angle(((index + 1) % count) * width + SEGMENT_ORIGIN)
    return start, end


def slice_center(index: int, count: int) -> float:
    """Normalized center angle of segment ``index``."""
    width = slice_width(count)
    return normalize_angle(index * width + SEGMENT_ORIGIN + width / 2)


def pointer_angle(rotation: float) -> float:
    """Wheel-local angle under the indicator for a cumulative rotation."""
    return normalize_angle(FULL_TURN - normalize_angle(rotation))


def in_slice(angle: float, start: float, end: float) -> bool:
    """Half-open containment test that handles the 0°/360° crossing."""
    if start < end:
        return start <= angle < end
    return angle >= start or angle < end


def circular_distance(a: float, b: float) -> float:
    """Shortest angular distance between two angles, in [0, 180]."""
    d = abs(a - b) % FULL_TURN
    return min(d, FULL_TURN - d)


def is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False
