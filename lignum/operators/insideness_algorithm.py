# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Point-in-path insideness testing algorithm.

Implements ray-casting for point-in-fill tests (winding number and even-odd
rules) and a distance test for point-in-stroke. Operates on flattened
polylines: lists of (x, y) points, one list per subpath.
"""

from __future__ import annotations

import math

from ..core.arc_geometry import flatten_cubic
from ..core.types.graphics import ClosePath, CubicTo, LineTo, MoveTo


def flatten_segments(segments, flatness):
    """Flatten lowered segments into polylines.

    Args:
        segments: MoveTo/LineTo/CubicTo/ClosePath items (see lower_path).
        flatness: Curve flattening tolerance.

    Returns:
        List of (points, closed) tuples, one per subpath.
    """
    polylines = []
    points = None
    cx = cy = 0.0  # current point

    for elem in segments:
        if isinstance(elem, MoveTo):
            points = [(elem.x, elem.y)]
            polylines.append([points, False])
            cx, cy = elem.x, elem.y
        elif isinstance(elem, LineTo):
            points.append((elem.x, elem.y))
            cx, cy = elem.x, elem.y
        elif isinstance(elem, CubicTo):
            points.extend(flatten_cubic(cx, cy, elem, flatness))
            cx, cy = elem.x, elem.y
        elif isinstance(elem, ClosePath):
            if polylines:
                polylines[-1][1] = True
                cx, cy = points[0]
                # drawing after a close starts a new subpath at the same point
                points = [points[0]]
                polylines.append([points, False])

    return [(pts, closed) for pts, closed in polylines if len(pts) > 1]


def _edges(points, closed):
    for i in range(len(points) - 1):
        yield points[i][0], points[i][1], points[i + 1][0], points[i + 1][1]
    if closed and points[0] != points[-1]:
        yield points[-1][0], points[-1][1], points[0][0], points[0][1]


def distance_to_segment(px, py, x0, y0, x1, y1) -> float:
    dx = x1 - x0
    dy = y1 - y0
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(px - x0, py - y0)
    t = max(0.0, min(1.0, ((px - x0) * dx + (py - y0) * dy) / length_sq))
    return math.hypot(px - (x0 + t * dx), py - (y0 + t * dy))


def point_in_path(polylines, px, py, use_winding):
    """Ray-casting point-in-path test.

    Casts a horizontal ray from (px, py) towards +x and counts crossings
    with path segments. Every subpath is implicitly closed. Points lying on
    an edge count as inside.

    Args:
        polylines: Output of flatten_segments, in the same space as the point.
        px, py: Test point.
        use_winding: True for nonzero winding rule, False for even-odd.

    Returns:
        True if the point is inside the path.
    """
    winding = 0
    crossings = 0

    for points, _closed in polylines:
        for x0, y0, x1, y1 in _edges(points, True):
            if distance_to_segment(px, py, x0, y0, x1, y1) < 1e-9:
                return True

            # Standard ray-casting crossing test: count a crossing when
            # exactly one endpoint is strictly below py.  This avoids
            # double-counting shared vertices and skips horizontal segments.
            if (y0 < py) == (y1 < py):
                continue

            # Compute x-intercept of segment with horizontal line y = py
            t = (py - y0) / (y1 - y0)
            x_intercept = x0 + t * (x1 - x0)

            if x_intercept > px:
                crossings += 1
                if use_winding:
                    if y1 > y0:
                        winding += 1  # downward crossing (y grows downwards)
                    else:
                        winding -= 1  # upward crossing

    if use_winding:
        return winding != 0
    else:
        return (crossings % 2) == 1


def point_in_stroke(polylines, px, py, half_width):
    """True if (px, py) lies within ``half_width`` of any stroked segment."""
    for points, closed in polylines:
        for x0, y0, x1, y1 in _edges(points, closed):
            if distance_to_segment(px, py, x0, y0, x1, y1) <= half_width:
                return True
    return False
