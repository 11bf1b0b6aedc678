# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Arc geometry - converts high-level arc requests into primitive segments.

Pure functions with no context state:
1. Circular and elliptical arcs to cubic Bezier segments (steps of at most 90°)
2. Circular arcs to minor SVG-style arc segments
3. Tangent-arc joins for arc_to, with the degenerate cases resolved to None
4. Rounded rectangle radius expansion, clamping and flattening
5. Lowering of a whole Path to MoveTo/LineTo/CubicTo/ClosePath
6. Cubic flattening for hit testing

Angles are in radians, y axis pointing down, positive sweep increasing the
angle (clockwise on screen).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Optional

from .types.constants import (
    ARC_SWEEP_EPSILON, COLLINEAR_EPSILON, POINT_EPSILON,
)
from .types.graphics import (
    Arc, ArcTo, ClosePath, CubicTo, Ellipse, LineTo, MoveTo, Path,
    QuadraticTo, Rect, RoundRect,
)

logger = logging.getLogger(__name__)

HALF_PI = math.pi / 2
TWO_PI = math.pi * 2


@dataclass(frozen=True)
class TangentArc:
    """Result of the arc_to construction."""
    cx: float
    cy: float
    radius: float
    t1x: float
    t1y: float
    t2x: float
    t2y: float
    start_angle: float
    end_angle: float
    ccw: bool


@dataclass(frozen=True)
class ArcSegment:
    """A minor elliptical arc ending at (x, y), in SVG 'A' command terms."""
    rx: float
    ry: float
    rotation: float  # x-axis rotation in degrees
    large_arc: int
    sweep: int
    x: float
    y: float


def acute_arc_to_bezier(start: float, size: float):
    """
    Cubic control points for a unit-circle arc of at most 90 degrees.

    ``size`` may be negative for an arc running towards decreasing angles.
    Returns (p0x, p0y, p1x, p1y, p2x, p2y, p3x, p3y).
    """
    # Evaluate constants.
    alpha = size / 2.0

    cos_alpha = math.cos(alpha)
    sin_alpha = math.sin(alpha)

    cot_alpha = 1.0 / math.tan(alpha)
    phi = start + alpha  # This is how far the arc needs to be rotated.

    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    lmbda = (4.0 - cos_alpha) / 3.0
    mu = sin_alpha + (cos_alpha - lmbda) * cot_alpha

    # Return rotated waypoints.
    return (
        math.cos(start),  # p0.x
        math.sin(start),  # p0.y
        lmbda * cos_phi + mu * sin_phi,  # p1.x
        lmbda * sin_phi - mu * cos_phi,  # p1.y
        lmbda * cos_phi - mu * sin_phi,  # p2.x
        lmbda * sin_phi + mu * cos_phi,  # p2.y
        math.cos(start + size),  # p3.x
        math.sin(start + size),  # p3.y
    )


def normalize_sweep(start: float, end: float, ccw: bool) -> float:
    """
    Signed sweep of a canvas arc from ``start`` to ``end``.

    A clockwise request (ccw False) sweeps forwards by (end - start) mod 2π,
    or a full turn when end - start >= 2π. A counter-clockwise request is the
    mirror image. Non-finite angles give a zero sweep.
    """
    if not (math.isfinite(start) and math.isfinite(end)):
        return 0.0
    if not ccw:
        if end - start >= TWO_PI:
            return TWO_PI
        return math.fmod(end - start, TWO_PI) % TWO_PI
    if start - end >= TWO_PI:
        return -TWO_PI
    return -(math.fmod(start - end, TWO_PI) % TWO_PI)


def _split_sweep(sweep: float, max_step: float):
    count = max(1, math.ceil(abs(sweep) / max_step - 1e-9))
    return count, sweep / count


def unit_vector(angle) -> tuple:
    """(cos, sin) of ``angle``; NaN components for a non-finite angle."""
    if not math.isfinite(angle):
        return math.nan, math.nan
    return math.cos(angle), math.sin(angle)


def _ellipse_mapper(cx, cy, rx, ry, rotation):
    cos_r, sin_r = unit_vector(rotation)

    def to_user(ux, uy):
        lx = rx * ux
        ly = ry * uy
        return cx + lx * cos_r - ly * sin_r, cy + lx * sin_r + ly * cos_r

    return to_user


def ellipse_point(cx, cy, rx, ry, rotation, angle):
    """Point on a rotated ellipse at parametric ``angle``."""
    return _ellipse_mapper(cx, cy, rx, ry, rotation)(*unit_vector(angle))


def ellipse_to_beziers(cx, cy, rx, ry, rotation, start, end, ccw=False):
    """
    Approximate an elliptical arc with cubic Bezier segments.

    Returns ((x0, y0), curves) where (x0, y0) is the arc start point and
    ``curves`` is a list of CubicTo. Sweeps below ARC_SWEEP_EPSILON produce
    no curves; a non-finite rotation or start angle gives the center and no
    curves.
    """
    if not (math.isfinite(rotation) and math.isfinite(start)):
        return (cx, cy), []
    to_user = _ellipse_mapper(cx, cy, rx, ry, rotation)
    start_point = to_user(math.cos(start), math.sin(start))

    sweep = normalize_sweep(start, end, ccw)
    curves = []
    if abs(sweep) < ARC_SWEEP_EPSILON:
        return start_point, curves

    count, step = _split_sweep(sweep, HALF_PI)
    angle = start
    for _ in range(count):
        _, _, p1x, p1y, p2x, p2y, p3x, p3y = acute_arc_to_bezier(angle, step)
        c1 = to_user(p1x, p1y)
        c2 = to_user(p2x, p2y)
        c3 = to_user(p3x, p3y)
        curves.append(CubicTo(c1[0], c1[1], c2[0], c2[1], c3[0], c3[1]))
        angle += step

    return start_point, curves


def arc_to_beziers(cx, cy, radius, start, end, ccw=False):
    """Circular special case of :func:`ellipse_to_beziers`."""
    return ellipse_to_beziers(cx, cy, radius, radius, 0.0, start, end, ccw)


def arc_to_svg_segments(cx, cy, rx, ry, rotation, start, end, ccw=False):
    """
    Split an arc into minor arc segments of at most 90 degrees.

    Every segment has large_arc 0; the sweep flag is 1 for increasing angles.
    Returns ((x0, y0), segments).
    """
    if not (math.isfinite(rotation) and math.isfinite(start)):
        return (cx, cy), []
    to_user = _ellipse_mapper(cx, cy, rx, ry, rotation)
    start_point = to_user(math.cos(start), math.sin(start))

    sweep = normalize_sweep(start, end, ccw)
    segments = []
    if abs(sweep) < ARC_SWEEP_EPSILON:
        return start_point, segments

    sweep_flag = 1 if sweep > 0 else 0
    rotation_deg = math.degrees(rotation)
    count, step = _split_sweep(sweep, HALF_PI)
    for i in range(1, count + 1):
        angle = start + step * i
        x, y = to_user(math.cos(angle), math.sin(angle))
        segments.append(ArcSegment(abs(rx), abs(ry), rotation_deg, 0, sweep_flag, x, y))

    return start_point, segments


def tangent_arc(x0, y0, x1, y1, x2, y2, radius) -> Optional[TangentArc]:
    """
    Compute the arc_to construction for corner (x1, y1).

    The arc is tangent to the line from (x0, y0) to (x1, y1) and to the line
    from (x1, y1) to (x2, y2).

    Returns None for the degenerate cases, where the caller draws a straight
    line to (x1, y1): zero radius, coincident points, zero-length edges,
    collinear edges.
    """
    r = radius
    if (r == 0
            or (abs(x0 - x1) < POINT_EPSILON and abs(y0 - y1) < POINT_EPSILON)
            or (abs(x1 - x2) < POINT_EPSILON and abs(y1 - y2) < POINT_EPSILON)):
        return None

    # Vectors FROM vertex (x1,y1) TO the other points
    v1x, v1y = x0 - x1, y0 - y1
    v2x, v2y = x2 - x1, y2 - y1
    len1 = math.hypot(v1x, v1y)
    len2 = math.hypot(v2x, v2y)
    if len1 < POINT_EPSILON or len2 < POINT_EPSILON:
        return None

    v1x /= len1
    v1y /= len1
    v2x /= len2
    v2y /= len2

    dot = max(-1.0, min(1.0, v1x * v2x + v1y * v2y))
    if abs(1.0 - dot) < COLLINEAR_EPSILON or abs(1.0 + dot) < COLLINEAR_EPSILON:
        return None

    tan_half = math.tan(math.acos(dot) / 2.0)
    if abs(tan_half) < POINT_EPSILON:
        return None
    dist = r / tan_half

    t1x, t1y = x1 + v1x * dist, y1 + v1y * dist
    t2x, t2y = x1 + v2x * dist, y1 + v2y * dist

    # Cross product picks the side of the first edge the center lies on
    cross = v1x * v2y - v1y * v2x
    if cross < 0:
        nx, ny = v1y, -v1x
    else:
        nx, ny = -v1y, v1x
    cx = t1x + nx * r
    cy = t1y + ny * r

    start_angle = math.atan2(t1y - cy, t1x - cx)
    end_angle = math.atan2(t2y - cy, t2x - cx)

    return TangentArc(cx, cy, r, t1x, t1y, t2x, t2y, start_angle, end_angle, cross > 0)


def expand_round_rect_radii(radii) -> tuple:
    """
    Expand 0 to 4 radii into (top-left, top-right, bottom-right, bottom-left).

    0 values: all zero; 1: all equal; 2: (r0, r1, r0, r1);
    3: (r0, r1, r2, r1); 4 or more: the first four.
    """
    if radii is None:
        values = []
    elif isinstance(radii, Real):
        values = [radii]
    else:
        values = [float(r) for r in radii]

    if len(values) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    if len(values) == 1:
        r = float(values[0])
        return (r, r, r, r)
    if len(values) == 2:
        return (values[0], values[1], values[0], values[1])
    if len(values) == 3:
        return (values[0], values[1], values[2], values[1])
    return tuple(values[:4])


def clamp_round_rect_radii(width, height, radii) -> tuple:
    """Clamp every corner radius to [0, min(|w|, |h|) / 2]."""
    limit = min(abs(width), abs(height)) / 2.0
    # max(0.0, nan) keeps 0.0, so NaN radii collapse to square corners
    return tuple(max(0.0, min(r, limit)) for r in radii)


def _corner(cx, cy, r, start):
    _, _, p1x, p1y, p2x, p2y, p3x, p3y = acute_arc_to_bezier(start, HALF_PI)
    return CubicTo(cx + r * p1x, cy + r * p1y,
                   cx + r * p2x, cy + r * p2y,
                   cx + r * p3x, cy + r * p3y)


def round_rect_to_segments(x, y, width, height, radii) -> list:
    """
    Flatten a rounded rectangle into MoveTo/LineTo/CubicTo/ClosePath.

    Negative width or height mirror the rectangle and its corners.
    """
    tl, tr, br, bl = expand_round_rect_radii(radii)
    if width < 0:
        x, width = x + width, -width
        tl, tr, br, bl = tr, tl, bl, br
    if height < 0:
        y, height = y + height, -height
        tl, tr, br, bl = bl, br, tr, tl
    tl, tr, br, bl = clamp_round_rect_radii(width, height, (tl, tr, br, bl))

    right = x + width
    bottom = y + height
    segments = [MoveTo(x + tl, y), LineTo(right - tr, y)]
    if tr > 0:
        segments.append(_corner(right - tr, y + tr, tr, -HALF_PI))
    segments.append(LineTo(right, bottom - br))
    if br > 0:
        segments.append(_corner(right - br, bottom - br, br, 0.0))
    segments.append(LineTo(x + bl, bottom))
    if bl > 0:
        segments.append(_corner(x + bl, bottom - bl, bl, HALF_PI))
    segments.append(LineTo(x, y + tl))
    if tl > 0:
        segments.append(_corner(x + tl, y + tl, tl, math.pi))
    segments.append(ClosePath())
    return segments


def quadratic_to_cubic(x0, y0, cpx, cpy, x, y) -> CubicTo:
    """Degree-elevate a quadratic segment starting at (x0, y0)."""
    return CubicTo(
        x0 + 2.0 / 3.0 * (cpx - x0), y0 + 2.0 / 3.0 * (cpy - y0),
        x + 2.0 / 3.0 * (cpx - x), y + 2.0 / 3.0 * (cpy - y),
        x, y,
    )


def flatten_cubic(x0, y0, curve: CubicTo, tolerance: float, max_depth: int = 16) -> list:
    """
    Flatten a cubic Bezier curve into line segment end points (excluding p0).

    Measures the perpendicular distance from the control points to the chord;
    when both are within ``tolerance`` the chord is used, otherwise the curve
    is split with de Casteljau's algorithm. ``max_depth`` bounds the
    subdivision so non-finite input terminates.
    """
    points = []
    stack = [(x0, y0, curve.cp1x, curve.cp1y, curve.cp2x, curve.cp2y, curve.x, curve.y, 0)]

    while stack:
        ax, ay, bx, by, cx, cy, dx_, dy_, depth = stack.pop()

        dx = dx_ - ax
        dy = dy_ - ay
        chord_len_sq = dx * dx + dy * dy

        if depth >= max_depth:
            points.append((dx_, dy_))
            continue

        if chord_len_sq < 1e-10:
            flat = max(abs(bx - ax) + abs(by - ay), abs(cx - ax) + abs(cy - ay)) <= tolerance
        else:
            chord_len = math.sqrt(chord_len_sq)
            d1 = abs((bx - ax) * dy - (by - ay) * dx) / chord_len
            d2 = abs((cx - ax) * dy - (cy - ay) * dx) / chord_len
            flat = max(d1, d2) <= tolerance

        if flat:
            points.append((dx_, dy_))
        else:
            abx, aby = (ax + bx) / 2, (ay + by) / 2
            bcx, bcy = (bx + cx) / 2, (by + cy) / 2
            cdx, cdy = (cx + dx_) / 2, (cy + dy_) / 2
            abcx, abcy = (abx + bcx) / 2, (aby + bcy) / 2
            bcdx, bcdy = (bcx + cdx) / 2, (bcy + cdy) / 2
            mx, my = (abcx + bcdx) / 2, (abcy + bcdy) / 2

            # Push second half first so first half is processed next
            stack.append((mx, my, bcdx, bcdy, cdx, cdy, dx_, dy_, depth + 1))
            stack.append((ax, ay, abx, aby, abcx, abcy, mx, my, depth + 1))

    return points


def _usable_radius(*radii) -> bool:
    return all(math.isfinite(r) and r >= 0 for r in radii)


def lower_path(path: Path, native_arcs: bool = False) -> list:
    """
    Lower every primitive of ``path`` to MoveTo/LineTo/CubicTo/ClosePath.

    With ``native_arcs`` circular and elliptical arcs become ArcSegment items
    instead of cubic curves. Rect and RoundRect leave the current point at
    their origin, so a following segment opens a new subpath there. Arcs with
    a negative or non-finite radius contribute only the connecting line to
    their center.
    """
    out = []
    current = None   # current point
    start = None     # subpath start
    pending = None   # origin left behind by rect/round_rect

    def ensure_start(x, y):
        nonlocal current, start, pending
        if pending is not None:
            out.append(MoveTo(*pending))
            current = start = pending
            pending = None
        if current is None:
            out.append(MoveTo(x, y))
            current = start = (x, y)

    def connect(x, y):
        nonlocal current, start, pending
        if current is None and pending is None:
            out.append(MoveTo(x, y))
            current = start = (x, y)
        else:
            ensure_start(x, y)
            out.append(LineTo(x, y))
            current = (x, y)

    def add_arc(cx, cy, rx, ry, rotation, a0, a1, ccw):
        nonlocal current
        if not _usable_radius(rx, ry):
            logger.debug("arc with radius (%s, %s) skipped", rx, ry)
            connect(cx, cy)
            return
        if native_arcs:
            (sx, sy), segments = arc_to_svg_segments(cx, cy, rx, ry, rotation, a0, a1, ccw)
        else:
            (sx, sy), segments = ellipse_to_beziers(cx, cy, rx, ry, rotation, a0, a1, ccw)
        connect(sx, sy)
        out.extend(segments)
        if segments:
            current = (segments[-1].x, segments[-1].y)

    for elem in path:
        if isinstance(elem, MoveTo):
            out.append(elem)
            current = start = (elem.x, elem.y)
            pending = None
        elif isinstance(elem, LineTo):
            connect(elem.x, elem.y)
        elif isinstance(elem, CubicTo):
            ensure_start(elem.cp1x, elem.cp1y)
            out.append(elem)
            current = (elem.x, elem.y)
        elif isinstance(elem, QuadraticTo):
            ensure_start(elem.cpx, elem.cpy)
            out.append(quadratic_to_cubic(current[0], current[1],
                                          elem.cpx, elem.cpy, elem.x, elem.y))
            current = (elem.x, elem.y)
        elif isinstance(elem, Arc):
            add_arc(elem.x, elem.y, elem.radius, elem.radius, 0.0,
                    elem.start_angle, elem.end_angle, elem.ccw)
        elif isinstance(elem, Ellipse):
            add_arc(elem.x, elem.y, elem.radius_x, elem.radius_y, elem.rotation,
                    elem.start_angle, elem.end_angle, elem.ccw)
        elif isinstance(elem, ArcTo):
            ensure_start(elem.x1, elem.y1)
            tangent = tangent_arc(current[0], current[1], elem.x1, elem.y1,
                                  elem.x2, elem.y2, elem.radius)
            if tangent is None:
                connect(elem.x1, elem.y1)
            else:
                # the arc start is the first tangent point, add_arc lines up to it
                add_arc(tangent.cx, tangent.cy, tangent.radius, tangent.radius, 0.0,
                        tangent.start_angle, tangent.end_angle, tangent.ccw)
        elif isinstance(elem, Rect):
            x, y, w, h = elem.x, elem.y, elem.width, elem.height
            out.extend([MoveTo(x, y), LineTo(x + w, y), LineTo(x + w, y + h),
                        LineTo(x, y + h), ClosePath()])
            current = start = None
            pending = (x, y)
        elif isinstance(elem, RoundRect):
            out.extend(round_rect_to_segments(elem.x, elem.y, elem.width,
                                              elem.height, elem.radii))
            current = start = None
            pending = (elem.x, elem.y)
        elif isinstance(elem, ClosePath):
            if start is not None:
                out.append(elem)
                current = start

    return out
