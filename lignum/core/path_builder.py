# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Path construction for the drawing context.

The PathBuilder accumulates the primitives of the current path and tracks the
current point and the start of the current subpath. Every drawing primitive
issued with no current point first synthesizes move_to(0, 0). Terminal
operations take the accumulated path out with consume().
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

from . import arc_geometry
from .types.graphics import (
    Arc, ClosePath, CubicTo, Ellipse, LineTo, MoveTo, Path, QuadraticTo,
    Rect, RoundRect,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]


class PathBuilder:
    def __init__(self) -> None:
        self._path = Path()
        self.current_point: Optional[Tuple[float, float]] = None
        self.subpath_start: Optional[Tuple[float, float]] = None

    @property
    def path(self) -> Path:
        """A copy of the accumulated primitives."""
        return Path(self._path)

    @property
    def is_empty(self) -> bool:
        return not self._path

    def __len__(self) -> int:
        return len(self._path)

    def _setcurrentpoint(self, x: Number, y: Number) -> None:
        # the current point is always cast to float
        self.current_point = (float(x), float(y))

    def _ensure_subpath(self) -> None:
        if self.current_point is None:
            self.move_to(0.0, 0.0)

    def begin_path(self) -> None:
        self._path = Path()
        self.current_point = None
        self.subpath_start = None

    def consume(self) -> Path:
        """Move the accumulated primitives out, leaving an empty builder."""
        path = self._path
        self.begin_path()
        return path

    def move_to(self, x: Number, y: Number) -> None:
        self._path.append(MoveTo(float(x), float(y)))
        self._setcurrentpoint(x, y)
        self.subpath_start = self.current_point

    def line_to(self, x: Number, y: Number) -> None:
        self._ensure_subpath()
        self._path.append(LineTo(float(x), float(y)))
        self._setcurrentpoint(x, y)

    def bezier_curve_to(self, cp1x, cp1y, cp2x, cp2y, x, y) -> None:
        self._ensure_subpath()
        self._path.append(CubicTo(float(cp1x), float(cp1y), float(cp2x),
                                  float(cp2y), float(x), float(y)))
        self._setcurrentpoint(x, y)

    def quadratic_curve_to(self, cpx, cpy, x, y) -> None:
        self._ensure_subpath()
        self._path.append(QuadraticTo(float(cpx), float(cpy), float(x), float(y)))
        self._setcurrentpoint(x, y)

    def arc(self, x, y, radius, start_angle, end_angle, ccw: bool = False) -> None:
        """
        Append a circular arc verbatim.

        The current point moves to the arc's end point. Zero, negative or NaN
        radii are stored as given; renderers decide what to do with them. A
        non-finite end angle leaves a NaN current point.
        """
        self._ensure_subpath()
        self._path.append(Arc(float(x), float(y), float(radius), float(start_angle),
                              float(end_angle), bool(ccw)))
        self._setcurrentpoint(*arc_geometry.ellipse_point(
            float(x), float(y), float(radius), float(radius), 0.0, float(end_angle)))

    def arc_to(self, x1, y1, x2, y2, radius) -> None:
        """
        Round the corner at (x1, y1) between the current point and (x2, y2).

        Degenerate requests become a single line_to(x1, y1). Otherwise a line
        to the first tangent point is followed by the tangent arc, and the
        current point ends on the second tangent point.
        """
        self._ensure_subpath()
        x0, y0 = self.current_point
        tangent = arc_geometry.tangent_arc(x0, y0, float(x1), float(y1),
                                           float(x2), float(y2), float(radius))
        if tangent is None:
            logger.debug("arc_to degenerates to a line to (%s, %s)", x1, y1)
            self.line_to(x1, y1)
            return

        self._path.append(LineTo(tangent.t1x, tangent.t1y))
        self._path.append(Arc(tangent.cx, tangent.cy, tangent.radius,
                              tangent.start_angle, tangent.end_angle, tangent.ccw))
        self._setcurrentpoint(tangent.t2x, tangent.t2y)

    def ellipse(self, x, y, radius_x, radius_y, rotation, start_angle, end_angle,
                ccw: bool = False) -> None:
        self._ensure_subpath()
        self._path.append(Ellipse(float(x), float(y), float(radius_x), float(radius_y),
                                  float(rotation), float(start_angle), float(end_angle),
                                  bool(ccw)))
        self._setcurrentpoint(*arc_geometry.ellipse_point(
            x, y, radius_x, radius_y, rotation, end_angle))

    def rect(self, x, y, width, height) -> None:
        self._path.append(Rect(float(x), float(y), float(width), float(height)))
        self._setcurrentpoint(x, y)
        self.subpath_start = self.current_point

    def round_rect(self, x, y, width, height, radii=None) -> None:
        corners = tuple(float(r) for r in arc_geometry.expand_round_rect_radii(radii))
        self._path.append(RoundRect(float(x), float(y), float(width), float(height), corners))
        self._setcurrentpoint(x, y)
        self.subpath_start = self.current_point

    def close_path(self) -> None:
        if self.subpath_start is None:
            return
        self._path.append(ClosePath())
        self.current_point = self.subpath_start
