# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import math

from ..core import error as lg_error
from ..core import types as lt
from ..core.arc_geometry import lower_path
from .insideness_algorithm import flatten_segments, point_in_path, point_in_stroke
from .matrix import matrix_inverse, transform_point


def _transform_segment(m, elem):
    if isinstance(elem, lt.MoveTo):
        return lt.MoveTo(*transform_point(m, elem.x, elem.y))
    if isinstance(elem, lt.LineTo):
        return lt.LineTo(*transform_point(m, elem.x, elem.y))
    if isinstance(elem, lt.CubicTo):
        return lt.CubicTo(*transform_point(m, elem.cp1x, elem.cp1y),
                          *transform_point(m, elem.cp2x, elem.cp2y),
                          *transform_point(m, elem.x, elem.y))
    return elem


def device_segments(path, m) -> list:
    """Lower ``path`` and map it through matrix ``m`` into device space."""
    return [_transform_segment(m, elem) for elem in lower_path(path)]


def is_point_in_path(ctxt, x, y, fill_rule: str = lt.FILL_RULE_NON_ZERO) -> bool:
    """
    **is_point_in_path**(x, y, fill_rule="nonzero")


    reports whether the device point (x, y) lies inside the current path as
    it would be filled with ``fill_rule``. The path is mapped through the
    current transform and its curves are flattened before the test. The
    current path is not consumed.

    **See Also**:   **is_point_in_stroke**, **fill**
    """
    lg_error.check_tag("fill_rule", fill_rule, lt.FILL_RULES)
    if ctxt.path.is_empty or not (math.isfinite(x) and math.isfinite(y)):
        return False

    segments = device_segments(ctxt.path.path, ctxt.gstate.transform)
    polylines = flatten_segments(segments, lt.FLATNESS)
    return point_in_path(polylines, x, y, fill_rule == lt.FILL_RULE_NON_ZERO)


def is_point_in_stroke(ctxt, x, y) -> bool:
    """
    **is_point_in_stroke**(x, y)


    reports whether the device point (x, y) lies within half the line width
    of the current path. The point is mapped back into user space, so a
    singular transform never hits. Caps and joins are approximated by the
    distance test.
    """
    if ctxt.path.is_empty or not (math.isfinite(x) and math.isfinite(y)):
        return False

    inverse = matrix_inverse(ctxt.gstate.transform)
    if inverse is None:
        return False
    ux, uy = transform_point(inverse, x, y)

    # keep the flattening error at FLATNESS device units
    a, b, c, d, _, _ = ctxt.gstate.transform
    scale = math.sqrt(abs(a * d - b * c)) or 1.0
    polylines = flatten_segments(lower_path(ctxt.path.path), lt.FLATNESS / scale)
    return point_in_stroke(polylines, ux, uy, ctxt.gstate.line_width / 2.0)
