# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import math

from ..core import error as lg_error
from ..core import types as lt


def _finite(*values) -> bool:
    return all(math.isfinite(v) for v in values)


def fill(ctxt, fill_rule: str = lt.FILL_RULE_NON_ZERO) -> None:
    """
    **fill**(fill_rule="nonzero")


    paints the area enclosed by the current path with the current fill
    style. Each subpath is implicitly closed. The inside of the path is
    determined by ``fill_rule``, either "nonzero" or "evenodd".

    **fill** consumes the current path: afterwards the path is empty and there
    is no current point. With an empty path nothing is emitted.

    **Errors**:     **invalidvalue** for an unknown fill rule, plus anything
                    the renderer raises
    **See Also**:   **stroke**, **clip**, **fill_rect**
    """
    lg_error.check_tag("fill_rule", fill_rule, lt.FILL_RULES)
    if ctxt.path.is_empty:
        return

    path = ctxt.path.consume()
    ctxt.display_list_builder.add_graphics_operation(
        lt.FillPath(path, fill_rule, ctxt.gstate.copy()))


def stroke(ctxt) -> None:
    """
    **stroke**()


    paints a line along the current path using the line width, cap, join,
    miter limit and dash pattern of the current graphics state. The line
    width and dash lengths are in user space and are transformed with the
    path by the renderer.

    Like **fill**, **stroke** consumes the current path and is a no-op on an
    empty one.

    **See Also**:   **fill**, **stroke_rect**, **set_line_dash**
    """
    if ctxt.path.is_empty:
        return

    path = ctxt.path.consume()
    ctxt.display_list_builder.add_graphics_operation(
        lt.StrokePath(path, ctxt.gstate.copy()))


def fill_rect(ctxt, x, y, width, height) -> None:
    """
    **fill_rect**(x, y, width, height)


    paints a rectangle with the fill style without touching the current path.
    """
    if not _finite(x, y, width, height) or width == 0 or height == 0:
        return
    ctxt.display_list_builder.add_graphics_operation(
        lt.FillRect(float(x), float(y), float(width), float(height), ctxt.gstate.copy()))


def stroke_rect(ctxt, x, y, width, height) -> None:
    if not _finite(x, y, width, height) or (width == 0 and height == 0):
        return
    ctxt.display_list_builder.add_graphics_operation(
        lt.StrokeRect(float(x), float(y), float(width), float(height), ctxt.gstate.copy()))


def clear_rect(ctxt, x, y, width, height) -> None:
    """
    **clear_rect**(x, y, width, height)


    erases the rectangle to transparent black. The transform and clip apply;
    alpha, compositing and shadows do not.
    """
    if not _finite(x, y, width, height):
        return
    ctxt.display_list_builder.add_graphics_operation(
        lt.ClearRect(float(x), float(y), float(width), float(height), ctxt.gstate.copy()))
