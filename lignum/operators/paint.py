# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from ..core import types as lt


def set_fill_style(ctxt, paint) -> None:
    """
    **fill_style** = paint


    sets the paint used by **fill**, **fill_rect** and **fill_text**: a color
    string, a Color, a Gradient or a Pattern.
    """
    ctxt.gstate.fill_style = lt.as_paint(paint)


def set_stroke_style(ctxt, paint) -> None:
    ctxt.gstate.stroke_style = lt.as_paint(paint)


def create_linear_gradient(ctxt, x0, y0, x1, y1) -> lt.Gradient:
    """
    **create_linear_gradient**(x0, y0, x1, y1)


    returns a gradient running along the line from (x0, y0) to (x1, y1).
    Color stops are added with **add_color_stop** and keep their order.

    **See Also**:   **create_radial_gradient**, **create_pattern**
    """
    return lt.Gradient(lt.LinearGradientKind(float(x0), float(y0), float(x1), float(y1)))


def create_radial_gradient(ctxt, x0, y0, r0, x1, y1, r1) -> lt.Gradient:
    """
    **create_radial_gradient**(x0, y0, r0, x1, y1, r1)


    returns a gradient between the start circle (x0, y0, r0) and the end
    circle (x1, y1, r1).
    """
    return lt.Gradient(lt.RadialGradientKind(float(x0), float(y0), float(r0),
                                             float(x1), float(y1), float(r1)))


def create_pattern(ctxt, image, repetition=lt.REPEAT) -> lt.Pattern:
    return lt.Pattern(image, repetition)
